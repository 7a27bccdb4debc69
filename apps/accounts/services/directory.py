"""
Directory service.

Looks up users, LDAP groups and distribution lists that can be granted
access to a Responsibility Centre. Group membership is kept on the user as
a list of identifiers. Identifiers containing an "@" are mail
distribution lists, everything else is a security group.
"""

import logging
from typing import List, Optional

from django.contrib.auth import get_user_model
from django.db.models import Q

User = get_user_model()
logger = logging.getLogger(__name__)

DEFAULT_SEARCH_RESULTS = 10
MAX_SEARCH_RESULTS = 50


def _clamp(max_results) -> int:
    try:
        value = int(max_results)
    except (TypeError, ValueError):
        return DEFAULT_SEARCH_RESULTS
    return max(1, min(value, MAX_SEARCH_RESULTS))


def is_distribution_list(identifier: str) -> bool:
    return '@' in identifier


def search_users(*, query: str, max_results=DEFAULT_SEARCH_RESULTS) -> List[dict]:
    """
    Search active users by username, full name or email.

    Returns:
        List of {'identifier', 'display_name', 'email'} dicts sorted by identifier
    """
    query = (query or '').strip()
    if not query:
        return []

    users = (
        User.objects
        .filter(is_active=True)
        .filter(
            Q(username__icontains=query)
            | Q(full_name__icontains=query)
            | Q(email__icontains=query)
        )
        .order_by('username')[:_clamp(max_results)]
    )
    return [
        {
            'identifier': user.username,
            'display_name': user.get_display_name(),
            'email': user.email or '',
        }
        for user in users
    ]


def _known_group_identifiers() -> set:
    from apps.rcs.models import RCAccess, PrincipalType

    identifiers = set()
    for groups in User.objects.values_list('directory_groups', flat=True):
        identifiers.update(str(g) for g in (groups or []) if g)
    identifiers.update(
        RCAccess.objects
        .filter(principal_type__in=[PrincipalType.GROUP, PrincipalType.DISTRIBUTION_LIST])
        .values_list('principal_identifier', flat=True)
    )
    return identifiers


def _search_identifiers(query: str, max_results, *, distribution_lists: bool) -> List[dict]:
    query = (query or '').strip().lower()
    if not query:
        return []

    matches = sorted(
        identifier for identifier in _known_group_identifiers()
        if is_distribution_list(identifier) == distribution_lists and query in identifier.lower()
    )
    return [
        {'identifier': identifier, 'display_name': identifier}
        for identifier in matches[:_clamp(max_results)]
    ]


def search_groups(*, query: str, max_results=DEFAULT_SEARCH_RESULTS) -> List[dict]:
    """Search security group identifiers."""
    return _search_identifiers(query, max_results, distribution_lists=False)


def search_distribution_lists(*, query: str, max_results=DEFAULT_SEARCH_RESULTS) -> List[dict]:
    """Search mail distribution list identifiers."""
    return _search_identifiers(query, max_results, distribution_lists=True)


def find_directory_user(identifier: str) -> Optional[dict]:
    """Exact, case-insensitive user lookup used when granting access."""
    identifier = (identifier or '').strip()
    if not identifier:
        return None
    for entry in search_users(query=identifier, max_results=MAX_SEARCH_RESULTS):
        if entry['identifier'].lower() == identifier.lower():
            return entry
    return None
