"""
Responsibility Centre services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and row locks.
"""

from .exceptions import (
    RCServiceError,
    RCNotFoundError,
    RCAccessDeniedError,
    DuplicateRCNameError,
    PermissionNotFoundError,
    DemoRCModificationError,
    PrincipalNotFoundError,
    DuplicateGrantError,
    InvalidPermissionChangeError,
)

from .permissions import (
    get_rc,
    get_effective_access_level,
    get_visible_access_level,
    has_access,
    has_write_access,
    can_edit_content,
    is_owner,
    count_effective_owners,
    require_read_access,
    require_write_access,
    require_owner,
)

from .rc_management import (
    list_user_responsibility_centres,
    create_responsibility_centre,
    get_responsibility_centre,
    update_responsibility_centre,
    delete_responsibility_centre,
    clone_responsibility_centre,
)

from .access_management import (
    get_permissions_for_rc,
    grant_user_access,
    grant_group_access,
    update_permission,
    revoke_access,
)


__all__ = [
    # Exceptions
    'RCServiceError',
    'RCNotFoundError',
    'RCAccessDeniedError',
    'DuplicateRCNameError',
    'PermissionNotFoundError',
    'DemoRCModificationError',
    'PrincipalNotFoundError',
    'DuplicateGrantError',
    'InvalidPermissionChangeError',

    # Permission resolution
    'get_rc',
    'get_effective_access_level',
    'get_visible_access_level',
    'has_access',
    'has_write_access',
    'can_edit_content',
    'is_owner',
    'count_effective_owners',
    'require_read_access',
    'require_write_access',
    'require_owner',

    # RC management
    'list_user_responsibility_centres',
    'create_responsibility_centre',
    'get_responsibility_centre',
    'update_responsibility_centre',
    'delete_responsibility_centre',
    'clone_responsibility_centre',

    # Access management
    'get_permissions_for_rc',
    'grant_user_access',
    'grant_group_access',
    'update_permission',
    'revoke_access',
]
