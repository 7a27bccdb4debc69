"""
Blocks writes beneath an inactive fiscal year.
"""
import logging
import re

from django.http import JsonResponse

from apps.fiscal_years.models import FiscalYear

logger = logging.getLogger(__name__)

FISCAL_YEAR_PATH = re.compile(r'/fiscal-years/(\d+)(/|$)')
WRITE_METHODS = {'POST', 'PUT', 'PATCH', 'DELETE'}
INACTIVE_MESSAGE = "This fiscal year is inactive and read-only. No changes are allowed."


class InactiveFiscalYearMiddleware:
    """
    Reject mutating requests addressed to an inactive fiscal year with 403.

    The toggle-active endpoint stays reachable so owners can reactivate.
    Unknown fiscal years pass through so the view can answer 404.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if request.method in WRITE_METHODS and self._is_inactive(request.path):
            logger.warning("Blocked %s %s on inactive fiscal year", request.method, request.path)
            return JsonResponse({'error': INACTIVE_MESSAGE}, status=403)
        return self.get_response(request)

    def _is_inactive(self, path):
        if path.rstrip('/').endswith('/toggle-active'):
            return False
        match = FISCAL_YEAR_PATH.search(path)
        if match is None:
            return False
        return FiscalYear.objects.filter(id=int(match.group(1)), active=False).exists()
