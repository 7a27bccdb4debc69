"""
Query string helpers for list endpoints.
"""


def int_query_param(request, name):
    """Integer query parameter, or None when absent or malformed."""
    value = request.query_params.get(name)
    if value in (None, ''):
        return None
    try:
        return int(value)
    except ValueError:
        return None
