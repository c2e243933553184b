"""
API rate limiting and abuse protection.
Prevents API abuse through request throttling; rates come from
``REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"]``.
"""
from rest_framework.throttling import AnonRateThrottle


class APIThrottle(AnonRateThrottle):
    """General API limit per client IP."""
    scope = 'api'


class AuthThrottle(AnonRateThrottle):
    """Stricter limit for login/register attempts."""
    scope = 'auth'


class UploadThrottle(AnonRateThrottle):
    """Limit file upload requests per client IP."""
    scope = 'upload'


class SearchThrottle(AnonRateThrottle):
    """Limit search requests per client IP."""
    scope = 'search'
