import logging
import os

from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger(__name__)

# Mandatory environment variables for production
REQUIRED_PRODUCTION_ENV_VARS = [
    "SECRET_KEY",
    "DATABASE_URL",
    "ALLOWED_HOSTS",
]

THROTTLE_ENV_VARS = [
    "THROTTLE_API",
    "THROTTLE_AUTH",
    "THROTTLE_UPLOAD",
    "THROTTLE_SEARCH",
]

THROTTLE_PERIODS = ("s", "m", "h", "d")


def validate_env():
    """
    Validate critical environment variables for Django settings.
    Runs once per process; subsequent calls are idempotent.
    """
    is_production = os.getenv("PRODUCTION", "false").lower() == "true"

    secret_key = os.getenv("SECRET_KEY")
    if not secret_key:
        if is_production:
            raise ImproperlyConfigured("CRITICAL: SECRET_KEY is required in production.")
        logger.warning("SECRET_KEY not set, using insecure default for development.")

    for var in THROTTLE_ENV_VARS:
        rate = os.getenv(var)
        if rate and not _is_valid_rate(rate):
            error_msg = f"{var} must look like '<count>/<s|m|h|d>', got {rate!r}"
            logger.critical(error_msg)
            raise ImproperlyConfigured(error_msg)

    max_bytes = os.getenv("MAX_REQUEST_BYTES")
    if max_bytes and (not max_bytes.isdigit() or int(max_bytes) <= 0):
        raise ImproperlyConfigured("MAX_REQUEST_BYTES must be a positive integer")

    if is_production:
        missing = [var for var in REQUIRED_PRODUCTION_ENV_VARS if not os.getenv(var)]
        if missing:
            error_msg = f"CRITICAL: Missing required environment variables in production: {', '.join(missing)}"
            logger.critical(error_msg)
            raise ImproperlyConfigured(error_msg)

        if secret_key and (secret_key.startswith("django-insecure") or len(secret_key) < 50):
            error_msg = "CRITICAL: SECRET_KEY must be a long, secure string in production"
            logger.critical(error_msg)
            raise ImproperlyConfigured(error_msg)

    logger.info("Environment validation passed successfully")


def _is_valid_rate(rate: str) -> bool:
    count, _, period = rate.partition("/")
    return count.isdigit() and bool(period) and period[0] in THROTTLE_PERIODS
