import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class BookingsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "bookings"

    def ready(self):
        # Rule sets are declared at import time
        from .validation import schemas

        logger.debug("Loaded %d validation rule sets", len(schemas.RULE_SETS))
