"""Health check endpoint for load balancers and monitoring."""

import os
import time
from typing import Any, Dict

from django.conf import settings
from django.http import JsonResponse
from django.utils import timezone

APP_START_TIME = time.time()


def _get_uptime_formatted() -> Dict[str, Any]:
    """Get uptime in human-readable format and raw seconds."""
    uptime_seconds = int(time.time() - APP_START_TIME)
    days, remainder = divmod(uptime_seconds, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, seconds = divmod(remainder, 60)

    parts = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    parts.append(f"{seconds}s")

    return {"seconds": uptime_seconds, "formatted": " ".join(parts)}


def health_check(request):
    environment = "production" if settings.IS_PRODUCTION else "development"
    return JsonResponse({
        "status": "OK",
        "timestamp": timezone.now().isoformat(),
        "uptime": _get_uptime_formatted(),
        "environment": os.getenv("APP_ENV", environment),
        "version": settings.APP_VERSION,
    })
