import logging
import time

from django.conf import settings

from bookings.validation.errors import ErrorCode, ErrorResponse

logger = logging.getLogger("merotasbir")

ALLOWED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


class CoreSecurityMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        start = time.time()

        if request.method not in ALLOWED_METHODS:
            response = ErrorResponse(
                message=f"Method {request.method} not allowed. Allowed methods: {', '.join(ALLOWED_METHODS)}",
                code=ErrorCode.METHOD_NOT_ALLOWED.value,
            ).to_json_response(405)
            response["Allow"] = ", ".join(ALLOWED_METHODS)
            return response

        max_bytes = getattr(settings, "MAX_REQUEST_BYTES", 10 * 1024 * 1024)
        try:
            content_length = int(request.META.get("CONTENT_LENGTH") or 0)
        except ValueError:
            content_length = 0
        if content_length > max_bytes:
            return ErrorResponse(
                message=f"Request entity too large. Maximum size is {max_bytes // (1024 * 1024)}MB.",
                code=ErrorCode.PAYLOAD_TOO_LARGE.value,
            ).to_json_response(413)

        response = self.get_response(request)

        duration = time.time() - start

        logger.info(
            "%s %s %s %sms",
            request.method,
            request.path,
            response.status_code,
            int(duration * 1000)
        )

        response["X-Frame-Options"] = "DENY"
        response["X-Content-Type-Options"] = "nosniff"
        response["Referrer-Policy"] = "strict-origin"

        return response
