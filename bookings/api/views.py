"""
API endpoints for the booking marketplace.

Each endpoint runs its declared rule chain before any handler code. Storage
lives outside this service, so accepted requests are acknowledged with the
normalized values the downstream services will receive.
"""

import logging
from typing import Any, Dict, Iterable

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response

from bookings.validation import schemas, validate_request

from .rate_limiting import APIThrottle, AuthThrottle, SearchThrottle, UploadThrottle
from .response import APIResponse

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
SECRET_FIELDS = ("password", "confirmPassword")

ID_PARAM = OpenApiParameter(
    name="id",
    description="Record ID (cuid)",
    required=True,
    type=OpenApiTypes.STR,
    location=OpenApiParameter.PATH,
)

PAGINATION_PARAMS = [
    OpenApiParameter(name="page", description="Page number (>= 1)", required=False, type=int),
    OpenApiParameter(name="limit", description="Page size (1-100)", required=False, type=int),
]


def _public_fields(values: Dict[str, Any], hidden: Iterable[str] = SECRET_FIELDS) -> Dict[str, Any]:
    return {key: value for key, value in values.items() if key not in hidden}


def _accepted(request: Request, message: str, status_code: int = 201, **extra) -> Response:
    data = _public_fields(request.validated.body)
    data.update(extra)
    return APIResponse.success(data=data, message=message, status_code=status_code)


@extend_schema(summary="API discovery", description="Version information and available endpoints.")
@api_view(["GET"])
@permission_classes([AllowAny])
def api_root(request: Request) -> Response:
    return Response({
        "message": "Welcome to Mero Tasbir API v1",
        "version": API_VERSION,
        "endpoints": {
            "health": "/api/v1/health/",
            "auth": "/api/v1/auth/",
            "bookings": "/api/v1/bookings/",
            "events": "/api/v1/events/",
            "search": "/api/v1/search/",
            "admin": "/api/v1/admin/",
            "courses": "/api/v1/courses/",
            "marketplace": "/api/v1/marketplace/",
            "hero": "/api/v1/hero/",
            "constraints": "/api/v1/validation/constraints/",
        },
    })


# ------------------------------
# Auth
# ------------------------------
@extend_schema(summary="Register account", description="Validate a new user account registration.")
@api_view(["POST"])
@permission_classes([AllowAny])
@throttle_classes([AuthThrottle])
@validate_request(schemas.REGISTRATION)
def register(request: Request) -> Response:
    return _accepted(request, "Registration details accepted.")


@extend_schema(summary="Login", description="Validate login credentials before authentication.")
@api_view(["POST"])
@permission_classes([AllowAny])
@throttle_classes([AuthThrottle])
@validate_request(schemas.AUTH)
def login(request: Request) -> Response:
    return _accepted(request, "Credentials accepted.", status_code=200)


@extend_schema(summary="Verify OTP", description="Validate a one-time verification code.")
@api_view(["POST"])
@permission_classes([AllowAny])
@throttle_classes([AuthThrottle])
@validate_request(schemas.OTP_VERIFICATION, sanitize=True)
def verify_otp(request: Request) -> Response:
    return _accepted(request, "Verification code accepted.", status_code=200)


@extend_schema(summary="Register admin", description="Validate an admin account with its role.")
@api_view(["POST"])
@permission_classes([AllowAny])
@throttle_classes([AuthThrottle])
@validate_request(schemas.ADMIN_REGISTRATION)
def admin_register(request: Request) -> Response:
    return _accepted(request, "Admin details accepted.")


# ------------------------------
# Users
# ------------------------------
@extend_schema(summary="Create user", description="Validate a new user profile.")
@api_view(["POST"])
@permission_classes([AllowAny])
@throttle_classes([APIThrottle])
@validate_request(schemas.USER_CREATION)
def create_user(request: Request) -> Response:
    return _accepted(request, "User details accepted.")


@extend_schema(summary="Update user", description="Validate a partial user profile update.", parameters=[ID_PARAM])
@api_view(["PATCH"])
@permission_classes([AllowAny])
@throttle_classes([APIThrottle])
@validate_request(schemas.ID_PARAM, schemas.USER_UPDATE)
def update_user(request: Request, id: str) -> Response:
    return _accepted(request, "User update accepted.", status_code=200, id=id)


# ------------------------------
# Search & uploads
# ------------------------------
@extend_schema(
    summary="Search",
    description="Search users, services or events.",
    parameters=[
        OpenApiParameter(name="q", description="Search text (1-100 characters)", required=True, type=str),
        OpenApiParameter(name="category", description="users, services or events", required=False, type=str),
        *PAGINATION_PARAMS,
    ],
)
@api_view(["GET"])
@permission_classes([AllowAny])
@throttle_classes([SearchThrottle])
@validate_request(schemas.SEARCH, schemas.PAGINATION, sanitize=True)
def search(request: Request) -> Response:
    query = request.validated.query
    return APIResponse.paginated(
        data=[],
        page=query.get("page", 1),
        limit=query.get("limit", 10),
        total=0,
        message=f"Search results for '{query['q']}'.",
    )


@extend_schema(summary="Upload file metadata", description="Validate metadata sent with a file upload.")
@api_view(["POST"])
@permission_classes([AllowAny])
@throttle_classes([UploadThrottle])
@validate_request(schemas.FILE_UPLOAD)
def upload(request: Request) -> Response:
    return _accepted(request, "Upload details accepted.")


@extend_schema(summary="Create media entry", description="Validate a media library entry.")
@api_view(["POST"])
@permission_classes([AllowAny])
@throttle_classes([UploadThrottle])
@validate_request(schemas.MEDIA_UPLOAD)
def create_media(request: Request) -> Response:
    return _accepted(request, "Media details accepted.")


# ------------------------------
# Events & services
# ------------------------------
@validate_request(schemas.PAGINATION)
def _list_events(request: Request) -> Response:
    query = request.validated.query
    return APIResponse.paginated(
        data=[],
        page=query.get("page", 1),
        limit=query.get("limit", 10),
        total=0,
        message="Events retrieved.",
    )


@validate_request(schemas.EVENT_CREATION)
def _create_event(request: Request) -> Response:
    return _accepted(request, "Event details accepted.")


@extend_schema(summary="List or create events", description="GET lists events (paginated); POST validates a new event.")
@api_view(["GET", "POST"])
@permission_classes([AllowAny])
@throttle_classes([APIThrottle])
def events(request: Request) -> Response:
    if request.method == "POST":
        return _create_event(request)
    return _list_events(request)


@extend_schema(summary="Create service", description="Validate a photography service offering.")
@api_view(["POST"])
@permission_classes([AllowAny])
@throttle_classes([APIThrottle])
@validate_request(schemas.SERVICE_CREATION)
def create_service(request: Request) -> Response:
    return _accepted(request, "Service details accepted.")


# ------------------------------
# Bookings & rentals
# ------------------------------
@extend_schema(summary="Create booking", description="Validate a booking request from the public site.")
@api_view(["POST"])
@permission_classes([AllowAny])
@throttle_classes([APIThrottle])
@validate_request(schemas.BOOKING_CREATION)
def create_booking(request: Request) -> Response:
    logger.info("Booking request accepted for %s", request.validated.get("body.eventDate"))
    return _accepted(request, "Booking request accepted.")


@validate_request(schemas.ID_PARAM)
def _get_booking(request: Request, id: str) -> Response:
    return APIResponse.success(data={"id": id}, message="Booking lookup accepted.")


@validate_request(schemas.ID_PARAM, schemas.BOOKING_UPDATE)
def _update_booking(request: Request, id: str) -> Response:
    return _accepted(request, "Booking update accepted.", status_code=200, id=id)


@extend_schema(
    summary="Get or update booking",
    description="GET validates a booking lookup; PATCH validates an admin update.",
    parameters=[ID_PARAM],
)
@api_view(["GET", "PATCH"])
@permission_classes([AllowAny])
@throttle_classes([APIThrottle])
def booking_detail(request: Request, id: str) -> Response:
    if request.method == "PATCH":
        return _update_booking(request, id=id)
    return _get_booking(request, id=id)


@extend_schema(summary="Create equipment rental", description="Validate an equipment rental for an event.")
@api_view(["POST"])
@permission_classes([AllowAny])
@throttle_classes([APIThrottle])
@validate_request(schemas.EQUIPMENT_RENTAL)
def create_rental(request: Request) -> Response:
    return _accepted(request, "Rental details accepted.")


# ------------------------------
# Admin accounts
# ------------------------------
@extend_schema(summary="Admin login", description="Validate admin credentials before authentication.")
@api_view(["POST"])
@permission_classes([AllowAny])
@throttle_classes([AuthThrottle])
@validate_request(schemas.ADMIN_LOGIN)
def admin_login(request: Request) -> Response:
    return _accepted(request, "Admin credentials accepted.", status_code=200)


@validate_request(schemas.ID_PARAM, schemas.ADMIN_UPDATE)
def _update_admin(request: Request, id: str) -> Response:
    return _accepted(request, "Admin update accepted.", status_code=200, id=id)


@validate_request(schemas.ID_PARAM)
def _delete_admin(request: Request, id: str) -> Response:
    return APIResponse.success(data={"id": id}, message="Admin removal accepted.")


@extend_schema(
    summary="Update or remove admin",
    description="PUT validates an admin profile update; DELETE validates a removal.",
    parameters=[ID_PARAM],
)
@api_view(["PUT", "DELETE"])
@permission_classes([AllowAny])
@throttle_classes([APIThrottle])
def admin_detail(request: Request, id: str) -> Response:
    if request.method == "DELETE":
        return _delete_admin(request, id=id)
    return _update_admin(request, id=id)


# ------------------------------
# Courses, marketplace & hero sections
# ------------------------------
@extend_schema(summary="Create course", description="Validate a new course with its curriculum.")
@api_view(["POST"])
@permission_classes([AllowAny])
@throttle_classes([APIThrottle])
@validate_request(schemas.COURSE_CREATION)
def create_course(request: Request) -> Response:
    return _accepted(request, "Course details accepted.")


@extend_schema(summary="Update course", description="Validate a partial course update.")
@api_view(["PUT"])
@permission_classes([AllowAny])
@throttle_classes([APIThrottle])
@validate_request(schemas.COURSE_UPDATE)
def update_course(request: Request, id: str) -> Response:
    return _accepted(request, "Course update accepted.", status_code=200, id=id)


@extend_schema(summary="Create marketplace item", description="Validate a marketplace listing and its seller.")
@api_view(["POST"])
@permission_classes([AllowAny])
@throttle_classes([APIThrottle])
@validate_request(schemas.MARKETPLACE_ITEM_CREATION)
def create_marketplace_item(request: Request) -> Response:
    return _accepted(request, "Marketplace item accepted.")


@extend_schema(summary="Update marketplace item", description="Validate a partial marketplace listing update.")
@api_view(["PUT"])
@permission_classes([AllowAny])
@throttle_classes([APIThrottle])
@validate_request(schemas.MARKETPLACE_ITEM_UPDATE)
def update_marketplace_item(request: Request, id: str) -> Response:
    return _accepted(request, "Marketplace item update accepted.", status_code=200, id=id)


@extend_schema(summary="Create hero section", description="Validate a landing-page hero section.")
@api_view(["POST"])
@permission_classes([AllowAny])
@throttle_classes([APIThrottle])
@validate_request(schemas.HERO_CREATION)
def create_hero_section(request: Request) -> Response:
    return _accepted(request, "Hero section accepted.")


@extend_schema(summary="Update hero section", description="Validate a hero section update.", parameters=[ID_PARAM])
@api_view(["PUT"])
@permission_classes([AllowAny])
@throttle_classes([APIThrottle])
@validate_request(schemas.HERO_ID, schemas.HERO_UPDATE)
def update_hero_section(request: Request, id: str) -> Response:
    return _accepted(request, "Hero section update accepted.", status_code=200, id=id)


@extend_schema(summary="Activate hero section", description="Validate a request to make a hero section active.",
               parameters=[ID_PARAM])
@api_view(["PATCH"])
@permission_classes([AllowAny])
@throttle_classes([APIThrottle])
@validate_request(schemas.HERO_ID)
def activate_hero_section(request: Request, id: str) -> Response:
    return APIResponse.success(data={"id": id, "isActive": True}, message="Hero section activation accepted.")
