"""
Endpoint Rule Sets

Static rule chains per endpoint family, declared once at import time and
shared by every request. Server is authoritative; clients may mirror these
rules through the constraints endpoint for UX.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

from . import checks
from .rules import FieldRule, rule

EMAIL_MESSAGE = "Please provide a valid email address"
NAME_MESSAGE = "Name must be between 2 and 50 characters"
PASSWORD_MESSAGE = (
    "Password must be at least 8 characters long and contain at least one "
    "lowercase letter, one uppercase letter, and one number"
)

SEARCH_CATEGORIES = ["users", "services", "events"]
UPLOAD_CATEGORIES = ["portfolio", "event", "profile"]
SERVICE_CATEGORIES = ["portrait", "event", "wedding", "commercial", "other"]
USER_TYPES = ["user", "freelancer"]
ADMIN_ROLES = ["admin", "super_admin"]
BOOKING_STATUSES = ["PENDING", "CONFIRMED", "IN_PROGRESS", "COMPLETED", "CANCELLED"]
MEDIA_CATEGORIES = ["CLIENT_PORTFOLIO", "WEDDING", "EVENT", "PORTRAIT", "COMMERCIAL", "OTHER"]


def _email(location: str = "body.email", optional: bool = False) -> FieldRule:
    return rule(location, checks.normalized_email, EMAIL_MESSAGE, optional=optional)


def _name(optional: bool = False) -> FieldRule:
    return rule("body.name", checks.trimmed_length(2, 50), NAME_MESSAGE, optional=optional)


USER_CREATION: Tuple[FieldRule, ...] = (
    _email(),
    _name(),
    rule("body.password", checks.strong_password(8), PASSWORD_MESSAGE),
)

USER_UPDATE: Tuple[FieldRule, ...] = (
    _email(optional=True),
    _name(optional=True),
)

AUTH: Tuple[FieldRule, ...] = (
    _email(),
    rule("body.password", checks.length(1), "Password is required"),
)

ID_PARAM: Tuple[FieldRule, ...] = (
    rule("path.id", checks.is_cuid, "Invalid ID format"),
)

PAGINATION: Tuple[FieldRule, ...] = (
    rule("query.page", checks.integer(min_value=1), "Page must be a positive integer", optional=True),
    rule("query.limit", checks.integer(1, 100), "Limit must be between 1 and 100", optional=True),
)

SEARCH: Tuple[FieldRule, ...] = (
    rule("query.q", checks.trimmed_length(1, 100), "Search query must be between 1 and 100 characters"),
    rule("query.category", checks.one_of(SEARCH_CATEGORIES), "Invalid category", optional=True),
)

FILE_UPLOAD: Tuple[FieldRule, ...] = (
    rule(
        "body.description",
        checks.trimmed_length(max_length=500),
        "Description must be less than 500 characters",
        optional=True,
    ),
    rule("body.category", checks.one_of(UPLOAD_CATEGORIES), "Invalid file category"),
)

EVENT_CREATION: Tuple[FieldRule, ...] = (
    rule("body.title", checks.trimmed_length(5, 100), "Event title must be between 5 and 100 characters"),
    rule("body.date", checks.iso_datetime, "Please provide a valid date"),
    rule("body.location", checks.trimmed_length(5, 200), "Location must be between 5 and 200 characters"),
    rule(
        "body.description",
        checks.trimmed_length(max_length=1000),
        "Description must be less than 1000 characters",
        optional=True,
    ),
    rule("body.clientId", checks.is_cuid, "Invalid client ID"),
)

SERVICE_CREATION: Tuple[FieldRule, ...] = (
    rule("body.name", checks.trimmed_length(3, 100), "Service name must be between 3 and 100 characters"),
    rule(
        "body.description",
        checks.trimmed_length(10, 1000),
        "Description must be between 10 and 1000 characters",
    ),
    rule("body.price", checks.number(min_value=0), "Price must be a positive number"),
    rule("body.duration", checks.integer(30, 480), "Duration must be between 30 and 480 minutes"),
    rule("body.category", checks.one_of(SERVICE_CATEGORIES), "Invalid service category"),
)

REGISTRATION: Tuple[FieldRule, ...] = (
    rule("body.email", checks.normalized_email, "Invalid email address"),
    rule("body.username", checks.trimmed_length(3), "Username must be at least 3 characters"),
    rule("body.fullName", checks.trimmed_length(2), "Full name must be at least 2 characters"),
    rule("body.address", checks.trimmed_length(10), "Please provide a complete address"),
    rule("body.password", checks.length(8), "Password must be at least 8 characters"),
    rule(
        "body.confirmPassword",
        checks.same_as("body.password"),
        "Passwords don't match",
        cross_field=True,
    ),
    rule("body.userType", checks.one_of(USER_TYPES), "User type must be either 'user' or 'freelancer'"),
)

OTP_VERIFICATION: Tuple[FieldRule, ...] = (
    rule("body.email", checks.normalized_email, "Invalid email address"),
    rule("body.otp", checks.compose(checks.trimmed, checks.matches(r"^\d{6}$")), "OTP must be 6 digits"),
)

ADMIN_REGISTRATION: Tuple[FieldRule, ...] = (
    _email(),
    rule("body.password", checks.strong_password(8), PASSWORD_MESSAGE),
    _name(),
    rule("body.role", checks.default("admin"), "Role must be either 'admin' or 'super_admin'"),
    rule("body.role", checks.one_of(ADMIN_ROLES), "Role must be either 'admin' or 'super_admin'"),
)

BOOKING_CREATION: Tuple[FieldRule, ...] = (
    rule("body.fullName", checks.trimmed_length(2), "Full name must be at least 2 characters"),
    rule("body.email", checks.normalized_email, "Please enter a valid email address"),
    rule("body.phone", checks.trimmed_length(10), "Phone number must be at least 10 digits"),
    rule("body.eventDate", checks.iso_datetime, "Please provide a valid event date"),
    rule("body.eventTime", checks.time_of_day, "Invalid event time format"),
    rule("body.eventLocation", checks.trimmed_length(2), "Event location must be at least 2 characters"),
    rule("body.guestCount", checks.integer(min_value=1), "Guest count must be at least 1"),
    rule("body.eventType", checks.trimmed_length(1), "Event type is required"),
    rule("body.packageType", checks.trimmed_length(1), "Package type is required"),
    rule("body.packageName", checks.trimmed_length(1), "Package name is required"),
    rule("body.packagePrice", checks.trimmed_length(1), "Package price is required"),
    rule(
        "body.specialRequirements",
        checks.trimmed_length(max_length=1000),
        "Special requirements too long",
        optional=True,
    ),
)

BOOKING_UPDATE: Tuple[FieldRule, ...] = (
    rule("body.status", checks.one_of(BOOKING_STATUSES), "Invalid booking status", optional=True),
    rule("body.adminNotes", checks.trimmed_length(max_length=1000), "Admin notes too long", optional=True),
    rule("body.isActive", checks.boolean, "isActive must be a boolean", optional=True),
)

EQUIPMENT_RENTAL: Tuple[FieldRule, ...] = (
    rule("body.eventId", checks.is_cuid, "Invalid event ID"),
    rule("body.equipmentId", checks.is_cuid, "Invalid equipment ID"),
    rule("body.rentalStartDate", checks.iso_datetime, "Invalid rental start date format"),
    rule("body.rentalEndDate", checks.iso_datetime, "Invalid rental end date format"),
    rule(
        "body.rentalEndDate",
        checks.after("body.rentalStartDate"),
        "Rental end date must be after start date",
        cross_field=True,
    ),
    rule(
        "body.deliveryAddress",
        checks.trimmed_length(max_length=500),
        "Delivery address too long",
        optional=True,
    ),
)

MEDIA_UPLOAD: Tuple[FieldRule, ...] = (
    rule("body.category", checks.one_of(MEDIA_CATEGORIES), "Category is required"),
    rule(
        "body.clientName",
        checks.required_when("body.category", "CLIENT_PORTFOLIO"),
        "Client name is required when category is CLIENT_PORTFOLIO",
        cross_field=True,
    ),
    rule("body.description", checks.trimmed_length(max_length=1000), "Description too long", optional=True),
    rule("body.tags", checks.list_of(checks.trimmed, max_items=20), "Tags must be a list of strings", optional=True),
)

ADMIN_LOGIN: Tuple[FieldRule, ...] = (
    _email(),
    rule("body.password", checks.length(1), "Password is required"),
    rule("body.password", checks.length(6), "Password must be at least 6 characters long"),
)

ADMIN_UPDATE: Tuple[FieldRule, ...] = (
    _email(optional=True),
    rule("body.password", checks.strong_password(8), PASSWORD_MESSAGE, optional=True),
    _name(optional=True),
)

# ------------------------------
# Courses
# ------------------------------
LESSON_TYPES = ["video", "reading", "assignment", "quiz"]

_lesson = checks.record({
    "title": checks.length(1),
    "duration": checks.optional(checks.is_string),
    "type": checks.optional(checks.one_of(LESSON_TYPES)),
})

_curriculum_module = checks.record({
    "title": checks.length(1),
    "duration": checks.length(1),
    "description": checks.optional(checks.is_string),
    "lessons": checks.optional(checks.list_of(_lesson)),
})


def _course_rules(partial: bool) -> Tuple[FieldRule, ...]:
    text_fields = (
        ("title", "Title is required"),
        ("description", "Description is required"),
        ("instructor", "Instructor is required"),
        ("duration", "Duration is required"),
        ("schedule", "Schedule is required"),
        ("level", "Level is required"),
    )
    rules = [
        rule(f"body.{name}", checks.length(1), message, optional=partial)
        for name, message in text_fields
    ]
    rules += [
        rule(
            "body.tags",
            checks.list_of(checks.is_string, min_items=1),
            "At least one tag is required",
            optional=partial,
        ),
        rule("body.image", checks.is_string, "Image must be a string", optional=True),
        rule("body.price", checks.number(min_value=0), "Price must be non-negative", optional=partial),
        rule("body.originalPrice", checks.number(), "Original price must be a number", optional=True),
        rule("body.discount", checks.number(), "Discount must be a number", optional=True),
        rule(
            "body.whatYoullLearn",
            checks.list_of(checks.is_string, min_items=1),
            "At least one learning objective is required",
            optional=partial,
        ),
        rule(
            "body.prerequisites",
            checks.list_of(checks.is_string, min_items=1),
            "At least one prerequisite is required",
            optional=partial,
        ),
        rule(
            "body.curriculum",
            checks.list_of(_curriculum_module, min_items=1),
            "At least one curriculum module with a title and duration is required",
            optional=partial,
        ),
    ]
    if not partial:
        rules.append(rule("body.isActive", checks.default(True), "isActive must be a boolean"))
    rules.append(rule("body.isActive", checks.boolean, "isActive must be a boolean", optional=partial))
    return tuple(rules)


COURSE_CREATION = _course_rules(partial=False)
COURSE_UPDATE = _course_rules(partial=True)

# ------------------------------
# Marketplace
# ------------------------------
ITEM_TYPES = ["rental", "sale"]
ITEM_CONDITIONS = ["new", "like_new", "good", "fair", "poor"]
ITEM_AVAILABILITY = ["in_stock", "out_of_stock", "limited"]


def _marketplace_rules(partial: bool) -> Tuple[FieldRule, ...]:
    def seller(name, check, message):
        # on update the seller block is optional, but complete when sent
        if partial:
            return rule(f"body.seller.{name}", checks.when_present("body.seller", check), message, cross_field=True)
        return rule(f"body.seller.{name}", check, message)

    def location(name, check, message):
        return rule(f"body.location.{name}", checks.when_present("body.location", check), message, cross_field=True)

    def defaulted(name, fallback, check, message):
        if partial:
            return (rule(f"body.{name}", check, message, optional=True),)
        return (
            rule(f"body.{name}", checks.default(fallback), message),
            rule(f"body.{name}", check, message),
        )

    rules = [
        rule("body.title", checks.length(1), "Title is required", optional=partial),
        rule("body.description", checks.length(1), "Description is required", optional=partial),
        rule("body.category", checks.length(1), "Category is required", optional=partial),
        rule("body.subcategory", checks.is_string, "Subcategory must be a string", optional=True),
        rule("body.price", checks.number(min_value=0), "Price must be non-negative", optional=partial),
        rule("body.originalPrice", checks.number(), "Original price must be a number", optional=True),
        rule("body.discount", checks.number(), "Discount must be a number", optional=True),
        *defaulted("currency", "NPR", checks.is_string, "Currency must be a string"),
        rule(
            "body.images",
            checks.list_of(checks.is_string, min_items=1),
            "At least one image is required",
            optional=partial,
        ),
        rule("body.tags", checks.list_of(checks.is_string), "Tags must be a list of strings", optional=True),
        rule("body.specifications", checks.is_object, "Specifications must be an object", optional=True),
        *defaulted("itemType", "sale", checks.one_of(ITEM_TYPES), "Item type must be rental or sale"),
        *defaulted("condition", "new", checks.one_of(ITEM_CONDITIONS), "Invalid item condition"),
        *defaulted("availability", "in_stock", checks.one_of(ITEM_AVAILABILITY), "Invalid availability"),
        *defaulted("quantity", 1, checks.number(min_value=0), "Quantity must be non-negative"),
        *defaulted("rating", 0, checks.number(0, 5), "Rating must be between 0 and 5"),
        *defaulted("reviewCount", 0, checks.number(min_value=0), "Review count must be non-negative"),
        rule("body.seller", checks.is_object, "Seller details are required", optional=partial),
        seller("id", checks.is_string, "Seller ID is required"),
        seller("name", checks.is_string, "Seller name is required"),
        seller("email", checks.is_email, "Seller email must be a valid email address"),
        rule(
            "body.seller.rating",
            checks.number(0, 5),
            "Seller rating must be between 0 and 5",
            optional=True,
        ),
        rule(
            "body.seller.reviewCount",
            checks.number(min_value=0),
            "Seller review count must be non-negative",
            optional=True,
        ),
        rule("body.location", checks.is_object, "Location must be an object", optional=True),
        location("city", checks.is_string, "City is required"),
        location("country", checks.is_string, "Country is required"),
        rule(
            "body.location.coordinates.lat",
            checks.when_present("body.location.coordinates", checks.number()),
            "Latitude must be a number",
            cross_field=True,
        ),
        rule(
            "body.location.coordinates.lng",
            checks.when_present("body.location.coordinates", checks.number()),
            "Longitude must be a number",
            cross_field=True,
        ),
        *defaulted("isActive", True, checks.boolean, "isActive must be a boolean"),
        *defaulted("isFeatured", False, checks.boolean, "isFeatured must be a boolean"),
    ]
    return tuple(rules)


MARKETPLACE_ITEM_CREATION = _marketplace_rules(partial=False)
MARKETPLACE_ITEM_UPDATE = _marketplace_rules(partial=True)

# ------------------------------
# Hero sections
# ------------------------------
HERO_ID: Tuple[FieldRule, ...] = (
    rule("path.id", checks.is_cuid, "Invalid hero section ID"),
)


def _hero_rules(partial: bool) -> Tuple[FieldRule, ...]:
    rules = (
        rule("body.title", checks.length(1, 200), "Title must be between 1 and 200 characters", optional=partial),
        rule(
            "body.subtitle",
            checks.length(1, 300),
            "Subtitle must be between 1 and 300 characters",
            optional=partial,
        ),
        rule(
            "body.description",
            checks.length(1, 500),
            "Description must be between 1 and 500 characters",
            optional=partial,
        ),
        rule("body.backgroundImage", checks.is_url, "Background image must be a valid URL", optional=True),
        rule("body.ctaText", checks.length(1, 50), "CTA text must be less than 50 characters", optional=True),
        rule(
            "body.rotatingTexts",
            checks.list_of(checks.length(1)),
            "Rotating text cannot be empty",
            optional=True,
        ),
    )
    if partial:
        rules += (rule("body.isActive", checks.boolean, "isActive must be a boolean", optional=True),)
    return rules


HERO_CREATION = _hero_rules(partial=False)
HERO_UPDATE = _hero_rules(partial=True)

RULE_SETS: Dict[str, Tuple[FieldRule, ...]] = {
    "user_creation": USER_CREATION,
    "user_update": USER_UPDATE,
    "auth": AUTH,
    "id_param": ID_PARAM,
    "pagination": PAGINATION,
    "search": SEARCH,
    "file_upload": FILE_UPLOAD,
    "event_creation": EVENT_CREATION,
    "service_creation": SERVICE_CREATION,
    "registration": REGISTRATION,
    "otp_verification": OTP_VERIFICATION,
    "admin_registration": ADMIN_REGISTRATION,
    "booking_creation": BOOKING_CREATION,
    "booking_update": BOOKING_UPDATE,
    "equipment_rental": EQUIPMENT_RENTAL,
    "media_upload": MEDIA_UPLOAD,
    "admin_login": ADMIN_LOGIN,
    "admin_update": ADMIN_UPDATE,
    "course_creation": COURSE_CREATION,
    "course_update": COURSE_UPDATE,
    "marketplace_item_creation": MARKETPLACE_ITEM_CREATION,
    "marketplace_item_update": MARKETPLACE_ITEM_UPDATE,
    "hero_id": HERO_ID,
    "hero_creation": HERO_CREATION,
    "hero_update": HERO_UPDATE,
}


def get_validation_constraints() -> Dict[str, List[Dict[str, Any]]]:
    constraints = {}
    for name, rules in RULE_SETS.items():
        described = []
        for field_rule in rules:
            entry = field_rule.describe()
            allowed = checks.choices_of(field_rule.check)
            if allowed:
                entry["choices"] = list(allowed)
            described.append(entry)
        constraints[name] = described
    return constraints
