"""
Validation API Views

Exposes the declared rule sets to the frontend for client-side validation.
Server remains authoritative; client mirrors constraints for UX.
"""

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from bookings.validation.errors import NotFoundError, create_success_response
from bookings.validation.schemas import get_validation_constraints


@extend_schema(
    summary="Validation constraints",
    parameters=[
        OpenApiParameter(name="rule_set", description="Return a single rule set", required=False, type=str),
    ],
)
@api_view(["GET"])
@permission_classes([AllowAny])
def validation_constraints(request):
    """
    Field rules per endpoint family, or just the one named by ``rule_set``.

    Unknown rule-set names answer 404.
    """
    constraints = get_validation_constraints()
    name = request.query_params.get("rule_set")
    if name is None:
        return Response(create_success_response(data=constraints))
    if name not in constraints:
        raise NotFoundError(f"Unknown rule set '{name}'")
    return Response(create_success_response(data={name: constraints[name]}))
