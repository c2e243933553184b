import pytest
from rest_framework.decorators import api_view
from rest_framework.response import Response

from bookings.validation import checks, schemas
from bookings.validation.decorators import build_request_data, sanitize_input, validate_request
from bookings.validation.rules import rule

CALLS = []


@pytest.fixture(autouse=True)
def reset_calls():
    CALLS.clear()


@api_view(["POST"])
@validate_request(schemas.USER_CREATION)
def create_view(request):
    CALLS.append(request.data)
    return Response({"email": request.data["email"], "validated": request.validated.get("body.email")}, status=201)


@api_view(["GET"])
@validate_request(schemas.SEARCH, sanitize=True)
def search_view(request):
    CALLS.append(request.validated.query)
    return Response(request.validated.query)


@api_view(["PATCH"])
@validate_request((rule("path.slug", checks.compose(checks.trimmed, checks.lowercased), "bad slug"),))
def slug_view(request, slug):
    CALLS.append(slug)
    return Response({"slug": slug})


class TestValidateRequest:
    def test_handler_sees_normalized_body(self, factory, valid_user):
        request = factory.post("/users/", {**valid_user, "email": "  Foo@Bar.COM "}, format="json")
        response = create_view(request)
        assert response.status_code == 201
        assert response.data == {"email": "foo@bar.com", "validated": "foo@bar.com"}

    def test_rejected_request_never_reaches_handler(self, factory, valid_user):
        request = factory.post("/users/", {**valid_user, "password": "abc"}, format="json")
        response = create_view(request)
        assert CALLS == []
        assert response.status_code == 400
        assert response.data == {
            "success": False,
            "message": "Validation failed",
            "errors": [{"field": "body.password", "message": schemas.PASSWORD_MESSAGE}],
        }

    def test_missing_body_reports_every_required_field(self, factory):
        response = create_view(factory.post("/users/", {}, format="json"))
        assert [error["field"] for error in response.data["errors"]] == [
            "body.email",
            "body.name",
            "body.password",
        ]

    def test_form_body_is_validated(self, factory, valid_user):
        response = create_view(factory.post("/users/", {**valid_user, "email": " Sita@Example.com"}))
        assert response.status_code == 201
        assert response.data["validated"] == "sita@example.com"

    def test_query_values_are_sanitized_and_normalized(self, factory):
        response = search_view(factory.get("/search/", {"q": "  studio  ", "category": " events "}))
        assert response.status_code == 200
        assert response.data == {"q": "studio", "category": "events"}

    def test_path_kwargs_reach_handler_normalized(self, factory):
        response = slug_view(factory.patch("/gallery/"), slug="  Wedding-2025 ")
        assert response.data == {"slug": "wedding-2025"}
        assert CALLS == ["wedding-2025"]

    def test_rejection_is_logged(self, factory, caplog):
        with caplog.at_level("INFO", logger="bookings.validation.decorators"):
            search_view(factory.get("/search/"))
        assert "Validation failed for GET /search/: 1 error(s)" in caplog.text


class TestHelpers:
    def test_sanitize_input_trims_top_level_strings(self):
        values = {"name": "  Ram ", "count": 3, "nested": {"inner": " x "}}
        assert sanitize_input(values) is values
        assert values == {"name": "Ram", "count": 3, "nested": {"inner": " x "}}

    def test_build_request_data_ignores_non_object_bodies(self, factory):
        @api_view(["POST"])
        def capture(request):
            data = build_request_data(request, {"id": "x"})
            return Response({"body": data.body, "path": data.path})

        response = capture(factory.post("/x/", ["not", "an", "object"], format="json"))
        assert response.data == {"body": {}, "path": {"id": "x"}}
