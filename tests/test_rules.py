"""
Rule chain tests: ordering, accumulation, optional fields and in-place
normalization.
"""
import pytest

from bookings.validation import checks
from bookings.validation.rules import CheckFailed, FieldRule, RequestData, rule, run_rule_chain


def always_fail(value):
    raise CheckFailed("nope")


class TestFieldRule:
    def test_field_must_name_a_location(self):
        with pytest.raises(ValueError):
            FieldRule(field="email", check=checks.is_email, message="bad")

    def test_unknown_location_rejected(self):
        with pytest.raises(ValueError):
            FieldRule(field="headers.token", check=checks.is_string, message="bad")

    def test_rules_are_immutable(self):
        email_rule = rule("body.email", checks.is_email, "bad")
        with pytest.raises(AttributeError):
            email_rule.message = "changed"

    def test_describe(self):
        page_rule = rule("query.page", checks.integer(1), "Page must be positive", optional=True)
        assert page_rule.describe() == {
            "field": "query.page",
            "message": "Page must be positive",
            "optional": True,
        }


class TestRequestData:
    def test_get_and_has(self, make_request):
        request = make_request(body={"email": "a@b.co"}, query={"page": "2"}, path={"id": "x"})
        assert request.get("body.email") == "a@b.co"
        assert request.get("query.page") == "2"
        assert request.has("path.id")
        assert not request.has("body.name")
        assert request.get("body.name", "fallback") == "fallback"

    def test_nested_fields(self, make_request):
        request = make_request(body={"seller": {"email": "x@y.io"}})
        assert request.get("body.seller.email") == "x@y.io"
        request.set("body.seller.email", "changed@y.io")
        assert request.body["seller"]["email"] == "changed@y.io"

    def test_missing_parent(self, make_request):
        request = make_request(body={"seller": "not-an-object"})
        assert not request.has("body.seller.email")
        with pytest.raises(KeyError):
            request.set("body.seller.email", "x@y.io")


class TestRunRuleChain:
    def test_valid_request_has_empty_outcome(self, make_request):
        request = make_request(body={"email": "a@example.com", "name": "Ram"})
        outcome = run_rule_chain(request, [
            rule("body.email", checks.is_email, "bad email"),
            rule("body.name", checks.length(2, 50), "bad name"),
        ])
        assert outcome.is_valid
        assert outcome.to_list() == []

    def test_every_rule_runs_after_a_failure(self, make_request):
        seen = []

        def record(value):
            seen.append(value)
            return value

        request = make_request(body={"a": 1, "b": 2})
        outcome = run_rule_chain(request, [
            rule("body.a", always_fail, "a failed"),
            rule("body.b", record, "b failed"),
        ])
        assert seen == [2]
        assert outcome.to_list() == [{"field": "body.a", "message": "a failed"}]

    def test_failures_follow_declaration_order(self, make_request):
        # raw request lists fields in the opposite order of the rules
        request = make_request(body={"third": "", "second": "", "first": ""})
        outcome = run_rule_chain(request, [
            rule("body.first", always_fail, "first"),
            rule("body.second", always_fail, "second"),
            rule("body.third", always_fail, "third"),
        ])
        assert [error.message for error in outcome.errors] == ["first", "second", "third"]

    def test_same_field_can_fail_more_than_once(self, make_request):
        request = make_request(body={"password": "x"})
        outcome = run_rule_chain(request, [
            rule("body.password", checks.length(8), "too short"),
            rule("body.password", checks.matches(r"\d"), "needs a digit"),
        ])
        assert outcome.to_list() == [
            {"field": "body.password", "message": "too short"},
            {"field": "body.password", "message": "needs a digit"},
        ]

    @pytest.mark.parametrize("query", [{}, {"page": None}, {"page": ""}])
    def test_optional_rule_skips_absent_or_empty(self, make_request, query):
        request = make_request(query=query)
        outcome = run_rule_chain(request, [
            rule("query.page", always_fail, "Page must be a positive integer", optional=True),
        ])
        assert outcome.is_valid

    def test_optional_rule_checks_present_value(self, make_request):
        request = make_request(query={"page": "0"})
        outcome = run_rule_chain(request, [
            rule("query.page", checks.integer(min_value=1), "Page must be a positive integer", optional=True),
        ])
        assert outcome.to_list() == [{"field": "query.page", "message": "Page must be a positive integer"}]

    def test_required_rule_fails_on_absent_field(self, make_request):
        outcome = run_rule_chain(make_request(), [rule("body.email", checks.is_email, "Email is required")])
        assert outcome.to_list() == [{"field": "body.email", "message": "Email is required"}]
        assert len(outcome) == 1

    def test_normalized_value_is_seen_by_later_rules(self, make_request):
        request = make_request(body={"status": "  Confirmed "})
        outcome = run_rule_chain(request, [
            rule("body.status", checks.compose(checks.trimmed, checks.lowercased), "bad status"),
            rule("body.status", checks.one_of(["confirmed", "pending"]), "bad status"),
        ])
        assert outcome.is_valid
        assert request.body["status"] == "confirmed"

    def test_normalization_mutates_request_in_place(self, make_request):
        body = {"email": "  Foo@Bar.COM "}
        request = make_request(body=body)
        run_rule_chain(request, [rule("body.email", checks.normalized_email, "bad email")])
        assert body["email"] == "foo@bar.com"

    def test_failed_check_leaves_value_unchanged(self, make_request):
        request = make_request(query={"limit": "500"})
        run_rule_chain(request, [rule("query.limit", checks.integer(1, 100), "bad limit")])
        assert request.query["limit"] == "500"

    def test_default_fills_absent_field(self, make_request):
        request = make_request(body={})
        outcome = run_rule_chain(request, [rule("body.role", checks.default("admin"), "bad role")])
        assert outcome.is_valid
        assert request.body == {"role": "admin"}

    def test_absent_field_stays_absent_without_default(self, make_request):
        request = make_request(body={})
        run_rule_chain(request, [
            rule("body.clientName", checks.required_when("body.category", "CLIENT_PORTFOLIO"), "x", cross_field=True),
        ])
        assert "clientName" not in request.body

    def test_cross_field_rule_receives_request(self, make_request):
        request = make_request(body={"password": "Secret123", "confirmPassword": "Secret124"})
        outcome = run_rule_chain(request, [
            rule("body.confirmPassword", checks.same_as("body.password"), "Passwords don't match", cross_field=True),
        ])
        assert outcome.to_list() == [{"field": "body.confirmPassword", "message": "Passwords don't match"}]

    def test_rules_can_be_reused_across_requests(self, make_request):
        rules = [rule("query.page", checks.integer(min_value=1), "bad page")]
        first = run_rule_chain(make_request(query={"page": "0"}), rules)
        second = run_rule_chain(make_request(query={"page": "3"}), rules)
        assert len(first) == 1
        assert second.is_valid

    def test_existing_outcome_is_extended(self, make_request):
        rules = [rule("body.a", always_fail, "a")]
        outcome = run_rule_chain(make_request(), rules)
        run_rule_chain(make_request(), rules, outcome)
        assert len(outcome) == 2

    def test_accepts_request_data_instance(self):
        request = RequestData(path={"id": "ABC"})
        run_rule_chain(request, [rule("path.id", checks.lowercased, "bad id")])
        assert request.path == {"id": "abc"}
