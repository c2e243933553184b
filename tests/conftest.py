import pytest
from django.core.cache import cache
from rest_framework.test import APIClient, APIRequestFactory

from bookings.validation.rules import RequestData

VALID_CUID = "cjld2cjxh0000qzrmn831i7rn"


@pytest.fixture(autouse=True)
def clear_throttle_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def client():
    return APIClient()


@pytest.fixture
def factory():
    return APIRequestFactory()


@pytest.fixture
def make_request():
    def _make(body=None, query=None, path=None):
        return RequestData(
            body={} if body is None else body,
            query={} if query is None else query,
            path={} if path is None else path,
        )
    return _make


@pytest.fixture
def valid_user():
    return {
        "email": "sita@example.com",
        "name": "Sita Sharma",
        "password": "Passw0rdOK",
    }


@pytest.fixture
def valid_booking():
    return {
        "fullName": "Sita Sharma",
        "email": "Sita@Example.com",
        "phone": "9812345678",
        "eventDate": "2025-12-20",
        "eventTime": "14:30",
        "eventLocation": "Kathmandu",
        "guestCount": 120,
        "eventType": "WEDDING",
        "packageType": "wedding",
        "packageName": "Gold",
        "packagePrice": "NPR 50,000",
    }
