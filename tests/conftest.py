from io import StringIO

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import caches
from django.core.management import call_command
from rest_framework.test import APIClient

from modules.customers.cache import CUSTOMER_CACHE_ALIAS


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture(autouse=True)
def _clear_customer_cache():
    """Ids are reused once a test's transaction rolls back; start every test cold."""
    caches[CUSTOMER_CACHE_ALIAS].clear()
    yield
    caches[CUSTOMER_CACHE_ALIAS].clear()


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def auth_client():
    """APIClient authenticated as a regular (non-staff) user."""
    client = APIClient()
    user = get_user_model().objects.create_user(
        username="testuser", password="testpass123"
    )
    client.force_authenticate(user=user)
    return client


@pytest.fixture()
def admin_client():
    """APIClient authenticated as a staff user, allowed to delete customers."""
    client = APIClient()
    user = get_user_model().objects.create_user(
        username="testadmin", password="testpass123", is_staff=True
    )
    client.force_authenticate(user=user)
    return client


@pytest.fixture()
def seeded():
    """Development data: three customers (Raja Kolli first) and two posts."""
    call_command("seed_data", stdout=StringIO())
