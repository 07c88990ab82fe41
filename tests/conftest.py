from datetime import timedelta
from decimal import Decimal

import pytest
from django.core.cache import cache
from django.utils import timezone
from rest_framework.test import APIClient

from modules.customers.models import Customer
from modules.orders.constants import OrderStatus
from modules.orders.models import Order


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture(autouse=True)
def _local_cache(settings):
    """Keep throttling and the health check off Redis."""
    settings.CACHES = {
        "default": {"BACKEND": "django.core.cache.backends.locmem.LocMemCache"}
    }
    cache.clear()


@pytest.fixture(autouse=True)
def _celery_eager():
    """Executa tasks de forma síncrona no processo de teste."""
    from config.celery import app

    previous = (app.conf.task_always_eager, app.conf.task_eager_propagates)
    app.conf.task_always_eager = True
    app.conf.task_eager_propagates = True
    yield
    app.conf.task_always_eager, app.conf.task_eager_propagates = previous



@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def user(django_user_model):
    return django_user_model.objects.create_user(
        username="florist", email="florist@bloomora.test", password="pass1234"
    )


@pytest.fixture()
def auth_client(api_client, user):
    """APIClient authenticated as ``florist@bloomora.test``."""
    api_client.force_authenticate(user=user)
    return api_client


@pytest.fixture()
def customer():
    return Customer.objects.create(
        full_name="Eleanor Vance",
        phone="+1 555-0101",
        email="eleanor.v@example.com",
        address="123 Rose Lane, Bloomville",
        preferences="Loves lilies",
    )


@pytest.fixture()
def make_order(customer):
    """Factory persisting an order straight through the ORM (no events)."""

    def _make(**overrides) -> Order:
        now = timezone.now()
        defaults = {
            "customer_id": customer.id,
            "order_date": now,
            "delivery_date": now + timedelta(days=2),
            "products": "One dozen white lilies",
            "total_value": Decimal("100.00"),
            "status": OrderStatus.COD,
        }
        defaults.update(overrides)
        order = Order(**defaults)
        order.save()
        return order

    return _make
