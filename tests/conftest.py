"""Pytest fixtures for Clubman tests.

Engine tests run against InMemoryRecordStore; tests that need the ORM
request the ``db`` fixture and use DjangoRecordStore.
"""

from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal

import pytest

from clubman.adapters.memory import InMemoryRecordStore
from clubman.protocols.records import (
    CommerceInfo,
    CustomerInfo,
    PointsMode,
    ReminderLogInfo,
    RewardInfo,
    RewardType,
    TransactionInfo,
)

# Wednesday 2026-05-20 12:00 in Buenos Aires
NOW = datetime(2026, 5, 20, 15, 0, tzinfo=dt_timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def store():
    return InMemoryRecordStore()


@pytest.fixture
def commerce(store):
    """Commerce with points (10% of the amount), stars (goal 5) and a 15% coupon."""
    commerce = store.insert(
        CommerceInfo(
            name="Café Central",
            enable_points=True,
            enable_stars=True,
            enable_coupon=True,
            points_mode=PointsMode.PERCENTAGE,
            points_value=Decimal("10"),
            stars_goal=5,
            discount_percent=Decimal("15"),
            discount_expiration_days=30,
            customer_limit=100,
            monthly_scan_limit=100,
        )
    )
    points_reward = store.insert(
        RewardInfo(
            commerce_id=commerce.id,
            name="Café gratis",
            reward_type=RewardType.POINTS,
            points_threshold=500,
        )
    )
    stars_reward = store.insert(
        RewardInfo(
            commerce_id=commerce.id,
            name="Medialuna",
            reward_type=RewardType.STARS,
            stars_threshold=5,
        )
    )
    return store.update(
        CommerceInfo,
        commerce.id,
        points_reward_id=points_reward.id,
        stars_reward_id=stars_reward.id,
    )


@pytest.fixture
def points_reward(store, commerce):
    return store.get_by_id(RewardInfo, commerce.points_reward_id)


@pytest.fixture
def stars_reward(store, commerce):
    return store.get_by_id(RewardInfo, commerce.stars_reward_id)


@pytest.fixture
def other_commerce(store):
    return store.insert(CommerceInfo(name="Panadería Sur", enable_stars=True))


@pytest.fixture
def customer(store, commerce):
    return store.insert(
        CustomerInfo(
            commerce_id=commerce.id,
            name="Lucía",
            phone="+5491155550001",
            qr_token="CUST-0000AAAA",
        )
    )


@pytest.fixture
def customer_b(store, commerce):
    return store.insert(
        CustomerInfo(
            commerce_id=commerce.id,
            name="Martín",
            phone="+5491155550002",
            qr_token="CUST-0000BBBB",
        )
    )


@pytest.fixture
def add_visit(store):
    """Insert a purchase for a customer at a given time."""

    def _add_visit(customer, created_at, amount="100"):
        return store.insert(
            TransactionInfo(
                commerce_id=customer.commerce_id,
                customer_id=customer.id,
                amount=Decimal(amount),
                points=0,
                created_at=created_at,
            )
        )

    return _add_visit


@pytest.fixture
def add_log(store):
    """Insert an outreach log entry for a customer at a given time."""

    def _add_log(customer, status, created_at, reminder_type="inactive"):
        return store.insert(
            ReminderLogInfo(
                commerce_id=customer.commerce_id,
                customer_id=customer.id,
                reminder_type=reminder_type,
                status=status,
                created_at=created_at,
            )
        )

    return _add_log


@pytest.fixture
def days_ago(now):
    def _days_ago(days, **extra):
        return now - timedelta(days=days, **extra)

    return _days_ago
