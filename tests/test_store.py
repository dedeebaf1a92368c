"""
Tests for RecordStore adapters:
- InMemoryRecordStore (engine default in tests)
- DjangoRecordStore (ORM, requires db)
- Commerce cascade delete
"""

from datetime import timedelta
from decimal import Decimal

import pytest

from clubman.adapters import get_record_store
from clubman.adapters.django_store import DjangoRecordStore
from clubman.adapters.memory import InMemoryRecordStore
from clubman.exceptions import ClubmanError
from clubman.protocols import RecordStore
from clubman.protocols.records import (
    SCHEMA,
    CommerceInfo,
    CustomerInfo,
    ReminderLogInfo,
    ReminderStatus,
    RewardInfo,
    RewardType,
    TransactionInfo,
    table_for,
)
from clubman.services.accrual import AccrualService
from clubman.services.commerce import delete_commerce_cascade


class TestSchema:
    def test_tables(self):
        assert set(SCHEMA.values()) == {
            "commerces",
            "customers",
            "transactions",
            "rewards",
            "whatsapp_reminders_log",
        }
        assert table_for(ReminderLogInfo) == "whatsapp_reminders_log"

    def test_unknown_record_type(self):
        with pytest.raises(ClubmanError) as exc:
            table_for(dict)

        assert exc.value.code == "UNKNOWN_TABLE"

    def test_adapters_satisfy_protocol(self):
        assert isinstance(InMemoryRecordStore(), RecordStore)
        assert isinstance(DjangoRecordStore(), RecordStore)


# ═══════════════════════════════════════════════════════════════════
# InMemoryRecordStore
# ═══════════════════════════════════════════════════════════════════


class TestInMemoryRecordStore:
    def test_insert_and_get(self, store, commerce):
        assert store.get_by_id(CommerceInfo, commerce.id) == commerce
        assert store.get_by_id(CommerceInfo, "missing") is None

    def test_update_returns_new_record(self, store, customer):
        updated = store.update(CustomerInfo, customer.id, total_points=10)

        assert updated.total_points == 10
        assert customer.total_points == 0
        assert store.update(CustomerInfo, "missing", total_points=1) is None

    def test_filter(self, store, commerce, customer, customer_b):
        assert store.filter(CustomerInfo, commerce_id=commerce.id) == [customer, customer_b]
        assert store.filter(CustomerInfo, lambda c: c.name.startswith("M")) == [customer_b]

    def test_delete(self, store, customer):
        assert store.delete(CustomerInfo, customer.id) is True
        assert store.delete(CustomerInfo, customer.id) is False

    def test_atomic_rolls_back(self, store, customer):
        with pytest.raises(RuntimeError):
            with store.atomic():
                store.update(CustomerInfo, customer.id, total_points=99)
                store.delete(CustomerInfo, customer.id)
                raise RuntimeError("boom")

        assert store.get_by_id(CustomerInfo, customer.id) == customer

    def test_seeded_records(self, commerce, customer):
        seeded = InMemoryRecordStore([commerce, customer])

        assert seeded.get_all(CustomerInfo) == [customer]

    def test_default_backend_from_settings(self, settings):
        settings.CLUBMAN = {"RECORD_STORE_BACKEND": "clubman.adapters.memory.InMemoryRecordStore"}

        assert isinstance(get_record_store(), InMemoryRecordStore)

    def test_cascade_delete(self, store, commerce, customer, other_commerce, add_visit, add_log, now):
        survivor = store.insert(CustomerInfo(commerce_id=other_commerce.id, name="Otro"))
        add_visit(customer, now)
        add_visit(survivor, now)
        add_log(customer, ReminderStatus.SENT, now)

        assert delete_commerce_cascade(store, commerce.id) is True

        assert store.get_by_id(CommerceInfo, commerce.id) is None
        assert store.filter(RewardInfo, commerce_id=commerce.id) == []
        assert store.get_all(CustomerInfo) == [survivor]
        assert [tx.customer_id for tx in store.get_all(TransactionInfo)] == [survivor.id]
        assert store.get_all(ReminderLogInfo) == []
        assert delete_commerce_cascade(store, commerce.id) is False


# ═══════════════════════════════════════════════════════════════════
# DjangoRecordStore
# ═══════════════════════════════════════════════════════════════════


@pytest.fixture
def orm_store(db):
    return DjangoRecordStore()


@pytest.fixture
def orm_commerce(orm_store):
    commerce = orm_store.insert(
        CommerceInfo(
            name="Heladería Norte",
            enable_points=True,
            enable_stars=True,
            points_value=Decimal("10"),
            stars_goal=5,
        )
    )
    reward = orm_store.insert(
        RewardInfo(
            commerce_id=commerce.id,
            name="Cucurucho",
            reward_type=RewardType.POINTS,
            points_threshold=100,
        )
    )
    return orm_store.update(CommerceInfo, commerce.id, points_reward_id=reward.id)


@pytest.fixture
def orm_customer(orm_store, orm_commerce):
    return orm_store.insert(
        CustomerInfo(
            commerce_id=orm_commerce.id,
            name="Sofía",
            phone="+5491155550003",
            qr_token="CUST-0000CCCC",
        )
    )


class TestDjangoRecordStore:
    def test_insert_returns_record_with_string_ids(self, orm_commerce, orm_customer):
        assert isinstance(orm_customer.id, str)
        assert orm_customer.commerce_id == orm_commerce.id
        assert isinstance(orm_commerce.points_reward_id, str)
        assert orm_customer.created_at is not None

    def test_get_by_id(self, orm_store, orm_customer):
        found = orm_store.get_by_id(CustomerInfo, orm_customer.id)

        assert found.name == "Sofía"
        assert found.qr_token == "CUST-0000CCCC"

    def test_get_by_invalid_id(self, orm_store):
        assert orm_store.get_by_id(CustomerInfo, "not-a-uuid") is None

    def test_update(self, orm_store, orm_customer):
        updated = orm_store.update(CustomerInfo, orm_customer.id, total_points=42, current_stars=3)

        assert updated.total_points == 42
        assert updated.current_stars == 3

    def test_update_unknown_field(self, orm_store, orm_customer):
        with pytest.raises(TypeError):
            orm_store.update(CustomerInfo, orm_customer.id, balance=1)

    def test_update_missing_row(self, orm_store):
        missing = "00000000-0000-0000-0000-000000000000"

        assert orm_store.update(CustomerInfo, missing, total_points=1) is None

    def test_filter(self, orm_store, orm_commerce, orm_customer):
        assert [c.id for c in orm_store.filter(CustomerInfo, commerce_id=orm_commerce.id)] == [orm_customer.id]
        assert orm_store.filter(CustomerInfo, commerce_id="bad") == []
        assert orm_store.filter(CustomerInfo, lambda c: c.total_points > 0, commerce_id=orm_commerce.id) == []

    def test_delete(self, orm_store, orm_customer):
        assert orm_store.delete(CustomerInfo, orm_customer.id) is True
        assert orm_store.get_by_id(CustomerInfo, orm_customer.id) is None
        assert orm_store.delete(CustomerInfo, orm_customer.id) is False

    def test_transaction_round_trip(self, orm_store, orm_commerce, orm_customer, now):
        tx = orm_store.insert(
            TransactionInfo(
                commerce_id=orm_commerce.id,
                customer_id=orm_customer.id,
                amount=Decimal("150.25"),
                points=15,
                created_at=now,
            )
        )

        stored = orm_store.get_by_id(TransactionInfo, tx.id)

        assert stored.amount == Decimal("150.25")
        assert stored.created_at == now
        assert stored.customer_id == orm_customer.id

    def test_atomic_rolls_back(self, orm_store, orm_customer):
        with pytest.raises(RuntimeError):
            with orm_store.atomic():
                orm_store.update(CustomerInfo, orm_customer.id, total_points=99)
                raise RuntimeError("boom")

        assert orm_store.get_by_id(CustomerInfo, orm_customer.id).total_points == 0

    def test_register_purchase_end_to_end(self, orm_store, orm_commerce, orm_customer, now):
        from clubman.models import Commerce, Customer, Transaction

        service = AccrualService(store=orm_store)

        for _ in range(2):
            assert service.register_purchase(orm_commerce.id, orm_customer.id, "15", now=now).ok

        customer = Customer.objects.get(pk=orm_customer.id)
        assert customer.total_points == 2
        assert customer.current_stars == 2
        assert Transaction.objects.filter(customer=customer).count() == 2
        assert Commerce.objects.get(pk=orm_commerce.id).scans_current_month == 2

    def test_redeem_end_to_end(self, orm_store, orm_commerce, orm_customer, now):
        orm_store.update(CustomerInfo, orm_customer.id, total_points=100)

        result = AccrualService(store=orm_store).register_purchase(
            orm_commerce.id,
            orm_customer.id,
            "0",
            reward_id=orm_commerce.points_reward_id,
            now=now + timedelta(minutes=1),
        )

        assert result.ok
        assert result.customer.total_points == 0
        assert result.transaction.redeemed_reward_id == orm_commerce.points_reward_id

    def test_cascade_delete(self, orm_store, orm_commerce, orm_customer, now):
        from clubman.models import Customer, Reward, Transaction

        AccrualService(store=orm_store).register_purchase(orm_commerce.id, orm_customer.id, "10", now=now)

        assert delete_commerce_cascade(orm_store, orm_commerce.id) is True
        assert not Customer.objects.exists()
        assert not Reward.objects.exists()
        assert not Transaction.objects.exists()

    def test_insert_applies_model_defaults(self, orm_store):
        commerce = orm_store.insert(CommerceInfo(name="Kiosco"))

        assert commerce.scans_reset_date is not None
        assert commerce.created_at is not None

    def test_record_defaults_match_model(self):
        from clubman.models import Commerce

        record = CommerceInfo(name="Kiosco")

        for name in ("customer_limit", "monthly_scan_limit", "scans_current_month", "stars_goal"):
            assert getattr(record, name) == Commerce._meta.get_field(name).default, name
