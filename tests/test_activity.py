"""Tests for ActivityService summaries and analytics."""

from datetime import timedelta
from decimal import Decimal

import pytest

from clubman.protocols.records import CustomerInfo, TransactionInfo
from clubman.services.activity import EMPTY_SUMMARY, ActivityService, summarize_transactions


@pytest.fixture
def service(store):
    return ActivityService(store=store)


class TestSummarize:
    """Summaries are derived from the transaction log."""

    def test_no_transactions_gives_empty_summary(self, service, customer):
        summary = service.summarize(customer.id)

        assert summary == EMPTY_SUMMARY
        assert summary.last_visit_at is None
        assert summary.total_visits == 0
        assert summary.total_amount == 0
        assert summary.recent_transactions == ()

    def test_unknown_customer_gives_empty_summary(self, service):
        assert service.summarize("missing") == EMPTY_SUMMARY

    def test_summary_fields(self, service, customer, customer_b, add_visit, days_ago):
        add_visit(customer, days_ago(10), "100.50")
        add_visit(customer, days_ago(2), "49.50")
        add_visit(customer, days_ago(5), "10")
        add_visit(customer_b, days_ago(1), "999")

        summary = service.summarize(customer.id)

        assert summary.last_visit_at == days_ago(2)
        assert summary.total_visits == 3
        assert summary.total_amount == Decimal("160.00")
        assert [tx.created_at for tx in summary.recent_transactions] == [days_ago(2), days_ago(5), days_ago(10)]

    def test_recent_transactions_capped(self, service, customer, add_visit, days_ago):
        for day in range(12):
            add_visit(customer, days_ago(day))

        summary = service.summarize(customer.id)

        assert summary.total_visits == 12
        assert len(summary.recent_transactions) == 10
        assert summary.recent_transactions[0].created_at == days_ago(0)

    def test_summarize_transactions_accepts_any_order(self, customer, now):
        txs = [
            TransactionInfo(customer.commerce_id, customer.id, Decimal("1"), 0, now - timedelta(hours=h))
            for h in (5, 1, 3)
        ]

        assert summarize_transactions(txs).last_visit_at == now - timedelta(hours=1)

    def test_summaries_for_commerce(self, service, customer, customer_b, add_visit, days_ago):
        add_visit(customer, days_ago(3))
        add_visit(customer, days_ago(4))

        summaries = service.summaries_for_commerce(customer.commerce_id)

        assert set(summaries) == {customer.id}
        assert summaries[customer.id].total_visits == 2
        assert summaries.get(customer_b.id, EMPTY_SUMMARY) is EMPTY_SUMMARY


class TestCommerceViews:
    def test_inactive_customers(self, service, customer, customer_b, store, commerce, add_visit, days_ago, now):
        never = store.insert(CustomerInfo(commerce_id=commerce.id, name="Nunca vino"))
        add_visit(customer, days_ago(40))
        add_visit(customer_b, days_ago(3))

        inactive = service.inactive_customers(commerce.id, 30, now=now)

        assert [c.id for c, _ in inactive] == [customer.id]
        assert never.id not in [c.id for c, _ in inactive]

    def test_top_customers_by_visits(self, service, commerce, customer, customer_b, add_visit, days_ago):
        add_visit(customer, days_ago(1), "10")
        add_visit(customer_b, days_ago(1), "10")
        add_visit(customer_b, days_ago(2), "10")

        top = service.top_customers(commerce.id, by="visits")

        assert [c.id for c, _ in top] == [customer_b.id, customer.id]

    def test_top_customers_by_amount(self, service, commerce, customer, customer_b, add_visit, days_ago):
        add_visit(customer, days_ago(1), "500")
        add_visit(customer_b, days_ago(1), "10")
        add_visit(customer_b, days_ago(2), "10")

        top = service.top_customers(commerce.id, by="amount", limit=1)

        assert [c.id for c, _ in top] == [customer.id]

    def test_top_customers_unknown_ranking(self, service, commerce):
        with pytest.raises(ValueError):
            service.top_customers(commerce.id, by="age")

    def test_commerce_analytics(self, service, store, commerce, customer, customer_b, points_reward, add_visit, days_ago, now):
        store.insert(CustomerInfo(commerce_id=commerce.id, name="Nunca vino"))
        add_visit(customer, days_ago(5))
        add_visit(customer_b, days_ago(45))
        store.insert(
            TransactionInfo(
                commerce.id,
                customer.id,
                Decimal("0"),
                0,
                days_ago(1),
                redeemed_reward_id=points_reward.id,
            )
        )

        analytics = service.commerce_analytics(commerce.id, now=now)

        assert analytics.total_members == 3
        assert analytics.active_count == 1
        assert analytics.inactive_count == 2
        assert analytics.rewards_delivered == 1
        assert analytics.return_rate == pytest.approx(100 / 3)

    def test_commerce_analytics_without_members(self, service, other_commerce, now):
        analytics = service.commerce_analytics(other_commerce.id, now=now)

        assert analytics.total_members == 0
        assert analytics.return_rate == 0.0

    def test_active_benefits_count(self, service, store, commerce, customer, customer_b, now):
        store.update(CustomerInfo, customer.id, discount_available=True, discount_expires_at=now + timedelta(days=1))
        store.update(CustomerInfo, customer_b.id, discount_available=True, discount_expires_at=now - timedelta(days=1))
        store.update(CustomerInfo, customer_b.id, total_points=600, current_stars=5)

        # customer: coupon; customer_b: points reward + stars goal
        assert service.active_benefits_count(commerce.id, now=now) == 3

    def test_active_benefits_unknown_commerce(self, service):
        assert service.active_benefits_count("missing") == 0
