"""Tests for the order ledger."""

from datetime import datetime

from ledger import OrderLedger
from schemas import CheckoutForm, Order, OrderStatus


def make_order(order_id, total, status):
    return Order(
        id=order_id,
        created_at=datetime(2026, 10, 19, 9, 0),
        customer=CheckoutForm(name="A", phone="1", address="X", payment_method="cod"),
        items=[],
        total=total,
        status=status,
        payment_method_label="Cash on Delivery",
    )


class TestOrderLedger:
    def test_record_is_most_recent_first(self):
        ledger = OrderLedger()
        ledger.record(make_order("ORD-1", 100, OrderStatus.PENDING))
        ledger.record(make_order("ORD-2", 200, OrderStatus.PENDING))
        assert [o.id for o in ledger.list()] == ["ORD-2", "ORD-1"]

    def test_aggregate_excludes_awaiting_payment_from_sales(self):
        ledger = OrderLedger()
        ledger.record(make_order("ORD-1", 45000, OrderStatus.WAITING_FOR_PAYMENT))
        ledger.record(make_order("ORD-2", 70000, OrderStatus.PENDING))
        ledger.record(make_order("ORD-3", 10000, OrderStatus.COMPLETED))
        summary = ledger.aggregate()
        assert summary.total_orders == 3
        assert summary.total_sales_excluding_awaiting_payment == 80000

    def test_empty_aggregate(self):
        summary = OrderLedger().aggregate()
        assert summary.total_orders == 0
        assert summary.total_sales_excluding_awaiting_payment == 0

    def test_recent_limit(self):
        ledger = OrderLedger()
        for i in range(7):
            ledger.record(make_order(f"ORD-{i}", 1, OrderStatus.PENDING))
        assert [o.id for o in ledger.recent()] == ["ORD-6", "ORD-5", "ORD-4", "ORD-3", "ORD-2"]

    def test_contains_by_id(self):
        ledger = OrderLedger()
        ledger.record(make_order("ORD-1", 1, OrderStatus.PENDING))
        assert "ORD-1" in ledger
        assert "ORD-2" not in ledger

    def test_list_is_a_copy(self):
        ledger = OrderLedger()
        ledger.record(make_order("ORD-1", 1, OrderStatus.PENDING))
        ledger.list().clear()
        assert len(ledger) == 1
