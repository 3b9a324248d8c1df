from typing import List

from schemas import LedgerSummary, Order, OrderStatus


class OrderLedger:
    """Session-local placed orders, most recent first."""

    def __init__(self) -> None:
        self._orders: List[Order] = []

    def record(self, order: Order) -> None:
        self._orders.insert(0, order)

    def list(self) -> List[Order]:
        return list(self._orders)

    def recent(self, limit: int = 5) -> List[Order]:
        return self._orders[:limit]

    def aggregate(self) -> LedgerSummary:
        sales = sum(
            o.total for o in self._orders if o.status != OrderStatus.WAITING_FOR_PAYMENT
        )
        return LedgerSummary(
            total_orders=len(self._orders),
            total_sales_excluding_awaiting_payment=sales,
        )

    def __contains__(self, order_id: object) -> bool:
        return any(o.id == order_id for o in self._orders)

    def __len__(self) -> int:
        return len(self._orders)
