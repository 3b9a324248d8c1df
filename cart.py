"""
Cart engine: line items kept against the catalog.

- one line per product id, lines ordered by first add
- decrementing never drops a line below qty 1; removal is a separate action
- stock is not checked; quantities are unbounded above
"""
import logging
from typing import Iterable, List

from catalog import CatalogStore
from errors import InvalidQuantity
from schemas import CartLine

logger = logging.getLogger(__name__)


def compute_total(lines: Iterable[CartLine]) -> int:
    return sum(line.product.price * line.qty for line in lines)


class CartEngine:
    def __init__(self, catalog: CatalogStore) -> None:
        self.catalog = catalog
        self._lines: List[CartLine] = []

    def _find(self, product_id: int):
        for line in self._lines:
            if line.product.id == product_id:
                return line
        return None

    def add_to_cart(self, product_id: int, qty: int = 1) -> CartLine:
        """Add qty of a catalog product, merging into an existing line if present."""
        if qty < 1:
            raise InvalidQuantity(qty)
        product = self.catalog.require(product_id)
        line = self._find(product_id)
        if line is not None:
            line.qty += qty
        else:
            line = CartLine(product=product, qty=qty)
            self._lines.append(line)
        logger.debug("Cart add product=%s qty=%s -> %s", product_id, qty, line.qty)
        return line

    def remove_from_cart(self, product_id: int) -> None:
        self._lines = [line for line in self._lines if line.product.id != product_id]

    def update_qty(self, product_id: int, delta: int) -> None:
        line = self._find(product_id)
        if line is None:
            return
        line.qty = max(1, line.qty + delta)

    def clear_cart(self) -> None:
        self._lines = []

    def lines(self) -> List[CartLine]:
        """Copies of the current lines; mutating them does not touch the cart."""
        return [line.model_copy() for line in self._lines]

    @property
    def total(self) -> int:
        return compute_total(self._lines)

    @property
    def item_count(self) -> int:
        return sum(line.qty for line in self._lines)

    def is_empty(self) -> bool:
        return not self._lines

    def __len__(self) -> int:
        return len(self._lines)
