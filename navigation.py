"""
View / navigation state machine.

Views change only through explicit intents, with one implicit rule: when an
update changes the search query to a non-empty value while the view is not
SHOP, a move to SHOP is due on the next scheduling tick. Clearing the query
never navigates.

The admin role is a routing flag for the demo, not access control.
"""
import logging
from typing import Optional

from errors import InvalidTransition
from schemas import AdminTab, Product, Role, View

logger = logging.getLogger(__name__)

# Views the navigate intent may target directly; the rest have their own intents.
DIRECT_VIEWS = (View.HOME, View.SHOP, View.CART, View.ADMIN)


class Navigator:
    def __init__(self) -> None:
        self.view: View = View.HOME
        self.role: Optional[Role] = None
        self.admin_tab: AdminTab = AdminTab.OVERVIEW
        self.search_query: str = ""
        self.selected_product: Optional[Product] = None

    def _go(self, view: View) -> None:
        if view != self.view:
            logger.debug("View %s -> %s", self.view.value, view.value)
        self.view = view

    def navigate(self, view: View) -> None:
        if view not in DIRECT_VIEWS:
            raise InvalidTransition(f"Cannot navigate directly to {view.value}")
        if view == View.ADMIN and self.role != Role.ADMIN:
            raise InvalidTransition("Admin view requires the admin role")
        if view in (View.HOME, View.SHOP):
            self.search_query = ""
        self._go(view)

    def search(self, query: str) -> None:
        self.search_query = query

    def clear_search(self) -> None:
        self.search_query = ""

    def select_product(self, product: Product) -> None:
        self.selected_product = product
        self._go(View.PRODUCT_DETAIL)

    def start_checkout(self, cart_empty: bool) -> bool:
        if cart_empty:
            return False
        self._go(View.CHECKOUT)
        return True

    def payment_confirmed(self) -> None:
        self.selected_product = None
        self._go(View.SUCCESS)

    def enter_admin_demo(self) -> None:
        self.role = Role.ADMIN
        self.admin_tab = AdminTab.OVERVIEW
        self._go(View.ADMIN)

    def exit_admin(self) -> None:
        self.role = None
        self._go(View.HOME)

    def select_admin_tab(self, tab: AdminTab) -> None:
        if self.view != View.ADMIN:
            raise InvalidTransition("Admin tabs are only available in the admin view")
        self.admin_tab = tab

    def needs_search_redirect(self, previous_query: str) -> bool:
        return (
            bool(self.search_query)
            and self.search_query != previous_query
            and self.view != View.SHOP
        )

    def apply_search_redirect(self) -> bool:
        # Re-checked at fire time; the view may have changed since scheduling.
        if self.search_query and self.view != View.SHOP:
            self._go(View.SHOP)
            return True
        return False
