"""
Storefront: the session's application state and its single dispatch entry point.

Every user intent goes through ``dispatch``; each runs to completion before
the next is taken. Subscribers get a ``StorefrontSnapshot`` after every
successful update.
"""
import asyncio
import inspect
import logging
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError, validate_call

from cart import CartEngine
from catalog import CatalogStore
from checkout import REQUIRED_FIELDS, CheckoutSimulator, find_payment_method, missing_fields
from errors import (
    CheckoutInProgress,
    CheckoutValidationError,
    ProductNotFound,
    StorefrontError,
)
from ledger import OrderLedger
from navigation import Navigator
from schemas import (
    AdminOverview,
    AdminTab,
    CartSnapshot,
    CheckoutForm,
    CheckoutSnapshot,
    Order,
    StorefrontSnapshot,
    View,
)

logger = logging.getLogger(__name__)

Subscriber = Callable[[StorefrontSnapshot], None]


class Storefront:
    def __init__(
        self,
        catalog: Optional[CatalogStore] = None,
        ledger: Optional[OrderLedger] = None,
        checkout: Optional[CheckoutSimulator] = None,
    ) -> None:
        # Explicit None checks: an empty ledger is falsy.
        self.catalog = catalog if catalog is not None else CatalogStore()
        if checkout is not None:
            if ledger is not None and ledger is not checkout.ledger:
                raise ValueError("checkout simulator must record into the storefront ledger")
            self.ledger = checkout.ledger
            self.checkout = checkout
        else:
            self.ledger = ledger if ledger is not None else OrderLedger()
            self.checkout = CheckoutSimulator(self.ledger)
        self.cart = CartEngine(self.catalog)
        self.navigator = Navigator()
        self.form = CheckoutForm()
        self.last_order: Optional[Order] = None
        self._subscribers: List[Subscriber] = []
        self._handlers: Dict[str, Callable[..., Any]] = {
            "navigate": self._navigate,
            "search": self._search,
            "clear_search": self._clear_search,
            "select_product": self._select_product,
            "add_to_cart": self._add_to_cart,
            "remove_from_cart": self._remove_from_cart,
            "change_qty": self._change_qty,
            "start_checkout": self._start_checkout,
            "update_checkout_field": self._update_checkout_field,
            "select_payment_method": self._select_payment_method,
            "submit_checkout": self._submit_checkout,
            "enter_admin_demo": self._enter_admin_demo,
            "exit_admin": self._exit_admin,
            "select_admin_tab": self._select_admin_tab,
        }

    # -------------------- dispatch --------------------

    def intents(self) -> List[str]:
        return sorted(self._handlers)

    async def dispatch(self, intent: str, **params: Any) -> Dict[str, Any]:
        """Run one intent and return ``{"ok", "intent", "data" | "error"}``.

        Storefront errors come back as results; cart and ledger are left as
        they were before the intent.
        """
        handler = self._handlers.get(intent)
        if handler is None:
            return {
                "ok": False,
                "intent": intent,
                "error": {"code": "unknown_intent", "message": f"unknown intent: {intent}"},
            }
        try:
            inspect.signature(handler).bind(**params)
        except TypeError as exc:
            return {
                "ok": False,
                "intent": intent,
                "error": {"code": "bad_params", "message": str(exc)},
            }

        logger.debug("Intent %s %s", intent, params)
        previous_query = self.navigator.search_query
        try:
            data = handler(**params)
            if inspect.isawaitable(data):
                data = await data
        except ValidationError as exc:
            logger.info("Intent %s rejected: bad params", intent)
            return {
                "ok": False,
                "intent": intent,
                "error": {"code": "bad_params", "message": str(exc)},
            }
        except StorefrontError as exc:
            logger.info("Intent %s rejected: %s", intent, exc.message)
            return {"ok": False, "intent": intent, "error": exc.to_dict()}

        self._notify()
        if self.navigator.needs_search_redirect(previous_query):
            # next tick, so the update that changed the query finishes first
            await asyncio.sleep(0)
            if self.navigator.apply_search_redirect():
                self._notify()

        return {"ok": True, "intent": intent, "data": data}

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        if not self._subscribers:
            return
        snap = self.snapshot()
        for callback in list(self._subscribers):
            callback(snap)

    # -------------------- snapshots --------------------

    def snapshot(self) -> StorefrontSnapshot:
        nav = self.navigator
        missing = missing_fields(self.form)
        last_error = self.checkout.last_error
        return StorefrontSnapshot(
            view=nav.view,
            role=nav.role,
            admin_tab=nav.admin_tab,
            search_query=nav.search_query,
            products=self.catalog.search(nav.search_query),
            selected_product=nav.selected_product,
            cart=CartSnapshot(
                lines=self.cart.lines(),
                total=self.cart.total,
                item_count=self.cart.item_count,
            ),
            checkout=CheckoutSnapshot(
                form=self.form.model_copy(),
                state=self.checkout.state,
                missing_fields=missing,
                can_submit=not missing and not self.cart.is_empty() and not self.checkout.is_submitting,
                last_error=last_error.to_dict() if last_error is not None else None,
            ),
            last_order=self.last_order,
        )

    def admin_overview(self) -> AdminOverview:
        return AdminOverview(
            summary=self.ledger.aggregate(),
            recent_orders=self.ledger.recent(5),
            orders=self.ledger.list(),
            products=self.catalog.list_products(),
            low_stock_ids=[p.id for p in self.catalog.low_stock()],
        )

    # -------------------- handlers --------------------

    def _guard_not_submitting(self) -> None:
        if self.checkout.is_submitting:
            raise CheckoutInProgress()

    @validate_call
    def _navigate(self, view: View) -> View:
        self.navigator.navigate(view)
        return self.navigator.view

    @validate_call
    def _search(self, query: str) -> str:
        self.navigator.search(query)
        return query

    def _clear_search(self) -> None:
        self.navigator.clear_search()

    @validate_call
    def _select_product(self, product_id: int):
        product = self.catalog.find_by_id(product_id)
        if product is None:
            raise ProductNotFound(product_id)
        self.navigator.select_product(product)
        return product

    @validate_call
    def _add_to_cart(self, product_id: int, qty: int = 1):
        self._guard_not_submitting()
        return self.cart.add_to_cart(product_id, qty)

    @validate_call
    def _remove_from_cart(self, product_id: int) -> None:
        self._guard_not_submitting()
        self.cart.remove_from_cart(product_id)

    @validate_call
    def _change_qty(self, product_id: int, delta: int) -> None:
        self._guard_not_submitting()
        self.cart.update_qty(product_id, delta)

    def _start_checkout(self) -> bool:
        self._guard_not_submitting()
        self.checkout.reset()
        return self.navigator.start_checkout(self.cart.is_empty())

    @validate_call
    def _update_checkout_field(self, field: str, value: str) -> CheckoutForm:
        self._guard_not_submitting()
        if field not in REQUIRED_FIELDS:
            raise CheckoutValidationError(field, f"Unknown checkout field: {field}")
        setattr(self.form, field, value)
        self.checkout.reset()
        return self.form.model_copy()

    @validate_call
    def _select_payment_method(self, method_id: str) -> CheckoutForm:
        self._guard_not_submitting()
        if find_payment_method(method_id) is None:
            raise CheckoutValidationError("payment_method", f"Unknown payment method: {method_id}")
        self.form.payment_method = method_id
        self.checkout.reset()
        return self.form.model_copy()

    async def _submit_checkout(self) -> Order:
        order = await self.checkout.submit(self.cart, self.form, on_submitting=self._notify)
        self.last_order = order
        self.navigator.payment_confirmed()
        return order

    def _enter_admin_demo(self) -> None:
        self.navigator.enter_admin_demo()

    def _exit_admin(self) -> None:
        self.navigator.exit_admin()

    @validate_call
    def _select_admin_tab(self, tab: AdminTab) -> AdminTab:
        self.navigator.select_admin_tab(tab)
        return tab
