"""
Checkout / payment simulator.

State flow for one submission:
- IDLE -> SUBMITTING -> ORDER_CREATED
- IDLE -> VALIDATION_FAILED, back to IDLE on the next form edit or checkout start

The payment side is a simulation: instructions come from a fixed per-method
table, nothing is sent to a gateway, and a validated submission always succeeds.
"""
import asyncio
import logging
from datetime import datetime, timedelta
from typing import Awaitable, Callable, Dict, List, Optional, Tuple

import config
from cart import CartEngine
from errors import CheckoutInProgress, CheckoutValidationError, EmptyCart
from formatting import format_datetime_id
from ledger import OrderLedger
from schemas import (
    CheckoutForm,
    CheckoutState,
    Order,
    OrderStatus,
    PaymentInstruction,
    PaymentKind,
    PaymentMethod,
)

logger = logging.getLogger(__name__)


PAYMENT_METHODS: List[PaymentMethod] = [
    PaymentMethod(id="bca_va", display_name="BCA Virtual Account (Midtrans)", kind=PaymentKind.VIRTUAL_ACCOUNT, icon="🏦"),
    PaymentMethod(id="permata_va", display_name="Permata Virtual Account (Midtrans)", kind=PaymentKind.VIRTUAL_ACCOUNT, icon="💳"),
    PaymentMethod(id="gopay", display_name="GoPay / QRIS (Midtrans)", kind=PaymentKind.EWALLET, icon="📱"),
    PaymentMethod(id="cod", display_name="Cash on Delivery", kind=PaymentKind.CASH_ON_DELIVERY, icon="💵"),
]

# method id -> (issuer label, reference); placeholders, not real accounts
PAYMENT_ISSUERS: Dict[str, Tuple[str, str]] = {
    "bca_va": ("BCA", "7008890123456789"),
    "permata_va": ("Permata Bank", "852029876543210"),
    "gopay": ("GOPAY", "QR Code Generated (Simulasi)"),
}

REQUIRED_FIELDS = ("name", "phone", "address")


def find_payment_method(method_id: str) -> Optional[PaymentMethod]:
    for method in PAYMENT_METHODS:
        if method.id == method_id:
            return method
    return None


def missing_fields(form: CheckoutForm) -> List[str]:
    """Every field that currently blocks submission, in form order."""
    missing = [f for f in REQUIRED_FIELDS if not getattr(form, f).strip()]
    if find_payment_method(form.payment_method) is None:
        missing.append("payment_method")
    return missing


def validate(form: CheckoutForm) -> Optional[CheckoutValidationError]:
    """Return the first validation error, or None when the form can be submitted."""
    missing = missing_fields(form)
    if not missing:
        return None
    field = missing[0]
    if field == "payment_method" and form.payment_method:
        return CheckoutValidationError(field, f"Unknown payment method: {form.payment_method}")
    return CheckoutValidationError(field)


def build_payment_instruction(
    method: PaymentMethod, total: int, now: datetime
) -> Optional[PaymentInstruction]:
    if method.kind == PaymentKind.CASH_ON_DELIVERY:
        return None
    issuer = PAYMENT_ISSUERS.get(method.id)
    if issuer is None:
        return None
    issuer_label, reference = issuer
    expires_at = now + timedelta(hours=config.PAYMENT_EXPIRY_HOURS)
    return PaymentInstruction(
        issuer_label=issuer_label,
        reference=reference,
        expiry=format_datetime_id(expires_at),
        expires_at=expires_at,
        amount=config.payable_total(total),
    )


class CheckoutSimulator:
    def __init__(
        self,
        ledger: OrderLedger,
        delay_seconds: Optional[float] = None,
        clock: Optional[Callable[[], datetime]] = None,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ) -> None:
        self.ledger = ledger
        self.delay_seconds = config.SUBMIT_DELAY_SECONDS if delay_seconds is None else delay_seconds
        self._clock = clock or datetime.now
        self._sleep = sleep or asyncio.sleep
        self.state = CheckoutState.IDLE
        self.last_error: Optional[CheckoutValidationError] = None

    @property
    def is_submitting(self) -> bool:
        return self.state == CheckoutState.SUBMITTING

    def reset(self) -> None:
        """Back to IDLE; a pending submission is left alone."""
        if self.state != CheckoutState.SUBMITTING:
            self.state = CheckoutState.IDLE
            self.last_error = None

    def _next_order_id(self, now: datetime) -> str:
        base = f"ORD-{int(now.timestamp() * 1000)}"
        order_id = base
        n = 1
        while order_id in self.ledger:
            n += 1
            order_id = f"{base}-{n}"
        return order_id

    async def submit(
        self,
        cart: CartEngine,
        form: CheckoutForm,
        on_submitting: Optional[Callable[[], None]] = None,
    ) -> Order:
        if self.is_submitting:
            raise CheckoutInProgress()
        if cart.is_empty():
            raise EmptyCart()
        error = validate(form)
        if error is not None:
            self.state = CheckoutState.VALIDATION_FAILED
            self.last_error = error
            raise error

        method = find_payment_method(form.payment_method)
        customer = form.model_copy()
        items = cart.lines()
        total = cart.total
        self.state = CheckoutState.SUBMITTING
        self.last_error = None
        logger.debug("Submitting checkout via %s, total=%s", method.id, total)
        if on_submitting is not None:
            on_submitting()

        await self._sleep(self.delay_seconds)

        now = self._clock()
        instruction = build_payment_instruction(method, total, now)
        if method.kind == PaymentKind.CASH_ON_DELIVERY:
            status = OrderStatus.PENDING
        else:
            status = OrderStatus.WAITING_FOR_PAYMENT
        order = Order(
            id=self._next_order_id(now),
            created_at=now,
            customer=customer,
            items=items,
            total=total,
            status=status,
            payment_method_label=method.display_name,
            payment_instruction=instruction,
        )
        self.ledger.record(order)
        cart.clear_cart()
        self.state = CheckoutState.ORDER_CREATED
        logger.info("Order %s created: status=%s total=%s", order.id, order.status.value, order.total)
        return order
