from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

import config


class PaymentKind(str, Enum):
    VIRTUAL_ACCOUNT = "VIRTUAL_ACCOUNT"
    EWALLET = "EWALLET"
    CASH_ON_DELIVERY = "CASH_ON_DELIVERY"


class OrderStatus(str, Enum):
    WAITING_FOR_PAYMENT = "WAITING_FOR_PAYMENT"
    PENDING = "PENDING"
    # Declared for display; nothing advances an order past its creation status.
    PAID = "PAID"
    COMPLETED = "COMPLETED"


class View(str, Enum):
    HOME = "HOME"
    SHOP = "SHOP"
    PRODUCT_DETAIL = "PRODUCT_DETAIL"
    CART = "CART"
    CHECKOUT = "CHECKOUT"
    SUCCESS = "SUCCESS"
    ADMIN = "ADMIN"


class Role(str, Enum):
    CUSTOMER = "CUSTOMER"
    ADMIN = "ADMIN"


class AdminTab(str, Enum):
    OVERVIEW = "OVERVIEW"
    PRODUCTS = "PRODUCTS"
    ORDERS = "ORDERS"


class CheckoutState(str, Enum):
    IDLE = "IDLE"
    SUBMITTING = "SUBMITTING"
    ORDER_CREATED = "ORDER_CREATED"
    VALIDATION_FAILED = "VALIDATION_FAILED"


# Catalog
class Product(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Stable product identifier")
    name: str = Field(..., description="Product name")
    price: int = Field(..., ge=0, description="Price in rupiah")
    category: str = Field(..., description="Product category")
    stock: int = Field(..., ge=0, description="Units on hand, display only")
    unit: str = Field(..., description="Unit label, e.g. 'kg'")
    description: Optional[str] = Field(None, description="Product description")
    image: Optional[str] = Field(None, description="Image URL")


# Cart
class CartLine(BaseModel):
    product: Product
    qty: int = Field(1, ge=1)

    @computed_field
    @property
    def subtotal(self) -> int:
        return self.product.price * self.qty


# Checkout
class CheckoutForm(BaseModel):
    name: str = ""
    phone: str = ""
    address: str = ""
    payment_method: str = ""


class PaymentMethod(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str
    kind: PaymentKind
    icon: Optional[str] = None


class PaymentInstruction(BaseModel):
    issuer_label: str
    reference: str
    expiry: str = Field(..., description="Expiry formatted for display")
    expires_at: datetime
    amount: int = Field(..., ge=0, description="Charged amount including the service fee")


class Order(BaseModel):
    id: str
    created_at: datetime
    customer: CheckoutForm
    items: List[CartLine]
    total: int = Field(..., ge=0, description="Subtotal, service fee excluded")
    status: OrderStatus
    payment_method_label: str
    payment_instruction: Optional[PaymentInstruction] = None

    @computed_field
    @property
    def payable_total(self) -> int:
        return config.payable_total(self.total)


# Ledger
class LedgerSummary(BaseModel):
    total_orders: int
    total_sales_excluding_awaiting_payment: int


class AdminOverview(BaseModel):
    summary: LedgerSummary
    recent_orders: List[Order]
    orders: List[Order]
    products: List[Product]
    low_stock_ids: List[int]


# Outbound notification
class CartSnapshot(BaseModel):
    lines: List[CartLine]
    total: int
    item_count: int


class CheckoutSnapshot(BaseModel):
    form: CheckoutForm
    state: CheckoutState
    missing_fields: List[str]
    can_submit: bool
    last_error: Optional[dict] = None


class StorefrontSnapshot(BaseModel):
    view: View
    role: Optional[Role] = None
    admin_tab: AdminTab
    search_query: str
    products: List[Product]
    selected_product: Optional[Product] = None
    cart: CartSnapshot
    checkout: CheckoutSnapshot
    last_order: Optional[Order] = None
