from typing import Any, Dict, Optional


class StorefrontError(Exception):
    """Base for every recoverable error the storefront reports back to the caller."""

    code = "storefront_error"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.field is not None:
            data["field"] = self.field
        return data


class UnknownProduct(StorefrontError):
    code = "unknown_product"

    def __init__(self, product_id: int):
        super().__init__(f"Unknown product id: {product_id}")
        self.product_id = product_id


class ProductNotFound(StorefrontError):
    code = "not_found"

    def __init__(self, product_id: int):
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


class InvalidQuantity(StorefrontError):
    code = "invalid_quantity"

    def __init__(self, qty: int):
        super().__init__(f"Quantity must be at least 1, got {qty}", field="qty")
        self.qty = qty


class CheckoutValidationError(StorefrontError):
    code = "validation_error"

    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(message or f"{field} is required", field=field)


class EmptyCart(StorefrontError):
    code = "empty_cart"

    def __init__(self):
        super().__init__("Cart is empty")


class CheckoutInProgress(StorefrontError):
    code = "checkout_in_progress"

    def __init__(self):
        super().__init__("A checkout submission is already in progress")


class InvalidTransition(StorefrontError):
    code = "invalid_transition"
