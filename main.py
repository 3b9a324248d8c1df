from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

import config
from checkout import PAYMENT_METHODS
from formatting import format_idr
from schemas import AdminTab, View
from store import Storefront

# Error code -> HTTP status
ERROR_STATUS = {
    "unknown_product": 404,
    "not_found": 404,
    "validation_error": 422,
    "invalid_quantity": 422,
    "bad_params": 422,
    "empty_cart": 409,
    "checkout_in_progress": 409,
    "invalid_transition": 409,
}


# Helpers
def get_storefront(request: Request) -> Storefront:
    return request.app.state.storefront


async def run_intent(storefront: Storefront, intent: str, **params: Any) -> Dict[str, Any]:
    result = await storefront.dispatch(intent, **params)
    if not result["ok"]:
        error = result["error"]
        raise HTTPException(status_code=ERROR_STATUS.get(error["code"], 400), detail=error)
    return {"result": result["data"], "state": storefront.snapshot()}


# Models
class NavigateRequest(BaseModel):
    view: View


class SearchRequest(BaseModel):
    query: str


class AddToCartRequest(BaseModel):
    product_id: int
    qty: int = Field(1, ge=1)


class ChangeQtyRequest(BaseModel):
    delta: int


class CheckoutFieldRequest(BaseModel):
    field: str
    value: str


class PaymentMethodRequest(BaseModel):
    payment_method: str


class AdminTabRequest(BaseModel):
    tab: AdminTab


def create_app(storefront: Optional[Storefront] = None) -> FastAPI:
    config.configure_logging()
    app = FastAPI(title="SegarFarm Storefront API")
    app.state.storefront = storefront or Storefront()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    def read_root():
        return {"message": "SegarFarm Storefront API running"}

    # Catalog
    @app.get("/api/products")
    def list_products(
        q: Optional[str] = Query(None),
        category: Optional[str] = Query(None),
        sf: Storefront = Depends(get_storefront),
    ):
        return {"items": sf.catalog.search(q, category)}

    @app.get("/api/products/{product_id}")
    def get_product(product_id: int, sf: Storefront = Depends(get_storefront)):
        product = sf.catalog.find_by_id(product_id)
        if product is None:
            raise HTTPException(status_code=404, detail="Product not found")
        return product

    @app.get("/api/categories")
    def list_categories(sf: Storefront = Depends(get_storefront)):
        return {"categories": ["all", *sf.catalog.categories()]}

    @app.get("/api/payment-methods")
    def list_payment_methods():
        return {"items": PAYMENT_METHODS}

    # Session state and intents
    @app.get("/api/state")
    def get_state(sf: Storefront = Depends(get_storefront)):
        return sf.snapshot()

    @app.post("/api/navigate")
    async def navigate(payload: NavigateRequest, sf: Storefront = Depends(get_storefront)):
        return await run_intent(sf, "navigate", view=payload.view)

    @app.post("/api/search")
    async def search(payload: SearchRequest, sf: Storefront = Depends(get_storefront)):
        return await run_intent(sf, "search", query=payload.query)

    @app.delete("/api/search")
    async def clear_search(sf: Storefront = Depends(get_storefront)):
        return await run_intent(sf, "clear_search")

    @app.post("/api/products/{product_id}/select")
    async def select_product(product_id: int, sf: Storefront = Depends(get_storefront)):
        return await run_intent(sf, "select_product", product_id=product_id)

    @app.post("/api/cart/items")
    async def add_to_cart(payload: AddToCartRequest, sf: Storefront = Depends(get_storefront)):
        return await run_intent(sf, "add_to_cart", product_id=payload.product_id, qty=payload.qty)

    @app.patch("/api/cart/items/{product_id}")
    async def change_qty(product_id: int, payload: ChangeQtyRequest, sf: Storefront = Depends(get_storefront)):
        return await run_intent(sf, "change_qty", product_id=product_id, delta=payload.delta)

    @app.delete("/api/cart/items/{product_id}")
    async def remove_from_cart(product_id: int, sf: Storefront = Depends(get_storefront)):
        return await run_intent(sf, "remove_from_cart", product_id=product_id)

    @app.post("/api/checkout/start")
    async def start_checkout(sf: Storefront = Depends(get_storefront)):
        return await run_intent(sf, "start_checkout")

    @app.patch("/api/checkout/form")
    async def update_checkout_field(payload: CheckoutFieldRequest, sf: Storefront = Depends(get_storefront)):
        return await run_intent(sf, "update_checkout_field", field=payload.field, value=payload.value)

    @app.put("/api/checkout/payment-method")
    async def select_payment_method(payload: PaymentMethodRequest, sf: Storefront = Depends(get_storefront)):
        return await run_intent(sf, "select_payment_method", method_id=payload.payment_method)

    @app.get("/api/checkout/summary")
    def checkout_summary(sf: Storefront = Depends(get_storefront)):
        subtotal = sf.cart.total
        payable = config.payable_total(subtotal)
        return {
            "subtotal": subtotal,
            "service_fee": config.SERVICE_FEE,
            "payable_total": payable,
            "display": {
                "subtotal": format_idr(subtotal),
                "service_fee": format_idr(config.SERVICE_FEE),
                "payable_total": format_idr(payable),
            },
        }

    @app.post("/api/checkout/submit")
    async def submit_checkout(sf: Storefront = Depends(get_storefront)):
        return await run_intent(sf, "submit_checkout")

    # Admin demo; the role is a routing flag, not an access check
    @app.post("/api/admin/enter")
    async def enter_admin(sf: Storefront = Depends(get_storefront)):
        return await run_intent(sf, "enter_admin_demo")

    @app.post("/api/admin/exit")
    async def exit_admin(sf: Storefront = Depends(get_storefront)):
        return await run_intent(sf, "exit_admin")

    @app.put("/api/admin/tab")
    async def select_admin_tab(payload: AdminTabRequest, sf: Storefront = Depends(get_storefront)):
        return await run_intent(sf, "select_admin_tab", tab=payload.tab)

    @app.get("/api/admin/overview")
    def admin_overview(sf: Storefront = Depends(get_storefront)):
        return sf.admin_overview()

    @app.get("/api/admin/orders")
    def admin_orders(sf: Storefront = Depends(get_storefront)):
        return {"items": sf.ledger.list()}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
