"""FastAPI routes for the Ordering domain — cart, checkout, orders, payment intents.

The shopper's cart and order history live in per-session storage; the session
id travels in a cookie that is issued on first contact.
"""

import os
from uuid import uuid4

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from protean.exceptions import ValidationError

from ordering.api.schemas import (
    AddCartItemRequest,
    CartResponse,
    CheckoutRequest,
    CheckoutResponse,
    ConfirmPaymentRequest,
    LineItemSchema,
    OrderHistoryEntryResponse,
    OrderResponse,
    OrderSummaryResponse,
    PaymentIntentRequest,
    PaymentIntentResponse,
    StatusSchema,
    UpdateCartItemRequest,
)
from ordering.cart.catalog import get_catalog_reader
from ordering.cart.codec import decode_items, encode_line_item
from ordering.cart.line_item import item_count, total_amount
from ordering.cart.store import CartStore
from ordering.checkout.errors import DecodeError, InvalidCheckoutState
from ordering.checkout.intent import open_payment_intent
from ordering.checkout.orchestrator import CheckoutOrchestrator, CheckoutState, PaymentConfirmation
from ordering.checkout.submission import OrderSubmission, customer_info_from
from ordering.lifecycle.history import OrderHistory
from ordering.lifecycle.status import display_status
from ordering.order.service import OrderService
from ordering.storage import session_store
from payments.gateway import get_currency, get_gateway

logger = structlog.get_logger(__name__)

MAX_QUANTITY_PER_ADD = 10
HISTORY_UNAVAILABLE = "Order history could not be loaded"


# ---------------------------------------------------------------------------
# Session plumbing
# ---------------------------------------------------------------------------
def _cookie_name() -> str:
    return os.getenv("STOREFRONT_SESSION_COOKIE", "storefront_session")


def get_session_id(request: Request, response: Response) -> str:
    """Session id from the cookie, issuing a new one when absent."""
    name = _cookie_name()
    session_id = request.cookies.get(name)
    if not session_id:
        session_id = uuid4().hex
        response.set_cookie(name, session_id, httponly=True, samesite="lax")
    structlog.contextvars.bind_contextvars(session_id=session_id)
    return session_id


def get_cart(session_id: str = Depends(get_session_id)) -> CartStore:
    return CartStore(session_store(session_id))


def get_history(session_id: str = Depends(get_session_id)) -> OrderHistory:
    return OrderHistory(session_store(session_id))


def _orchestrator(cart, history) -> CheckoutOrchestrator:
    return CheckoutOrchestrator(
        cart=cart,
        history=history,
        orders=OrderService(),
        gateway=get_gateway(),
        currency=get_currency(),
    )


def _cart_response(items) -> CartResponse:
    return CartResponse(
        items=[LineItemSchema.model_validate(encode_line_item(item)) for item in items],
        total_amount=total_amount(items),
        item_count=item_count(items),
    )


def _status(raw) -> StatusSchema:
    display = display_status(raw)
    return StatusSchema(value=raw, label=display.label, colour=display.colour)


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def view_cart(cart: CartStore = Depends(get_cart)) -> CartResponse:
    return _cart_response(cart.load(reset_on_error=True))


@cart_router.post("/items", response_model=CartResponse)
async def add_cart_item(body: AddCartItemRequest, cart: CartStore = Depends(get_cart)) -> CartResponse:
    product = get_catalog_reader().get_product(body.product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")

    ceiling = min(MAX_QUANTITY_PER_ADD, product.stock or 0)
    if ceiling < 1:
        raise ValidationError({"quantity": ["Product is out of stock"]})
    if body.quantity > ceiling:
        raise ValidationError({"quantity": [f"Quantity must be at most {ceiling}"]})

    cart.load(reset_on_error=True)
    return _cart_response(cart.add(product, body.quantity))


@cart_router.put("/items/{product_id}", response_model=CartResponse)
async def update_cart_item(
    product_id: str, body: UpdateCartItemRequest, cart: CartStore = Depends(get_cart)
) -> CartResponse:
    cart.load(reset_on_error=True)
    return _cart_response(cart.set_quantity(product_id, body.quantity))


@cart_router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_cart_item(product_id: str, cart: CartStore = Depends(get_cart)) -> CartResponse:
    cart.load(reset_on_error=True)
    return _cart_response(cart.remove(product_id))


@cart_router.delete("", status_code=204)
async def clear_cart(cart: CartStore = Depends(get_cart)) -> Response:
    cart.clear()
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Checkout Router
# ---------------------------------------------------------------------------
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])


@checkout_router.post("", status_code=201, response_model=CheckoutResponse)
async def start_checkout(
    body: CheckoutRequest,
    cart: CartStore = Depends(get_cart),
    history: OrderHistory = Depends(get_history),
):
    cart.load(reset_on_error=True)
    orchestrator = _orchestrator(cart, history)
    session = orchestrator.submit(body.customer_info.model_dump())
    if orchestrator.state is CheckoutState.FAILED:
        return JSONResponse(status_code=502, content={"error": orchestrator.message})

    return CheckoutResponse(
        order_id=session.order_id,
        client_secret=session.client_secret,
        payment_intent_id=session.payment_intent_id,
        total_amount=session.total_amount,
    )


@checkout_router.post("/{order_id}/confirm", response_model=OrderSummaryResponse)
async def confirm_payment(
    order_id: str,
    body: ConfirmPaymentRequest,
    cart: CartStore = Depends(get_cart),
    history: OrderHistory = Depends(get_history),
):
    """Payment widget callback; on success this is the order-success page."""
    orders = OrderService()
    if orders.get_order_by_id(order_id) is None:
        raise HTTPException(status_code=404, detail="Order not found")

    orchestrator = CheckoutOrchestrator.resume(
        order_id, cart=cart, history=history, orders=orders, gateway=get_gateway(), currency=get_currency()
    )
    try:
        succeeded = orchestrator.confirm_payment(PaymentConfirmation(succeeded=body.succeeded, message=body.message))
    except InvalidCheckoutState as exc:
        logger.warning("order_not_awaiting_payment", order_id=order_id, error=str(exc))
        return JSONResponse(status_code=409, content={"error": "Order is not awaiting payment"})
    except DecodeError as exc:
        logger.warning("order_history_unreadable", reason=exc.reason)
        return JSONResponse(status_code=503, content={"error": HISTORY_UNAVAILABLE})
    if not succeeded:
        return JSONResponse(status_code=402, content={"error": orchestrator.message})

    entry = history.get(order_id)
    return OrderSummaryResponse(
        order_id=entry.id,
        items=[LineItemSchema.model_validate(encode_line_item(item)) for item in entry.items],
        total_amount=entry.total_amount,
        status=entry.status,
    )


# ---------------------------------------------------------------------------
# Orders Router
# ---------------------------------------------------------------------------
orders_router = APIRouter(prefix="/orders", tags=["orders"])


@orders_router.get("/history", response_model=list[OrderHistoryEntryResponse])
async def order_history(history: OrderHistory = Depends(get_history)):
    try:
        entries = history.entries()
    except DecodeError as exc:
        logger.warning("order_history_unreadable", reason=exc.reason)
        return JSONResponse(status_code=503, content={"error": HISTORY_UNAVAILABLE})

    return [
        OrderHistoryEntryResponse(
            id=entry.id,
            items=[LineItemSchema.model_validate(encode_line_item(item)) for item in entry.items],
            total_amount=entry.total_amount,
            status=_status(entry.status),
            created_at=entry.created_at,
            updated_at=entry.updated_at,
        )
        for entry in reversed(entries)
    ]


@orders_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    order = OrderService().get_order_by_id(order_id)
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")

    payload = order.to_payload()
    payload["status"] = _status(order.status)
    return OrderResponse.model_validate(payload)


# ---------------------------------------------------------------------------
# Payment intent endpoint
# ---------------------------------------------------------------------------
payment_intent_router = APIRouter(prefix="/api", tags=["payments"])


@payment_intent_router.post("/create-payment-intent", response_model=PaymentIntentResponse)
async def create_payment_intent(request: Request):
    """Persist a pending order, then open a payment intent for it.

    Any failure, including a malformed body, yields the same 500 response.
    """
    try:
        body = PaymentIntentRequest.model_validate(await request.json())
        submission = OrderSubmission(
            items=decode_items([item.model_dump(by_alias=True) for item in body.items]),
            total_amount=body.total_amount,
            customer_info=customer_info_from(body.customer_info.model_dump()),
        )
        session = open_payment_intent(submission, OrderService(), get_gateway(), get_currency())
    except Exception:
        logger.exception("payment_intent_endpoint_failed")
        return JSONResponse(status_code=500, content={"error": "Payment intent creation failed"})

    return PaymentIntentResponse(client_secret=session.client_secret, order_id=session.order_id)
