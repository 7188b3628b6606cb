"""FastAPI routes for the Ordering domain."""

import json

from fastapi import APIRouter, FastAPI, Request, Response
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError
from protean.integrations.fastapi import register_exception_handlers as register_protean_exception_handlers
from protean.utils.globals import current_domain

from ordering.api.schemas import CancelOrderRequest, CreateOrderRequest, ErrorResponse
from ordering.exceptions import PublishError
from ordering.order import queries
from ordering.order.cancellation import DEFAULT_CANCELLATION_REASON, CancelOrder
from ordering.order.creation import CreateOrder
from ordering.order.dto import OrderDTO
from ordering.order.order import OrderStatus

order_router = APIRouter(prefix="/api/orders", tags=["orders"])

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


@order_router.post("", status_code=201, response_model=OrderDTO, responses=_ERROR_RESPONSES)
def create_order(body: CreateOrderRequest) -> OrderDTO:
    command = CreateOrder(
        customer_id=body.customer_id,
        customer_name=body.customer_name,
        items=json.dumps([{"product_id": item.product_id, "quantity": item.quantity} for item in body.items]),
    )
    return current_domain.process(command, asynchronous=False)


@order_router.get("", response_model=list[OrderDTO])
def list_orders(status: OrderStatus | None = None) -> list[OrderDTO]:
    return queries.list_orders(status)


@order_router.get("/{order_id}", response_model=OrderDTO, responses=_ERROR_RESPONSES)
def get_order(order_id: str) -> OrderDTO:
    return queries.get_order(order_id)


@order_router.post("/{order_id}/cancel", status_code=204, responses=_ERROR_RESPONSES)
def cancel_order(order_id: str, body: CancelOrderRequest | None = None) -> Response:
    reason = (body.reason if body else None) or DEFAULT_CANCELLATION_REASON
    current_domain.process(CancelOrder(order_id=order_id, reason=reason), asynchronous=False)
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Error handling
# ---------------------------------------------------------------------------
async def publish_error_handler(request: Request, exc: PublishError) -> JSONResponse:
    return JSONResponse(status_code=502, content={"error": exc.messages})


async def version_conflict_handler(request: Request, exc: ExpectedVersionError) -> JSONResponse:
    return JSONResponse(status_code=409, content={"error": str(exc)})


def register_exception_handlers(app: FastAPI) -> None:
    """Protean's standard mappings plus the ordering-specific ones.

    - validation errors (InvalidAmount, InvalidArgument, ...) -> 400
    - NotFound / unknown order                                 -> 404
    - InvalidTransition, concurrent update                     -> 409
    - event could not be published                             -> 502
    """
    register_protean_exception_handlers(app)
    app.add_exception_handler(PublishError, publish_error_handler)
    app.add_exception_handler(ExpectedVersionError, version_conflict_handler)
