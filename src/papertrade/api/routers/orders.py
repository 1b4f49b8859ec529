"""Order API: place, preview and list orders for the current user."""

from fastapi import APIRouter, Depends, Query

from papertrade.api.deps import get_current_user_id, get_ledger_service, get_portfolio_service
from papertrade.api.schemas.orders import (
    OrderCreateRequest,
    OrderConfirmationResponse,
    OrderListResponse,
    OrderPreviewResponse,
    OrderResponse,
    PlaceOrderResponse,
)
from papertrade.services import LedgerService, PortfolioService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=PlaceOrderResponse, status_code=201)
def place_order(
    data: OrderCreateRequest,
    user_id: str = Depends(get_current_user_id),
    service: PortfolioService = Depends(get_portfolio_service),
):
    """
    Execute an order immediately.

    MARKET orders fill at the feed price (the body price only when the feed
    has none); LIMIT orders fill at the body price. Rejections return
    {"ok": false, "error": <CODE>, "message": ...} with status 400.
    """
    confirmation = service.place_order(user_id, data.to_domain())
    return PlaceOrderResponse(order=OrderConfirmationResponse.from_domain(confirmation))


@router.post("/preview", response_model=OrderPreviewResponse)
def preview_order(
    data: OrderCreateRequest,
    user_id: str = Depends(get_current_user_id),
    service: PortfolioService = Depends(get_portfolio_service),
):
    """Estimate brokerage and total for an order without executing it."""
    preview = service.preview_order(user_id, data.to_domain())
    return OrderPreviewResponse.from_domain(preview)


@router.get("", response_model=OrderListResponse)
def list_orders(
    limit: int = Query(20, ge=1, le=100, description="Maximum number of orders"),
    user_id: str = Depends(get_current_user_id),
    ledger: LedgerService = Depends(get_ledger_service),
):
    """Order history, newest first."""
    orders = ledger.order_history(user_id, limit=limit)
    return OrderListResponse(
        orders=[OrderResponse.from_domain(o) for o in orders],
        count=len(orders),
    )
