# checkout/api/routers/orders.py
from fastapi import APIRouter, Depends

from checkout.api.deps import get_order_service
from checkout.domain.identity import Caller
from checkout.domain.schemas import OrderCreate, OrderOut, OrdersOut, OrderStatusUpdate
from checkout.services.order_service import OrderService
from checkout.utils.auth import get_current_caller, require_admin

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=OrderOut, status_code=201)
def create_order(
    payload: OrderCreate,
    caller: Caller = Depends(get_current_caller),
    svc: OrderService = Depends(get_order_service),
):
    """
    Tworzy zamowienie z koszyka zalogowanego uzytkownika i czysci koszyk.
    """
    return svc.create_order_from_cart(
        user_id=caller.id,
        shipping_address=payload.shipping_address,
        shipping_method=payload.shipping_method,
        payment_method=payload.payment_method,
    )


@router.get("", response_model=OrdersOut)
def list_orders(
    caller: Caller = Depends(get_current_caller),
    svc: OrderService = Depends(get_order_service),
):
    return {"orders": svc.list_orders(caller)}


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    caller: Caller = Depends(get_current_caller),
    svc: OrderService = Depends(get_order_service),
):
    return svc.get_order(caller, order_id)


@router.put("/{order_id}/status", response_model=OrderOut)
def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    caller: Caller = Depends(require_admin),
    svc: OrderService = Depends(get_order_service),
):
    return svc.update_status(caller, order_id, payload.status)


@router.put("/{order_id}/cancel", response_model=OrderOut)
def cancel_order(
    order_id: int,
    caller: Caller = Depends(get_current_caller),
    svc: OrderService = Depends(get_order_service),
):
    return svc.cancel_order(caller, order_id)
