# checkout/api/routers/carts.py
from fastapi import APIRouter, Depends

from checkout.api.deps import get_cart_service
from checkout.domain.identity import Caller
from checkout.domain.schemas import (
    CartItemIn,
    CartItemOut,
    CartItemUpdateIn,
    CartOut,
    ClearCartOut,
    MessageOut,
)
from checkout.services.cart_service import CartService
from checkout.utils.auth import get_current_caller

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("", response_model=CartOut)
def get_cart(
    caller: Caller = Depends(get_current_caller),
    svc: CartService = Depends(get_cart_service),
):
    return svc.get_cart(caller.id)


@router.post("/items", response_model=CartItemOut)
def add_item(
    payload: CartItemIn,
    caller: Caller = Depends(get_current_caller),
    svc: CartService = Depends(get_cart_service),
):
    return svc.add_item(caller.id, payload.product_id, payload.quantity)


@router.put("/items/{item_id}", response_model=CartItemOut)
def update_item(
    item_id: int,
    payload: CartItemUpdateIn,
    caller: Caller = Depends(get_current_caller),
    svc: CartService = Depends(get_cart_service),
):
    return svc.update_quantity(caller.id, item_id, payload.quantity)


@router.delete("/items/{item_id}", response_model=MessageOut)
def remove_item(
    item_id: int,
    caller: Caller = Depends(get_current_caller),
    svc: CartService = Depends(get_cart_service),
):
    svc.remove_item(caller.id, item_id)
    return {"message": "Item removed from cart"}


@router.delete("", response_model=ClearCartOut)
def clear_cart(
    caller: Caller = Depends(get_current_caller),
    svc: CartService = Depends(get_cart_service),
):
    removed = svc.clear_cart(caller.id)
    return {"message": "Cart cleared", "removed": removed}
