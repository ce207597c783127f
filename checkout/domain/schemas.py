# checkout/domain/schemas.py
from datetime import datetime
from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from checkout.domain.order_status import OrderStatus


class CartItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: int = Field(..., gt=0, description="ID produktu (musi byc > 0)")
    quantity: int = Field(..., gt=0, description="Ilosc produktu (musi byc > 0)")


class CartItemUpdateIn(BaseModel):
    quantity: int = Field(..., gt=0, description="Nowa ilosc (musi byc > 0)")


class ProductSummary(BaseModel):
    """Dane produktu z katalogu, tylko informacyjnie."""

    id: int
    title: str
    price: Decimal
    images: List[str] = []
    seller_id: int | str | None = None


class CartItemOut(BaseModel):
    id: int
    user_id: int
    product_id: int
    quantity: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CartLineOut(CartItemOut):
    product: ProductSummary | None = None


class CartOut(BaseModel):
    items: List[CartLineOut]
    total_amount: Decimal
    item_count: int


class ClearCartOut(BaseModel):
    message: str
    removed: int


class MessageOut(BaseModel):
    message: str


class OrderCreate(BaseModel):
    """Schema dla tworzenia zamowienia z koszyka zalogowanego uzytkownika."""

    shipping_address: str = Field(..., min_length=1)
    shipping_method: str = Field(..., min_length=1)
    payment_method: str = Field(..., min_length=1, description="Zapisywane, nie obciazane")


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class OrderProductOut(BaseModel):
    """Aktualne dane produktu z katalogu, cena i subtotal pozycji pozostaja ze snapshotu."""

    title: str
    images: List[str] = []
    seller_id: int | str | None = None


class OrderItemOut(BaseModel):
    id: int
    order_id: int
    product_id: int
    quantity: int
    price: Decimal
    subtotal: Decimal
    product: OrderProductOut | None = None

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    """Schema dla zamowienia (response)."""

    id: int
    user_id: int
    items: List[OrderItemOut]
    total_amount: Decimal
    status: OrderStatus
    shipping_address: str
    shipping_method: str
    payment_method: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrdersOut(BaseModel):
    orders: List[OrderOut]
