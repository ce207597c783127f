# checkout/api/deps.py
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from checkout.data.database import get_db
from checkout.services.cart_service import CartService
from checkout.services.notification_service import NotificationService
from checkout.services.order_service import OrderService
from checkout.services.product_client import ProductClient


@lru_cache(maxsize=1)
def get_product_client() -> ProductClient:
    # jeden klient (i pula polaczen requests.Session) na proces
    return ProductClient()


def get_notification_service() -> NotificationService:
    return NotificationService()


def get_cart_service(
    db: Session = Depends(get_db),
    product_client: ProductClient = Depends(get_product_client),
) -> CartService:
    return CartService(db=db, product_client=product_client)


def get_order_service(
    db: Session = Depends(get_db),
    product_client: ProductClient = Depends(get_product_client),
    notification_service: NotificationService = Depends(get_notification_service),
) -> OrderService:
    return OrderService(
        db=db,
        product_client=product_client,
        notification_service=notification_service,
    )
