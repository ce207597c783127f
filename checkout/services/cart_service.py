# checkout/services/cart_service.py
from decimal import Decimal
from typing import Any, Dict

from sqlalchemy.orm import Session

from checkout.data.models.cart_item import CartItemModel
from checkout.domain.errors import ForbiddenError, NotFoundError, ValidationError
from checkout.repos.cart_repo import CartRepo
from checkout.services.product_summary import product_summary
from checkout.services.product_client import ProductClient
from checkout.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Use case'y koszyka, jeden koszyk = zbior wierszy cart_items danego usera.
    commands (add, update, remove, clear) modyfikuja stan
    query (get) tylko odczyt, ceny z katalogu sa informacyjne
    """

    def __init__(self, db: Session, product_client: ProductClient):
        self.repo = CartRepo(db)
        self.product_client = product_client

    #query - odczyt
    def get_cart(self, user_id: int) -> Dict[str, Any]:
        items = self.repo.list_items(user_id)

        lines = []
        total = Decimal("0.00")
        for item in items:
            product = self._product_summary(item.product_id)
            if product is not None:
                total += product["price"] * item.quantity

            lines.append(
                {
                    "id": item.id,
                    "user_id": item.user_id,
                    "product_id": item.product_id,
                    "quantity": item.quantity,
                    "created_at": item.created_at,
                    "updated_at": item.updated_at,
                    "product": product,
                }
            )

        return {
            "items": lines,
            "total_amount": total,
            "item_count": len(lines),
        }

    def _product_summary(self, product_id: int) -> Dict[str, Any] | None:
        # koszyk pokazuje produkt tylko z poprawna cena, inaczej nie da sie policzyc total
        summary = product_summary(self.product_client, product_id)
        if summary is None or summary["price"] is None:
            return None
        return summary

    #commands
    def add_item(self, user_id: int, product_id: int, quantity: int) -> CartItemModel:
        if quantity <= 0:
            raise ValidationError("Quantity must be greater than 0")

        with self.repo.transaction():
            if self.repo.increment_quantity(user_id, product_id, quantity):
                logger.info(
                    f"Product {product_id} already in cart of user {user_id}, "
                    f"quantity increased by {quantity}"
                )
            else:
                # wyscig na insert konczy sie IntegrityError -> ConflictError
                logger.info(f"Adding product {product_id} to cart of user {user_id}")
                self.repo.add_item(
                    CartItemModel(
                        user_id=user_id,
                        product_id=product_id,
                        quantity=quantity,
                    )
                )

            item = self.repo.get_item_by_product(user_id, product_id)

        return item

    def update_quantity(self, user_id: int, item_id: int, quantity: int) -> CartItemModel:
        if quantity <= 0:
            raise ValidationError("Quantity must be greater than 0")

        with self.repo.transaction():
            item = self._owned_item(user_id, item_id)
            if item is None:
                raise NotFoundError("Cart item not found")

            item.quantity = quantity
            self.repo.add_item(item)

        logger.info(f"Cart item {item_id} of user {user_id} set to quantity {quantity}")
        return item

    def remove_item(self, user_id: int, item_id: int) -> bool:
        """Idempotentne, brak pozycji nie jest bledem. Zwraca czy cos usunieto."""
        with self.repo.transaction():
            item = self._owned_item(user_id, item_id)
            if item is None:
                return False
            self.repo.delete_item(item)

        logger.info(f"Cart item {item_id} removed from cart of user {user_id}")
        return True

    def clear_cart(self, user_id: int) -> int:
        with self.repo.transaction():
            removed = self.repo.delete_by_user(user_id)

        logger.info(f"Cart of user {user_id} cleared, {removed} item(s) removed")
        return removed

    def _owned_item(self, user_id: int, item_id: int) -> CartItemModel | None:
        item = self.repo.get_item(item_id)
        if item is not None and item.user_id != user_id:
            raise ForbiddenError("You do not have permission to modify this cart item")
        return item
