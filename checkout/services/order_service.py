# checkout/services/order_service.py
from typing import List

from sqlalchemy.orm import Session

from checkout.data.models.order import OrderModel
from checkout.data.models.order_item import OrderItemModel
from checkout.domain.errors import (
    ConflictError,
    EmptyCartError,
    ForbiddenError,
    InvalidTransitionError,
    NotFoundError,
)
from checkout.domain.identity import Caller
from checkout.domain.order_status import OrderStatus, can_transition
from checkout.repos.cart_repo import CartRepo
from checkout.repos.order_repo import OrderRepo
from checkout.services.notification_service import NotificationService
from checkout.services.price_snapshot import PriceSnapshotResolver, total_of
from checkout.services.product_client import ProductClient
from checkout.services.product_summary import product_summary
from checkout.utils.logging import get_logger

logger = get_logger(__name__)


def can_access(caller: Caller, order: OrderModel) -> bool:
    return order.user_id == caller.id or caller.is_admin


class OrderService:
    """
    Serwis odpowiedzialny za domene zamowien:
    - atomowe przejscie koszyk -> zamowienie
    - maszyna stanow statusu
    - kontrola dostepu przy odczycie i modyfikacji
    """

    def __init__(
        self,
        db: Session,
        product_client: ProductClient,
        notification_service: NotificationService | None = None,
    ):
        self.db = db
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)
        self.product_client = product_client
        self.resolver = PriceSnapshotResolver(product_client)
        self.notification_service = notification_service or NotificationService()

    def create_order_from_cart(
        self,
        user_id: int,
        shipping_address: str,
        shipping_method: str,
        payment_method: str,
    ) -> OrderModel:
        """
        Use Case: Tworzenie zamowienia z koszyka.

        Jedna transakcja: blokada wierszy koszyka, snapshot cen,
        insert orders + order_items, usuniecie zablokowanych pozycji koszyka.
        Dowolny blad = rollback calosci, koszyk zostaje nietkniety.
        """
        with self.repo.transaction():
            cart_items = self.cart_repo.lock_items(user_id)

            if not cart_items:
                raise EmptyCartError()

            snapshots = self.resolver.resolve(cart_items)
            total = total_of(snapshots)

            order = OrderModel(
                user_id=user_id,
                total_amount=total,
                status=OrderStatus.PENDING.value,
                shipping_address=shipping_address,
                shipping_method=shipping_method,
                payment_method=payment_method,
                items=[
                    OrderItemModel(
                        product_id=s.product_id,
                        quantity=s.quantity,
                        price=s.price,
                        subtotal=s.subtotal,
                    )
                    for s in snapshots
                ],
            )
            self.repo.create_order(order)

            # usuwamy tylko to co zablokowalismy, pozycje dodane w miedzyczasie zostaja
            removed = self.cart_repo.delete_items(item.id for item in cart_items)
            if removed != len(cart_items):
                raise ConflictError("Cart changed during checkout, please retry")

        logger.info(
            f"Order {order.id} created for user {user_id} "
            f"with {len(snapshots)} item(s), total {total}"
        )

        self.notification_service.order_created(user_id, order.id, total)

        return self._with_products([self._load(order.id)])[0]

    #query
    def get_order(self, caller: Caller, order_id: int) -> OrderModel:
        """Istnienie sprawdzane przed wlascicielem: obcy dostaje 403, nie 404."""
        order = self._load(order_id)

        if not can_access(caller, order):
            raise ForbiddenError("You do not have permission to view this order")

        return self._with_products([order])[0]

    def list_orders(self, caller: Caller) -> List[OrderModel]:
        return self._with_products(self.repo.list_orders_by_user(caller.id))

    #commands
    def update_status(self, caller: Caller, order_id: int, status: OrderStatus) -> OrderModel:
        if not caller.is_admin:
            raise ForbiddenError("You do not have permission to update order status")

        order = self._load(order_id)
        current = OrderStatus(order.status)

        if current == status:
            return self._with_products([order])[0]

        if not can_transition(current, status):
            raise InvalidTransitionError(
                f"Cannot change order status from {current.value} to {status.value}"
            )

        return self._transition(order, current, status)

    def cancel_order(self, caller: Caller, order_id: int) -> OrderModel:
        order = self._load(order_id)

        if not can_access(caller, order):
            raise ForbiddenError("You do not have permission to cancel this order")

        if order.status != OrderStatus.PENDING.value:
            raise InvalidTransitionError("Only pending orders can be cancelled")

        return self._transition(order, OrderStatus.PENDING, OrderStatus.CANCELLED)

    def _transition(self, order: OrderModel, current: OrderStatus, target: OrderStatus) -> OrderModel:
        with self.repo.transaction():
            rowcount = self.repo.update_order_status(order.id, current.value, target.value)

            # ktos zmienil status pomiedzy odczytem a zapisem
            if rowcount == 0:
                raise ConflictError("Order status was changed concurrently, please retry")

        logger.info(f"Order {order.id} status {current.value} -> {target.value}")

        self.notification_service.order_status_changed(order.user_id, order.id, target.value)

        return self._with_products([self._load(order.id)])[0]

    def _load(self, order_id: int) -> OrderModel:
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFoundError("Order not found")
        return order

    def _with_products(self, orders: List[OrderModel]) -> List[OrderModel]:
        # best effort, tylko informacyjnie; price i subtotal pozycji zostaja ze snapshotu
        summaries = {}
        for order in orders:
            for item in order.items:
                if item.product_id not in summaries:
                    summaries[item.product_id] = product_summary(self.product_client, item.product_id)
                item.product = summaries[item.product_id]
        return orders
