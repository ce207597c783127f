# checkout/repos/order_repo.py
from datetime import datetime, timezone
from typing import List

from sqlalchemy import select, update
from sqlalchemy.orm import selectinload

from checkout.data.models.order import OrderModel
from checkout.repos.base import BaseRepo


class OrderRepo(BaseRepo):

    def create_order(self, order: OrderModel) -> OrderModel:
        # flush zamiast commit, commit robi wlasciciel transakcji
        self.db.add(order)
        self.db.flush()
        return order

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel)
            .where(OrderModel.id == order_id)
            .options(selectinload(OrderModel.items))
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def list_orders_by_user(self, user_id: int) -> List[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .where(OrderModel.user_id == user_id)
                .options(selectinload(OrderModel.items))
                .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            ).scalars()
        )

    def update_order_status(self, order_id: int, old_status: str, new_status: str) -> int:
        # warunek na stary status, tak jak optimistic locking na version
        result = self.db.execute(
            update(OrderModel)
            .where(OrderModel.id == order_id, OrderModel.status == old_status)
            .values(status=new_status, updated_at=datetime.now(timezone.utc))
        )
        return result.rowcount
