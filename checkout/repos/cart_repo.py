# checkout/repos/cart_repo.py
from datetime import datetime, timezone
from typing import Iterable, List

from sqlalchemy import delete, select, update

from checkout.data.models.cart_item import CartItemModel
from checkout.repos.base import BaseRepo


class CartRepo(BaseRepo):

    def get_item(self, item_id: int) -> CartItemModel | None:
        return self.db.get(CartItemModel, item_id)

    def get_item_by_product(self, user_id: int, product_id: int) -> CartItemModel | None:
        # populate_existing, obiekt w sesji moze miec nieaktualne quantity
        return self.db.execute(
            select(CartItemModel)
            .where(
                CartItemModel.user_id == user_id,
                CartItemModel.product_id == product_id,
            )
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def list_items(self, user_id: int) -> List[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.user_id == user_id)
                .order_by(CartItemModel.id)
            ).scalars()
        )

    def lock_items(self, user_id: int) -> List[CartItemModel]:
        # SELECT ... FOR UPDATE, rownolegly checkout tego samego usera czeka na commit
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.user_id == user_id)
                .order_by(CartItemModel.id)
                .with_for_update()
            ).scalars()
        )

    def add_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def increment_quantity(self, user_id: int, product_id: int, quantity: int) -> int:
        # quantity = quantity + :q liczone w bazie, rownolegle dodania sie sumuja
        result = self.db.execute(
            update(CartItemModel)
            .where(
                CartItemModel.user_id == user_id,
                CartItemModel.product_id == product_id,
            )
            .values(
                quantity=CartItemModel.quantity + quantity,
                updated_at=datetime.now(timezone.utc),
            )
        )
        return result.rowcount

    def delete_item(self, item: CartItemModel):
        self.db.delete(item)
        self.db.flush()

    def delete_items(self, item_ids: Iterable[int]) -> int:
        ids = list(item_ids)
        if not ids:
            return 0
        result = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.id.in_(ids))
        )
        return result.rowcount

    def delete_by_user(self, user_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.user_id == user_id)
        )
        return result.rowcount
