# checkout/data/models/cart_item.py
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, UniqueConstraint

from checkout.data.database import Base


def _now():
    return datetime.now(timezone.utc)


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, nullable=False, index=True)
    product_id = Column(Integer, nullable=False)
    quantity = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_now, onupdate=_now)

    # jeden wiersz na pare (user, product), kolejne dodania tylko zwiekszaja quantity
    __table_args__ = (
        UniqueConstraint("user_id", "product_id", name="u_cart_user_product"),
        CheckConstraint("quantity >= 1", name="ck_cart_item_quantity_positive"),
    )
