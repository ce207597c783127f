#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w Base.metadata
from checkout.data.models.cart_item import CartItemModel
from checkout.data.models.order import OrderModel
from checkout.data.models.order_item import OrderItemModel

__all__ = ["CartItemModel", "OrderModel", "OrderItemModel"]
