# checkout/services/price_snapshot.py
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable, List

from checkout.data.models.cart_item import CartItemModel
from checkout.domain.errors import CatalogUnavailableError
from checkout.services.product_client import ProductClient
from checkout.utils.logging import get_logger

logger = get_logger(__name__)

CENT = Decimal("0.01")


@dataclass(frozen=True)
class PriceSnapshot:
    product_id: int
    quantity: int
    price: Decimal
    subtotal: Decimal


def to_price(raw) -> Decimal | None:
    """Cena z katalogu jako Decimal z dokladnoscia do groszy, None gdy nieprawidlowa."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        price = Decimal(str(raw))
    except (InvalidOperation, ValueError):
        return None
    if not price.is_finite() or price < 0:
        return None
    return price.quantize(CENT, rounding=ROUND_HALF_UP)


class PriceSnapshotResolver:
    """
    Zamraza aktualne ceny z katalogu w momencie skladania zamowienia.
    Brak ceny dla ktoregokolwiek produktu przerywa cale zamowienie,
    nigdy nie podstawiamy 0.
    """

    def __init__(self, product_client: ProductClient):
        self.product_client = product_client

    def resolve(self, cart_items: Iterable[CartItemModel]) -> List[PriceSnapshot]:
        snapshots = []
        prices: dict[int, Decimal] = {}

        for item in cart_items:
            if item.product_id not in prices:
                prices[item.product_id] = self._price_of(item.product_id)

            price = prices[item.product_id]
            snapshots.append(
                PriceSnapshot(
                    product_id=item.product_id,
                    quantity=item.quantity,
                    price=price,
                    subtotal=(price * item.quantity).quantize(CENT, rounding=ROUND_HALF_UP),
                )
            )

        return snapshots

    def _price_of(self, product_id: int) -> Decimal:
        product = self.product_client.fetch_product(product_id)

        if product is None:
            logger.warning(f"Product {product_id} not found in catalog, aborting snapshot")
            raise CatalogUnavailableError(f"Product {product_id} could not be priced")

        if not isinstance(product, dict):
            logger.warning(f"Catalog payload for product {product_id} is not an object: {product!r}")
            raise CatalogUnavailableError(f"Product {product_id} could not be priced")

        price = to_price(product.get("price"))
        if price is None:
            logger.warning(f"Product {product_id} has no usable price: {product.get('price')!r}")
            raise CatalogUnavailableError(f"Product {product_id} could not be priced")

        return price


def total_of(snapshots: Iterable[PriceSnapshot]) -> Decimal:
    return sum((s.subtotal for s in snapshots), Decimal("0.00"))
