# checkout/services/product_summary.py
from typing import Any, Dict

from checkout.domain.errors import CatalogUnavailableError
from checkout.services.price_snapshot import to_price
from checkout.services.product_client import ProductClient
from checkout.utils.logging import get_logger

logger = get_logger(__name__)


def product_summary(product_client: ProductClient, product_id: int) -> Dict[str, Any] | None:
    """
    Podsumowanie produktu z katalogu do odpowiedzi API, tylko informacyjnie.
    Best effort: brak katalogu albo nieczytelny payload daje None, nigdy wyjatek.
    price jest None gdy katalog nie podaje poprawnej ceny.
    """
    try:
        pdata = product_client.fetch_product(product_id)
    except CatalogUnavailableError:
        logger.warning(f"Catalog unavailable, product {product_id} shown without summary")
        return None

    if not isinstance(pdata, dict):
        if pdata is not None:
            logger.warning(f"Catalog payload for product {product_id} is not an object, skipping summary")
        return None

    images = pdata.get("images")
    seller_id = pdata.get("seller_id")
    if seller_id is None:
        seller_id = pdata.get("sellerId")
    if isinstance(seller_id, bool) or not isinstance(seller_id, (int, str)):
        seller_id = None

    return {
        "id": product_id,
        "title": str(pdata.get("title") or ""),
        "price": to_price(pdata.get("price")),
        "images": [str(i) for i in images] if isinstance(images, list) else [],
        "seller_id": seller_id,
    }
