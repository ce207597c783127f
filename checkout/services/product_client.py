# checkout/services/product_client.py
import requests
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from checkout.domain.errors import CatalogUnavailableError
from checkout.utils.settings import CATALOG_RETRY_ATTEMPTS, CATALOG_SERVICE_URL, CATALOG_TIMEOUT_SECONDS
from checkout.utils.logging import get_logger

logger = get_logger(__name__)


def http_retry(attempts: int):
    # tylko bledy transportu, 4xx/5xx nie sa ponawiane
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=0.3, min=0.3, max=3),
        retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
    )


class ProductClient:
    """
    Klient HTTP do Catalog Service.
    GET /products/{id} -> {id, title, price, images, seller_id}
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = CATALOG_TIMEOUT_SECONDS,
        attempts: int = CATALOG_RETRY_ATTEMPTS,
        session: requests.Session | None = None,
    ):
        self.base_url = (base_url or CATALOG_SERVICE_URL).rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self._get = http_retry(max(1, attempts))(self._get_once)

    def _get_once(self, url: str) -> requests.Response:
        logger.info(f"ProductClient GET {url}")
        return self.session.get(url, timeout=self.timeout)

    def fetch_product(self, product_id: int) -> dict | None:
        """Zwraca produkt albo None gdy katalog go nie zna (404)."""
        url = f"{self.base_url}/products/{product_id}"

        try:
            resp = self._get(url)
        except requests.RequestException as e:
            logger.error(f"Catalog request for product {product_id} failed: {e}")
            raise CatalogUnavailableError(
                f"Catalog unavailable while fetching product {product_id}"
            ) from e

        if resp.status_code == 404:
            return None

        if resp.status_code != 200:
            logger.error(f"Catalog returned {resp.status_code} for product {product_id}")
            raise CatalogUnavailableError(
                f"Catalog returned {resp.status_code} for product {product_id}"
            )

        try:
            payload = resp.json()
        except ValueError as e:
            raise CatalogUnavailableError(
                f"Catalog returned malformed payload for product {product_id}"
            ) from e

        if not isinstance(payload, dict):
            logger.error(f"Catalog returned {type(payload).__name__} instead of object for product {product_id}")
            raise CatalogUnavailableError(
                f"Catalog returned malformed payload for product {product_id}"
            )

        return payload

    def close(self):
        self.session.close()
