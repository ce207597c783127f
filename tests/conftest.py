import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-checkout-service-tests")

import jwt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from checkout.api.deps import get_notification_service, get_product_client
from checkout.celery_worker import celery_app
from checkout.data.database import get_db, init_db
from checkout.domain.errors import CatalogUnavailableError
from checkout.main import create_app
from checkout.services.notification_service import NotificationService
from checkout.utils.settings import JWT_ALGORITHM, JWT_SECRET


class FakeCatalog:
    """Catalog Service test double: stala tabela produktow, bez HTTP."""

    def __init__(self, products=None):
        self.products = dict(products or {})
        self.unavailable = set()
        self.calls = []

    def set_price(self, product_id, price):
        self.products[product_id] = {
            "id": product_id,
            "title": f"Product {product_id}",
            "price": price,
            "images": [f"{product_id}.jpg"],
            "seller_id": 99,
        }

    def fetch_product(self, product_id):
        self.calls.append(product_id)
        if product_id in self.unavailable:
            raise CatalogUnavailableError(f"Catalog unavailable while fetching product {product_id}")
        product = self.products.get(product_id)
        return dict(product) if isinstance(product, dict) else product


class RecordingNotifications(NotificationService):
    def __init__(self):
        super().__init__(enabled=True)
        self.sent = []

    def _enqueue(self, task, *args):
        self.sent.append((task.name.rsplit(".", 1)[-1], args))
        super()._enqueue(task, *args)


@pytest.fixture(autouse=True, scope="session")
def eager_celery():
    celery_app.conf.task_always_eager = True
    celery_app.conf.task_eager_propagates = True
    yield


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def catalog():
    catalog = FakeCatalog()
    catalog.set_price(1, 20)
    catalog.set_price(2, 5)
    catalog.set_price(3, "89.90")
    return catalog


@pytest.fixture
def notifications():
    return RecordingNotifications()


@pytest.fixture
def client(session_factory, catalog, notifications):
    app = create_app(init_database=False)

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_product_client] = lambda: catalog
    app.dependency_overrides[get_notification_service] = lambda: notifications

    with TestClient(app) as c:
        yield c


def make_token(user_id, role="user", **claims):
    payload = {"sub": str(user_id), "role": role, **claims}
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


@pytest.fixture
def auth():
    def _headers(user_id, role="user"):
        return {"Authorization": f"Bearer {make_token(user_id, role)}"}

    return _headers
