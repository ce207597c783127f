"""Cart store use cases: merge-by-product, ownership, idempotent removal."""

from decimal import Decimal

import pytest

from checkout.data.models.cart_item import CartItemModel
from checkout.domain.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from checkout.services.cart_service import CartService


@pytest.fixture
def svc(db, catalog):
    return CartService(db=db, product_client=catalog)


def _rows(db, user_id):
    return db.query(CartItemModel).filter(CartItemModel.user_id == user_id).all()


def test_add_item_inserts_new_row(svc, db):
    item = svc.add_item(user_id=1, product_id=1, quantity=2)

    assert item.id is not None
    assert item.quantity == 2
    assert item.created_at is not None
    assert len(_rows(db, 1)) == 1


@pytest.mark.parametrize("q1,q2", [(1, 1), (2, 3), (5, 10)])
def test_repeated_add_merges_quantity(svc, db, q1, q2):
    first = svc.add_item(user_id=1, product_id=1, quantity=q1)
    second = svc.add_item(user_id=1, product_id=1, quantity=q2)

    rows = _rows(db, 1)
    assert len(rows) == 1
    assert second.id == first.id
    assert rows[0].quantity == q1 + q2


def test_same_product_for_different_users_is_not_merged(svc, db):
    svc.add_item(user_id=1, product_id=1, quantity=1)
    svc.add_item(user_id=2, product_id=1, quantity=4)

    assert [r.quantity for r in _rows(db, 1)] == [1]
    assert [r.quantity for r in _rows(db, 2)] == [4]


@pytest.mark.parametrize("quantity", [0, -1])
def test_add_item_rejects_non_positive_quantity(svc, db, quantity):
    with pytest.raises(ValidationError):
        svc.add_item(user_id=1, product_id=1, quantity=quantity)
    assert _rows(db, 1) == []


def test_get_cart_joins_product_summary_and_total(svc):
    svc.add_item(user_id=1, product_id=1, quantity=2)
    svc.add_item(user_id=1, product_id=2, quantity=1)

    cart = svc.get_cart(1)

    assert cart["item_count"] == 2
    assert cart["total_amount"] == Decimal("45.00")
    summary = cart["items"][0]["product"]
    assert summary["title"] == "Product 1"
    assert summary["price"] == Decimal("20.00")
    assert summary["seller_id"] == 99


def test_get_cart_is_best_effort_when_catalog_fails(svc, catalog):
    svc.add_item(user_id=1, product_id=1, quantity=2)
    svc.add_item(user_id=1, product_id=2, quantity=1)
    catalog.unavailable.add(1)

    cart = svc.get_cart(1)

    assert cart["item_count"] == 2
    assert cart["items"][0]["product"] is None
    assert cart["total_amount"] == Decimal("5.00")


def test_get_cart_of_empty_user(svc):
    assert svc.get_cart(42) == {"items": [], "total_amount": Decimal("0.00"), "item_count": 0}


def test_update_quantity_replaces_value(svc):
    item = svc.add_item(user_id=1, product_id=1, quantity=2)

    updated = svc.update_quantity(user_id=1, item_id=item.id, quantity=7)

    assert updated.quantity == 7


def test_update_quantity_of_missing_item(svc):
    with pytest.raises(NotFoundError):
        svc.update_quantity(user_id=1, item_id=999, quantity=1)


def test_update_quantity_validates_range(svc):
    item = svc.add_item(user_id=1, product_id=1, quantity=2)
    with pytest.raises(ValidationError):
        svc.update_quantity(user_id=1, item_id=item.id, quantity=0)


def test_update_quantity_of_foreign_item_is_forbidden(svc):
    item = svc.add_item(user_id=1, product_id=1, quantity=2)
    with pytest.raises(ForbiddenError):
        svc.update_quantity(user_id=2, item_id=item.id, quantity=5)


def test_remove_item_is_idempotent(svc, db):
    item = svc.add_item(user_id=1, product_id=1, quantity=2)

    assert svc.remove_item(user_id=1, item_id=item.id) is True
    assert svc.remove_item(user_id=1, item_id=item.id) is False
    assert _rows(db, 1) == []


def test_remove_foreign_item_is_forbidden(svc, db):
    item = svc.add_item(user_id=1, product_id=1, quantity=2)

    with pytest.raises(ForbiddenError):
        svc.remove_item(user_id=2, item_id=item.id)
    assert len(_rows(db, 1)) == 1


def test_clear_cart_only_touches_own_rows(svc, db):
    svc.add_item(user_id=1, product_id=1, quantity=1)
    svc.add_item(user_id=1, product_id=2, quantity=1)
    svc.add_item(user_id=2, product_id=1, quantity=1)

    assert svc.clear_cart(1) == 2
    assert svc.clear_cart(1) == 0
    assert _rows(db, 1) == []
    assert len(_rows(db, 2)) == 1


def test_merge_adds_on_top_of_increment_from_another_session(session_factory, catalog):
    first_db, second_db = session_factory(), session_factory()
    first = CartService(db=first_db, product_client=catalog)
    second = CartService(db=second_db, product_client=catalog)
    try:
        first.add_item(user_id=1, product_id=1, quantity=1)
        # druga sesja trzyma wiersz z quantity 1 zanim pierwsza go zwiekszy
        assert second.repo.get_item_by_product(1, 1).quantity == 1

        first.add_item(user_id=1, product_id=1, quantity=1)
        merged = second.add_item(user_id=1, product_id=1, quantity=1)

        assert merged.quantity == 3
    finally:
        first_db.close()
        second_db.close()

    check = session_factory()
    try:
        assert [r.quantity for r in _rows(check, 1)] == [3]
    finally:
        check.close()


def test_insert_race_on_same_product_is_conflict(svc, db, monkeypatch):
    svc.add_item(user_id=1, product_id=1, quantity=2)
    # inny request wstawil wiersz miedzy UPDATE a INSERT
    monkeypatch.setattr(svc.repo, "increment_quantity", lambda user_id, product_id, quantity: 0)

    with pytest.raises(ConflictError):
        svc.add_item(user_id=1, product_id=1, quantity=1)

    assert [r.quantity for r in _rows(db, 1)] == [2]


def test_get_cart_coerces_incomplete_catalog_fields(svc, catalog):
    catalog.products[1] = {"id": 1, "title": None, "price": "20", "images": None, "sellerId": 7}
    svc.add_item(user_id=1, product_id=1, quantity=1)

    summary = svc.get_cart(1)["items"][0]["product"]

    assert summary["title"] == ""
    assert summary["images"] == []
    assert summary["seller_id"] == 7


def test_get_cart_skips_non_object_catalog_payload(svc, catalog):
    catalog.products[1] = ["not", "a", "product"]
    svc.add_item(user_id=1, product_id=1, quantity=1)
    svc.add_item(user_id=1, product_id=2, quantity=1)

    cart = svc.get_cart(1)

    assert cart["items"][0]["product"] is None
    assert cart["total_amount"] == Decimal("5.00")
