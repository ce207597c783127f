# checkout/catalog_service/main.py
"""Lokalny zamiennik Catalog Service do developmentu, tylko GET /products/{id}."""
from decimal import Decimal
from typing import List

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel


class CatalogProduct(BaseModel):
    id: int
    title: str
    price: Decimal
    images: List[str] = []
    seller_id: int


CATALOG = {
    p.id: p
    for p in (
        CatalogProduct(id=1, title="Denim jacket", price=Decimal("20.00"), images=["denim-1.jpg"], seller_id=10),
        CatalogProduct(id=2, title="Wool scarf", price=Decimal("5.00"), seller_id=10),
        CatalogProduct(id=3, title="Leather boots", price=Decimal("89.90"), images=["boots-1.jpg"], seller_id=11),
    )
}

app = FastAPI(title="Catalog Service (dev mock)")


@app.get("/products/{product_id}", response_model=CatalogProduct)
def get_product(product_id: int):
    if product_id not in CATALOG:
        raise HTTPException(status_code=404, detail="Product not found")
    return CATALOG[product_id]
