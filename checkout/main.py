# checkout/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from checkout.api.deps import get_product_client
from checkout.api.routers import carts, health, orders
from checkout.data.database import Base, init_db
from checkout.domain.errors import DomainError, StorageError
from checkout.utils.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Initializing database")
    init_db()
    logger.info(f"Tables ready: {sorted(Base.metadata.tables.keys())}")
    yield
    if get_product_client.cache_info().currsize:
        get_product_client().close()
        get_product_client.cache_clear()


async def domain_error_handler(request: Request, exc: DomainError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    # ostatnia linia obrony, repozytoria same zamieniaja bledy bazy
    logger.error(f"Unhandled storage error on {request.url.path}: {exc}")
    err = StorageError()
    return JSONResponse(status_code=err.status_code, content={"detail": err.message})


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"detail": "Validation failed", "errors": jsonable_encoder(exc.errors())},
    )


def create_app(init_database: bool = True) -> FastAPI:
    app = FastAPI(
        title="Checkout Service",
        version="1.0.0",
        lifespan=lifespan if init_database else None,
    )

    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(health.router)
    app.include_router(carts.router)
    app.include_router(orders.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
