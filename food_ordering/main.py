"""
FastAPI Application Entry Point

Food Ordering Backend - catalog and order CRUD over JSON documents.

Endpoints:
    - GET/POST/DELETE /products: Product catalog
    - DELETE /products/{product_id}: Remove one product
    - GET/POST/DELETE /orders: Customer orders
    - DELETE /orders/{order_id}: Remove one order
    - GET /health: Storage health check

Run with ``food-ordering-api`` or ``uvicorn food_ordering.main:app``.

Version: 1.0.0
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from food_ordering.core.config import get_settings, setup_logging
from food_ordering.database import build_engine, build_session_maker, init_db
from food_ordering.exceptions import NotFoundError
from food_ordering.schemas import HealthResponse, MessageResponse, OrderCreate, ProductCreate
from food_ordering.services import (
    CatalogService,
    OrderArchive,
    OrderService,
    build_catalog_service,
    build_order_service,
)

logger = logging.getLogger(__name__)


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Build the per-process services on startup, dispose of them on shutdown.
    """
    settings = get_settings()

    logger.info("=" * 60)
    logger.info(f"🚀 Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Data: {settings.products_file}, {settings.orders_file}")
    logger.info("=" * 60)

    engine = None
    archive = None
    if settings.document_store_enabled:
        engine = build_engine(settings.database_url, echo=settings.debug)
        await init_db(engine)
        archive = OrderArchive(build_session_maker(engine))
        logger.info(f"✅ Document store: {archive.provider_name}")
    else:
        logger.info("Document store: disabled (DATABASE_URL not set)")

    catalog = build_catalog_service(settings)
    catalog.load()
    orders = build_order_service(settings, archive=archive)
    orders.load()

    app.state.catalog = catalog
    app.state.orders = orders
    app.state.archive = archive

    logger.info(f"✅ Catalog: {len(catalog.products)} products, next id {catalog.next_id}")
    logger.info(f"✅ Orders: {len(orders.orders)} orders, next id {orders.next_id}")
    logger.info("✅ Application ready!")

    yield  # Application runs

    logger.info("Shutting down...")
    if engine is not None:
        await engine.dispose()
    logger.info("✅ Cleanup complete")


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_catalog(request: Request) -> CatalogService:
    return request.app.state.catalog


def get_orders(request: Request) -> OrderService:
    return request.app.state.orders


def get_archive(request: Request) -> Optional[OrderArchive]:
    return request.app.state.archive


router = APIRouter()


# =============================================================================
# ROOT & HEALTH ENDPOINTS
# =============================================================================

@router.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """API root with navigation links."""
    settings = get_settings()
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "environment": settings.env_mode.value,
        "documentation": "/docs",
        "health": "/health",
    }


@router.get("/health", response_model=HealthResponse, tags=["Health"], summary="Storage Health Check")
async def health_check(
    catalog: CatalogService = Depends(get_catalog),
    orders: OrderService = Depends(get_orders),
    archive: Optional[OrderArchive] = Depends(get_archive),
) -> HealthResponse:
    """Report whether the data documents and the document store are reachable."""

    products_status = "healthy" if catalog.store.exists() else "missing"
    orders_status = "healthy" if orders.store.exists() else "missing"

    if archive is None:
        document_store_status = "disabled"
    else:
        document_store_status = "healthy" if await archive.health_check() else "unhealthy"

    overall = "operational" if (
        products_status == "healthy"
        and orders_status == "healthy"
        and document_store_status in ("healthy", "disabled")
    ) else "degraded"

    return HealthResponse(
        status=overall,
        products=products_status,
        orders=orders_status,
        document_store=document_store_status,
        timestamp=datetime.now(),
    )


# =============================================================================
# PRODUCT ENDPOINTS
# =============================================================================

@router.get("/products", tags=["Products"], summary="List Products")
async def list_products(catalog: CatalogService = Depends(get_catalog)) -> list[dict[str, Any]]:
    """Return the catalog (cached for the freshness window)."""
    return catalog.list_products()


@router.post("/products", status_code=201, tags=["Products"], summary="Add Product")
async def add_product(
    payload: ProductCreate,
    catalog: CatalogService = Depends(get_catalog),
) -> dict[str, Any]:
    try:
        return catalog.add_product(payload)
    except Exception as e:
        logger.exception(f"Error adding product: {e}")
        raise HTTPException(status_code=500, detail="Failed to add product")


@router.delete(
    "/products/{product_id}",
    response_model=MessageResponse,
    responses={404: {"model": MessageResponse}, 500: {"model": MessageResponse}},
    tags=["Products"],
)
async def delete_product(product_id: str, catalog: CatalogService = Depends(get_catalog)) -> MessageResponse:
    try:
        catalog.delete_product(product_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Product not found")
    except Exception as e:
        logger.exception(f"Error deleting product {product_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete product")
    return MessageResponse(message="Product deleted successfully")


@router.delete("/products", response_model=MessageResponse, tags=["Products"])
async def delete_all_products(catalog: CatalogService = Depends(get_catalog)) -> MessageResponse:
    try:
        catalog.delete_all_products()
    except Exception as e:
        logger.exception(f"Error deleting all products: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete all products")
    return MessageResponse(message="All products deleted successfully")


# =============================================================================
# ORDER ENDPOINTS
# =============================================================================

@router.get("/orders", tags=["Orders"], summary="List Orders")
async def list_orders(orders: OrderService = Depends(get_orders)) -> list[dict[str, Any]]:
    """Return all orders as currently persisted."""
    return orders.list_orders()


@router.post("/orders", status_code=201, tags=["Orders"], summary="Place Order")
async def add_order(
    payload: OrderCreate,
    orders: OrderService = Depends(get_orders),
) -> dict[str, Any]:
    """Store the order with every field the client sent."""
    try:
        return await orders.add_order(payload)
    except Exception as e:
        logger.exception(f"Error adding order: {e}")
        raise HTTPException(status_code=500, detail="Failed to add order")


@router.delete(
    "/orders/{order_id}",
    response_model=MessageResponse,
    responses={404: {"model": MessageResponse}, 500: {"model": MessageResponse}},
    tags=["Orders"],
)
async def delete_order(order_id: str, orders: OrderService = Depends(get_orders)) -> MessageResponse:
    try:
        orders.delete_order(order_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Order not found")
    except Exception as e:
        logger.exception(f"Error deleting order {order_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete order")
    return MessageResponse(message="Order deleted successfully")


@router.delete("/orders", response_model=MessageResponse, tags=["Orders"])
async def delete_all_orders(orders: OrderService = Depends(get_orders)) -> MessageResponse:
    try:
        orders.delete_all_orders()
    except Exception as e:
        logger.exception(f"Error deleting all orders: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete orders")
    return MessageResponse(message="All orders deleted successfully")


# =============================================================================
# ERROR HANDLERS
# =============================================================================

async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as ``{"message": ...}`` like the storefront expects."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content={
            "message": "Internal Server Error",
            "detail": str(exc) if get_settings().debug else "An unexpected error occurred",
        },
    )


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

def create_app() -> FastAPI:
    """Build the FastAPI application from the current settings."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Product catalog and order API for the food-ordering storefront.",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    app.include_router(router)
    return app


setup_logging()
app = create_app()


def run() -> None:
    """Console entry point: serve the API with uvicorn on the configured port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "food_ordering.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    run()
