"""Catalog Service — FastAPI application for managing products."""

from __future__ import annotations

import re
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from catalog_common.models import (
    CategoryProductsResponse,
    HealthResponse,
    MessageResponse,
    Product,
    ProductBase,
    ProductListResponse,
    ProductUpdate,
)

from .config import Settings, get_settings
from .store import ProductStore, seed_sample_products

router = APIRouter(prefix="/api/v1/products", tags=["products"])


def get_store(request: Request) -> ProductStore:
    return request.app.state.store


_PRODUCT_ID_RE = re.compile(r"[+-]?[0-9]+")
# 64-bit signed range
_MIN_ID, _MAX_ID = -(2**63), 2**63 - 1


def _parse_product_id(raw: str) -> int:
    # optional sign and ASCII digits, nothing else
    if not _PRODUCT_ID_RE.fullmatch(raw):
        raise HTTPException(status_code=400, detail="Invalid product ID")
    try:
        product_id = int(raw)
    except ValueError:
        # over the int string-length limit
        raise HTTPException(status_code=400, detail="Invalid product ID")
    if not _MIN_ID <= product_id <= _MAX_ID:
        raise HTTPException(status_code=400, detail="Invalid product ID")
    return product_id


@router.get("", response_model=ProductListResponse)
def list_products(category: str = "", store: ProductStore = Depends(get_store)):
    if category:
        products = store.search_products(category)
    else:
        products = store.list_products()
    return ProductListResponse(
        total=len(products), page=1, page_size=len(products), products=products
    )


@router.get("/category/{category}", response_model=CategoryProductsResponse)
def get_products_by_category(category: str, store: ProductStore = Depends(get_store)):
    products = store.search_products(category)
    return CategoryProductsResponse(
        category=category, total=len(products), products=products
    )


@router.get("/{product_id}", response_model=Product)
def get_product(product_id: str, store: ProductStore = Depends(get_store)):
    product = store.get_product(_parse_product_id(product_id))
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.post("", response_model=Product, status_code=201)
def create_product(payload: ProductBase, store: ProductStore = Depends(get_store)):
    return store.create_product(payload)


@router.put("/{product_id}", response_model=Product)
def update_product(
    product_id: str, payload: ProductUpdate, store: ProductStore = Depends(get_store)
):
    product = store.update_product(_parse_product_id(product_id), payload)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.delete("/{product_id}", response_model=MessageResponse)
def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
    if not store.delete_product(_parse_product_id(product_id)):
        raise HTTPException(status_code=404, detail="Product not found")
    return MessageResponse(message="Product deleted successfully")


async def _validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


def create_app(
    store: Optional[ProductStore] = None, settings: Optional[Settings] = None
) -> FastAPI:
    """Build the application around *store*.

    Without a store, a fresh one is created and, when
    ``settings.seed_sample_data`` is set, loaded with the demo catalog.
    """
    settings = settings or get_settings()
    if store is None:
        store = ProductStore()
        if settings.seed_sample_data:
            seed_sample_products(store)

    app = FastAPI(title=settings.app_name, version=settings.app_version)
    app.state.store = store
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    @app.get("/health", response_model=HealthResponse)
    def health():
        return HealthResponse(
            status="healthy", service=settings.app_name, version=settings.app_version
        )

    app.include_router(router)
    return app
