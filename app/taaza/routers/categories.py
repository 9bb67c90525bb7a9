from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from app.taaza.core.error_catalog import AppError, ErrorCatalog
from app.taaza.core.logging import log_json
from app.taaza.db.models import Category
from app.taaza.db.session import get_db
from app.taaza.repos.categories import CategoryRepository
from app.taaza.schemas.categories import (
    CategoryCreateRequest,
    CategoryListResponse,
    CategoryResponse,
    StockAdjustRequest,
)

router = APIRouter()
logger = logging.getLogger("taaza.stock")


def _category_response(category: Category) -> CategoryResponse:
    return CategoryResponse(
        key=category.key,
        name=category.name,
        whole_quantity=category.whole_quantity,
        quantity_left=category.quantity_left,
        created_at=category.created_at,
        updated_at=category.updated_at,
    )


@router.get("/taaza/categories", response_model=CategoryListResponse)
def list_categories(db=Depends(get_db)):
    return CategoryListResponse(rows=[_category_response(row) for row in CategoryRepository(db).list_categories()])


@router.post("/taaza/categories", response_model=CategoryResponse, status_code=201)
def create_category(payload: CategoryCreateRequest, db=Depends(get_db)):
    repo = CategoryRepository(db)
    if repo.get_by_key(payload.key) is not None:
        raise AppError(ErrorCatalog.CATEGORY_EXISTS, details={"key": payload.key})
    category = repo.create(
        Category(
            key=payload.key,
            name=payload.name,
            whole_quantity=payload.whole_quantity,
            quantity_left=payload.whole_quantity,
        )
    )
    return _category_response(category)


@router.post("/taaza/categories/{key}/stock", response_model=CategoryResponse)
def adjust_category_stock(key: str, payload: StockAdjustRequest, db=Depends(get_db)):
    repo = CategoryRepository(db)
    category = repo.get_by_key(key)
    if category is None:
        raise AppError(ErrorCatalog.CATEGORY_NOT_FOUND, details={"key": key})
    delta = payload.quantity if payload.action == "add" else -payload.quantity
    category = repo.adjust_stock(category, delta)
    log_json(
        logger,
        {
            "event": "stock_adjusted",
            "category_key": key,
            "action": payload.action,
            "quantity": payload.quantity,
            "reason": payload.reason,
            "whole_quantity": category.whole_quantity,
            "quantity_left": category.quantity_left,
        },
    )
    return _category_response(category)
