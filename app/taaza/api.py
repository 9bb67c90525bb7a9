from fastapi import APIRouter

from app.taaza.core.config import settings
from app.taaza.routers.categories import router as categories_router
from app.taaza.routers.checkout import router as checkout_router
from app.taaza.routers.health import router as health_router
from app.taaza.routers.metrics import router as metrics_router
from app.taaza.routers.orders import router as orders_router
from app.taaza.routers.pos_bills import router as pos_bills_router
from app.taaza.routers.reports import router as reports_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(pos_bills_router, tags=["pos-bills"])
api_router.include_router(checkout_router, tags=["checkout"])
api_router.include_router(orders_router, tags=["orders"])
api_router.include_router(categories_router, tags=["categories"])
api_router.include_router(reports_router, tags=["reports"])
if settings.METRICS_ENABLED:
    api_router.include_router(metrics_router, tags=["ops"])
