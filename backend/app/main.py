# backend/app/main.py

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.app.startup import configure_logging, run_startup_checks
from backend.core.config import settings
from backend.core.exceptions import register_exception_handlers

# ========== Orders & Deliveries ==========
from backend.modules.orders.routes.order_routes import router as order_router
from backend.modules.deliveries.routes.delivery_routes import router as delivery_router

# ========== Payments ==========
from backend.modules.payments.api import payment_router
from backend.modules.payments.services.payment_service import get_gateway_runner

# ========== Reviews ==========
from backend.modules.feedback.routers.reviews_router import router as reviews_router

# ========== Health Monitoring ==========
from backend.modules.health.routes.health_routes import router as health_router

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Food Delivery Backend",
    description="""
    Order lifecycle, delivery coordination, payments and restaurant reviews.

    ## Authentication

    Endpoints expect a Bearer JWT whose `sub` claim is the user id and whose
    `role` claim is one of ADMIN, CUSTOMER, RESTAURANT_OWNER or
    DELIVERY_PARTNER.
    """,
    version="1.0.0",
)

# Register exception handlers for consistent error responses
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(order_router)
app.include_router(delivery_router)
app.include_router(payment_router)
app.include_router(reviews_router)
app.include_router(health_router)


@app.on_event("startup")
def on_startup():
    run_startup_checks()


@app.on_event("shutdown")
def on_shutdown():
    get_gateway_runner().shutdown()
    get_gateway_runner.cache_clear()
    logger.info("Gateway worker pool stopped")
