"""FoodieExpress FastAPI application.

Serves the menu and the order lifecycle as JSON. Commands are processed
synchronously inside the request; each request runs in the foodie domain
context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 3001 --reload
"""

from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from protean.integrations.fastapi import DomainContextMiddleware

from foodie.config import get_settings
from foodie.domain import foodie
from foodie.utils.logging import configure_logging, get_logger

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# PROTEAN_ENV picks the domain.toml overlay (database, log format).
configure_logging(foodie)
foodie.init()

logger = get_logger(__name__)

from foodie.api import menu_router, order_router  # noqa: E402
from foodie.api.errors import register_exception_handlers  # noqa: E402
from foodie.api.schemas import HealthResponse  # noqa: E402
from foodie.utils.db import setup_db  # noqa: E402


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_db(foodie)
    logger.info("application_started", domain=foodie.name)
    yield


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="FoodieExpress API",
    description="Food ordering: menu, orders and order tracking",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[get_settings().frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Pushes the foodie domain context per request and emits one access event for it.
app.add_middleware(DomainContextMiddleware, route_domain_map={"/api": foodie})


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
app.include_router(menu_router)
app.include_router(order_router)
register_exception_handlers(app)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@app.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(timestamp=datetime.now(UTC))
