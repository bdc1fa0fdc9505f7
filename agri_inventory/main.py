"""
ASGI application: middleware, envelope-shaped error handlers and routes.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from agri_inventory.core.cache import check_redis_connection, redis_client
from agri_inventory.core.config import settings
from agri_inventory.core.errors import STATUS_BY_KIND, envelope_response
from agri_inventory.core.logging import logger
from agri_inventory.core.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from agri_inventory.db.session import init_models
from agri_inventory.routers.account import router as account_router
from agri_inventory.routers.admin import router as admin_router
from agri_inventory.routers.auth import router as auth_router
from agri_inventory.routers.dashboard import router as dashboard_router
from agri_inventory.routers.department_entities import entity_routers
from agri_inventory.routers.departments import router as departments_router
from agri_inventory.routers.equipment import router as equipment_router
from agri_inventory.routers.health import router as health_router
from agri_inventory.routers.maintenance import router as maintenance_router
from agri_inventory.routers.users import router as users_router
from agri_inventory.routers.visitors import router as visitors_router
from agri_inventory.schemas.common import ActionResult
from agri_inventory.schemas.validation import FORM_ERROR_KEY

KIND_BY_STATUS = {code: kind for kind, code in STATUS_BY_KIND.items()}


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.api.title} ({settings.environment.value}, debug={settings.debug})")

    if redis_client is None:
        logger.warning("Redis is disabled; dashboard views are computed on every request")
    elif await check_redis_connection():
        logger.info("Redis connection established successfully")
    else:
        logger.error("Failed to connect to Redis. Dashboard caching will be skipped.")

    if settings.create_tables_on_startup:
        await init_models()

    logger.info(f"API Docs available at: http://{settings.api.host}:{settings.api.port}/docs")
    yield
    logger.info(f"Shutting down {settings.api.title}")


app = FastAPI(
    title=settings.api.title,
    description=settings.api.description,
    version=settings.api.version,
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.frontend_urls,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Render FastAPI's own request validation failures as the result envelope."""
    field_errors = {}
    for error in exc.errors():
        loc = error.get("loc") or ()
        key = str(loc[1]) if len(loc) > 1 else FORM_ERROR_KEY
        field_errors.setdefault(key, []).append(error.get("msg", "Invalid value"))
    logger.warning(f"Request validation failed on {request.url.path}: {field_errors}")
    result = ActionResult(
        success=False,
        message="Invalid input data",
        data=field_errors,
        error="VALIDATION_FAILED",
    )
    return envelope_response(result)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    result = ActionResult(
        success=False,
        message=str(exc.detail),
        error=KIND_BY_STATUS.get(exc.status_code, "HTTP_ERROR"),
    )
    response = envelope_response(result, exc.status_code)
    response.status_code = exc.status_code
    return response


ROUTES = (
    ("health", health_router, "health"),
    ("auth", auth_router, "authentication"),
    ("account", account_router, "account"),
    ("users", users_router, "users"),
    ("departments", departments_router, "departments"),
    ("equipment", equipment_router, "equipment"),
    ("maintenance", maintenance_router, "maintenance"),
    ("dashboard", dashboard_router, "dashboard"),
    ("admin", admin_router, "admin"),
    ("visitor-count", visitors_router, "visitors"),
)

for path, router, tag in ROUTES:
    app.include_router(router, prefix=f"/api/{path}", tags=[tag])

for config, entity_router in entity_routers():
    app.include_router(entity_router, prefix=f"/api/entities/{config.key}", tags=[f"entities: {config.key}"])


@app.get("/")
async def root():
    return {
        "message": settings.api.title,
        "version": settings.api.version,
        "docs": "/docs",
    }
