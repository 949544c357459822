# airfiber_billing/main.py
import logging
import os

from dotenv import load_dotenv

# Cargar variables de entorno desde .env ANTES de cualquier otra cosa
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import health as health_api
from .api.clients import main as clients_main_api
from .api.notifications import main as notifications_main_api
from .core.config import get_settings
from .core.exceptions import BillingError
from .db.engine_sync import create_sync_db_and_tables
from .services.email_transport import build_transport
from .services.notification_service import NotificationDispatcher
from .views import router as views_router

logger = logging.getLogger(__name__)

app = FastAPI(title="AirFiber Internet Billing", version="1.0.0")


def build_dispatcher() -> NotificationDispatcher:
    settings = get_settings()
    dispatcher = NotificationDispatcher(
        build_transport(settings),
        sender_address=settings.sender_address,
        sender_name=settings.email_from_name,
    )
    if not dispatcher.is_configured():
        logger.warning(
            f"Email provider '{dispatcher.transport.provider_name}' is missing credentials; "
            "/api/send-email will fail until they are set in .env"
        )
    return dispatcher


# --- Database & Transport Initialization ---
@app.on_event("startup")
def on_startup():
    """Create the clients table and build the email dispatcher."""
    create_sync_db_and_tables()
    if getattr(app.state, "dispatcher", None) is None:
        app.state.dispatcher = build_dispatcher()
    logger.info("Database tables initialized")


# ============================================================================
# --- EXCEPTION HANDLERS: every failure is {"error": "..."} ---
# ============================================================================
@app.exception_handler(BillingError)
async def billing_error_handler(request: Request, exc: BillingError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    # A client id that is not an integer can never match a row
    if errors and all(err.get("loc", ("",))[0] == "path" for err in errors):
        return JSONResponse(status_code=404, content={"error": "Client not found"})

    # loc is ("body" | "path", field, ...); json_invalid errors carry a position instead
    fields = [
        ".".join(part for part in err.get("loc", ())[1:] if isinstance(part, str))
        for err in errors
    ]
    detail = ", ".join(field for field in fields if field) or "body"
    return JSONResponse(status_code=400, content={"error": f"Invalid request: {detail}"})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


# --- Configuración de Directorios ---
current_dir = os.path.dirname(__file__)
static_dir = os.path.join(current_dir, "static")
app.mount("/static", StaticFiles(directory=static_dir), name="static")


# ============================================================================
# --- ROUTERS INCLUSION ---
# ============================================================================
app.include_router(views_router)
app.include_router(clients_main_api.router, prefix="/api", tags=["Clients"])
app.include_router(notifications_main_api.router, prefix="/api", tags=["Notifications"])
app.include_router(health_api.router, prefix="/api", tags=["System"])
