# academia/main.py
import sys
import asyncio

# Event loop compatível no Windows (safe em outros SOs também)
if sys.platform.startswith("win"):
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

from contextlib import asynccontextmanager
import json
import logging
from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from academia.core.config import settings
from academia.core.errors import CheckoutError
from academia.core.logging import setup_logging
from academia.api.v1.router import api_router
from academia.modules.payments.router import router as payments_router
from academia.db.session import engine
from academia.db.base import Base

logger = logging.getLogger(__name__)


def _normalize_origins(value) -> list[str]:
    """Aceita lista, JSON string ou CSV e devolve lista de origens."""
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        return [str(o).strip() for o in value if str(o).strip()]
    if isinstance(value, str):
        # tenta JSON primeiro
        try:
            as_json = json.loads(value)
            if isinstance(as_json, (list, tuple)):
                return [str(o).strip() for o in as_json if str(o).strip()]
        except ValueError:
            pass
        # fallback: CSV
        return [o.strip() for o in value.split(",") if o.strip()]
    return [str(value).strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Em desenvolvimento, cria as tabelas automaticamente."""
    env = (settings.ENVIRONMENT or "").lower().strip()
    if env == "dev":
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    yield


setup_logging()

# --- App ---
app = FastAPI(title="Academia Backend", lifespan=lifespan)

# --- CORS (colocado ANTES dos routers) ---
origins = _normalize_origins(getattr(settings, "CORS_ORIGINS", None))
if not origins:
    origins = [
        "http://localhost:8081",
        "http://localhost:19006",
    ]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Erros de checkout: sempre {"error": "..."} ---
@app.exception_handler(CheckoutError)
async def checkout_error_handler(request: Request, exc: CheckoutError):
    if exc.status_code >= 500:
        logger.error("[CHECKOUT] %s %s -> %s", request.method, request.url.path, exc.message)
    else:
        logger.info("[CHECKOUT] %s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # o app mobile espera 400 + {"error"} na criação do PaymentIntent
    if request.url.path.endswith("/create-payment-intent"):
        fields = sorted({str(e["loc"][-1]) for e in exc.errors() if e.get("loc")})
        return JSONResponse(
            status_code=400,
            content={"error": f"Campos inválidos ou ausentes: {', '.join(fields)}"},
        )
    return await request_validation_exception_handler(request, exc)


# Healthcheck simples
@app.get("/healthz")
async def healthz():
    return {"status": "ok"}


app.include_router(api_router, prefix=settings.API_V1_PREFIX)
# URL legada usada pelo app mobile: POST /create-payment-intent
app.include_router(payments_router, tags=["payments"])
