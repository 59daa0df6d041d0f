import logging
import uvicorn
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sigil.api.v1.endpoints import signatures as signature_endpoints
from sigil.api.v1.endpoints import verification as verification_endpoints
from sigil.core.config import settings
from sigil.core.dependencies import get_signature_index
from sigil.core.logging_setup import configure_logging

configure_logging(debug=settings.DEBUG)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Builds the shared index; a bad signature database aborts startup.
    index = get_signature_index()
    logger.info(
        "Signature index ready: %d signatures, header length %d bytes",
        len(index),
        index.required_header_length,
    )
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

if settings.CORS_ORIGINS.strip():
    origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(
    verification_endpoints.router,
    prefix="/api/v1/verify",
    tags=["verification"],
)

app.include_router(
    signature_endpoints.router,
    prefix="/api/v1/signatures",
    tags=["signatures"],
)


@app.get("/")
def root():
    return {
        "app_name": settings.APP_NAME,
        "app_version": settings.APP_VERSION,
        "debug": settings.DEBUG,
    }


@app.get("/health")
async def health():
    """
    Health check for load balancers and containers.
    Returns 200 with the signature count; 503 if the database cannot be loaded.
    """
    try:
        index = get_signature_index()
        return {"status": "ok", "signatures": len(index)}
    except Exception as e:
        logger.warning("Health check failed: %s", e)
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "signatures": "error", "detail": str(e)},
        )


def start():
    uvicorn.run("sigil.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
