"""
FastAPI Application Entry Point

Integrates:
  - Twilio WhatsApp webhook (POST /) and SMS echo webhook (POST /sms)
  - Health checks
  - Middleware for logging & error handling

Run: uvicorn main:app --host 0.0.0.0 --port $PORT
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config import Config
from infra.bootstrap import bootstrap_gateway
from transport.twilio.webhook import router as twilio_router

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan: startup and shutdown handlers.
    """
    # Startup
    gateway = bootstrap_gateway()
    logger.info("=" * 60)
    logger.info("Rights Helpline gateway starting up...")
    logger.info(f"Environment: {Config.ENVIRONMENT}")
    logger.info(f"Backends: {gateway!r}")
    logger.info(f"Port: {Config.PORT}")
    logger.info("=" * 60)

    yield

    # Shutdown
    logger.info("Rights Helpline gateway shutting down...")


# Create FastAPI app
app = FastAPI(
    title="Rights Helpline Gateway",
    description="WhatsApp/SMS legal rights helpline with incident reporting",
    version="1.0.0",
    lifespan=lifespan,
)


# Middleware for logging
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests."""
    logger.debug(f"{request.method} {request.url.path}")
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        logger.error(f"Request error: {str(e)}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )


# Include routers
app.include_router(twilio_router)


# Health check endpoints
@app.get("/health/live")
async def health_live():
    """Live health check (Kubernetes liveness probe)."""
    return {"status": "alive"}


@app.get("/health/ready")
async def health_ready():
    """Readiness health check (Kubernetes readiness probe)."""
    if Config.validate():
        return {"status": "ready"}
    return {"status": "not_ready", "reason": "missing configuration"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=Config.PORT)
