"""
FastAPI Application Entry Point

Integrates:
  - WhatsApp webhook (verification + message delivery)
  - Reminder relay
  - Health checks
  - Middleware for logging & error handling

Run: uvicorn main:app --reload --host 0.0.0.0 --port 3000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config import Config
from infra.bootstrap import bootstrap_infrastructure
from transport.whatsapp import reminder_router, router as whatsapp_router

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
    infra = bootstrap_infrastructure()
    logger.info("=" * 60)
    logger.info("CHW intake bot starting up...")
    logger.info(f"Environment: {Config.ENVIRONMENT}")
    logger.info(f"Backend API: {Config.BACKEND_API_BASE}")
    logger.info(f"Infrastructure: {infra!r}")
    if not Config.WHATSAPP_PHONE_NUMBER_ID or not Config.WHATSAPP_ACCESS_TOKEN:
        logger.warning("WHATSAPP_PHONE_NUMBER_ID or WHATSAPP_ACCESS_TOKEN is missing. Sending messages will fail.")
    if not Config.AUTHORIZED_NUMBERS:
        logger.warning("AUTHORIZED_NUMBERS is empty. Every sender will be denied.")
    logger.info("=" * 60)

    yield

    # Shutdown
    logger.info("CHW intake bot shutting down...")


# Create FastAPI app
app = FastAPI(
    title="CHW Intake Bot",
    description="WhatsApp intake for guardian, baby and immunization appointment records",
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
app.include_router(whatsapp_router)
app.include_router(reminder_router)


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
    return JSONResponse(
        status_code=503,
        content={"status": "not_ready", "reason": "WhatsApp configuration incomplete"},
    )


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "CHW Intake Bot",
        "version": "1.0.0",
        "status": "running",
        "endpoints": {
            "whatsapp_verify": "GET /whatsapp/webhook",
            "whatsapp_webhook": "POST /whatsapp/webhook",
            "send_reminder": "POST /send-reminder",
            "health_live": "GET /health/live",
            "health_ready": "GET /health/ready",
        },
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=Config.PORT,
        reload=Config.ENVIRONMENT == "development",
    )
