# backend/app/main.py - Dashboard de clientes (FastAPI + Supabase)
import logging
import os

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.settings import log_settings, settings, should_log_settings
from app.utils.logging import setup_logging
from app.utils.errors import register_exception_handlers

# Routers
from app.api.auth import router as auth_router
from app.api.clients import router as clients_router

# 1) Logging
setup_logging()
logger = logging.getLogger(__name__)

if should_log_settings():
    log_settings()

# 2) App
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

# 3) CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["authorization", "content-type", "accept", "origin"],
    max_age=86400,  # Cache preflight 24h
)


# 4) Log de peticiones
@app.middleware("http")
async def request_log_middleware(request: Request, call_next):
    response = await call_next(request)
    if request.url.path not in ("/health", "/"):
        logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
    return response

# 5) Error handlers
register_exception_handlers(app)

# 6) Routers
app.include_router(auth_router,    prefix="/auth",    tags=["auth"])
app.include_router(clients_router, prefix="/clients", tags=["clients"])


# 7) Health
@app.get("/health")
def health_check():
    return JSONResponse({
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
    })


@app.get("/")
def root_endpoint():
    return {
        "status": "ok",
        "version": settings.VERSION,
        "endpoints": ["/health", "/auth/login", "/clients/"],
    }

# 8) Run
if __name__ == "__main__":
    port = int(os.environ.get("PORT", settings.PORT))

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=port,
        reload=settings.DEBUG,
        access_log=True,
        log_level="info"
    )
