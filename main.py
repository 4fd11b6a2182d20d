"""
ScopeLock Backend API
=====================
Proposal drafting, public signing links and scope-creep replies for freelancers.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from scopelock.config import settings
from scopelock.logging_config import setup_logging
from scopelock.database import engine, init_db
from scopelock.admin import setup_admin
from scopelock.exceptions import ScopeLockError

# Import routers
from scopelock.routers import (
    auth_router,
    proposals_router,
    public_router,
    scope_alert_router,
)

logger = logging.getLogger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    # ── Startup ──
    setup_logging("DEBUG" if settings.DEBUG else "INFO")
    logger.info("Starting ScopeLock Backend v1.0.0")
    logger.info("LLM model: %s", settings.LLM_MODEL)

    init_db()
    logger.info("Database tables initialised (%s)", settings.DATABASE_URL.split("://")[0])
    logger.info("ScopeLock Backend ready — listening on %s:%s", settings.HOST, settings.PORT)

    yield

    # ── Shutdown ──
    logger.info("Shutting down ScopeLock Backend...")


app = FastAPI(
    title="ScopeLock API",
    description="AI-drafted freelance proposals with public signing links.",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ScopeLockError)
async def scopelock_error_handler(request: Request, exc: ScopeLockError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    content = {"error": exc.error_code, "message": exc.message}
    if exc.details is not None:
        content["details"] = exc.details
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = [{"loc": list(e["loc"]), "msg": e["msg"]} for e in exc.errors()]
    return JSONResponse(
        status_code=400,
        content={"error": "invalid_request", "message": "Malformed request body", "details": details},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s: %s", request.method, request.url.path, exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": "internal_error", "message": "Internal server error"},
    )


# Admin UI at /admin, behind the operator login
setup_admin(app, engine)

# Register routers
app.include_router(auth_router)
app.include_router(proposals_router)
app.include_router(public_router)
app.include_router(scope_alert_router)


@app.get("/", tags=["Health"])
async def root():
    return {
        "service": "ScopeLock API",
        "version": "1.0.0",
        "status": "operational",
        "docs": "/docs",
    }


@app.get("/health", tags=["Health"])
async def health_check():
    return {
        "status": "healthy",
        "database": settings.DATABASE_URL.split("://")[0],
        "llm_model": settings.LLM_MODEL,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
