# Main application file



import logging
import re
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.database import init_models
from app.core.rate_limiter import limiter
from app.core.config import settings
from app.core.exceptions import BookstoreError
from app.routers import (
    admin,
    customers,
    employees,
    suppliers,
    merchandise,
    sales,
    sales_detail,
    reorders,
)


# LOGGING CONFIGURATION

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s | %(levelname)s | %(message)s",
)

logger = logging.getLogger("app")


# APP INIT

@asynccontextmanager
async def lifespan(app: FastAPI):
    init_models()
    logger.info("Database connection successful, tables ready")
    yield


app = FastAPI(
    title="Bookstore Inventory & Sales API",
    description="Record keeping for a bookstore: merchandise, sales, line items and reorders",
    version="1.0.0",
    lifespan=lifespan,
)



# CORS (Token-based auth)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin for origin in [settings.FRONTEND_URL] if origin],
    allow_origin_regex=rf"https?://.*{re.escape(settings.CORS_ORIGIN_SUFFIX)}",
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)


# RATE LIMITING

app.state.limiter = limiter
app.add_exception_handler(
    RateLimitExceeded,
    _rate_limit_exceeded_handler
)


# DOMAIN ERRORS

@app.exception_handler(BookstoreError)
async def bookstore_error_handler(request: Request, exc: BookstoreError):
    logger.warning(
        f"{request.method} {request.url.path} failed: "
        f"{type(exc).__name__}: {exc.message}"
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
    )


# REQUEST LOGGING MIDDLEWARE

@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    response = await call_next(request)

    duration = round((time.time() - start_time) * 1000, 2)

    logger.info(
        f"{request.method} {request.url.path} "
        f"Status: {response.status_code} "
        f"Time: {duration}ms"
    )

    return response


# ROUTERS

app.include_router(admin.router)
app.include_router(customers.router)
app.include_router(employees.router)
app.include_router(suppliers.router)
app.include_router(merchandise.router)
app.include_router(sales.router)
app.include_router(sales_detail.router)
app.include_router(reorders.router)



# ROOT

@app.get("/")
def root():
    logger.info("Health check endpoint called")
    return {"message": "Bookstore API is running"}
