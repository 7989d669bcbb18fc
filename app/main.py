# Main application file


import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.database import engine, Base, SessionLocal
from app.core.rate_limiter import limiter
from app.core.config import settings
from app.core.errors import InventoryError
from app.models import products, reference, stock_logs, users  # noqa: F401 (register tables)
from app.routers import auth, dashboard, logs
from app.routers import products as products_router
from app.routers.reference import categories_router, suppliers_router
from app.services.seed_service import seed_sample_data


# LOGGING CONFIGURATION

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)s | %(message)s",
)

logger = logging.getLogger("app")


# LIFECYCLE

@asynccontextmanager
async def lifespan(_app: FastAPI):
    if settings.using_fallback_secret:
        logger.warning(
            "Using fallback SECRET_KEY. Set a strong SECRET_KEY in your .env file."
        )

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables are ready")

    if settings.SEED_SAMPLE_DATA:
        db = SessionLocal()
        try:
            seed_sample_data(db)
        finally:
            db.close()

    try:
        yield
    finally:
        engine.dispose()


# APP INIT

app = FastAPI(
    title=settings.APP_NAME,
    description="Multi-user inventory tracker with stock audit logging",
    version="1.0.0",
    lifespan=lifespan,
)


# CORS (Token-based auth)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)


# RATE LIMITING

app.state.limiter = limiter
app.add_exception_handler(
    RateLimitExceeded,
    _rate_limit_exceeded_handler
)


# ERROR RESPONSES: always {"error": <message>}

@app.exception_handler(InventoryError)
async def inventory_error_handler(request: Request, exc: InventoryError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()

    missing = [
        str(error["loc"][-1])
        for error in errors
        if error.get("type") == "missing" and error.get("loc")
    ]

    if missing:
        message = "Missing required fields: {}".format(", ".join(missing))
    elif errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ())[1:]) or "request"
        message = f"Invalid value for {field}: {first.get('msg')}"
    else:
        message = "Invalid request"

    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


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

app.include_router(auth.router)
app.include_router(products_router.router)
app.include_router(categories_router)
app.include_router(suppliers_router)
app.include_router(dashboard.router)
app.include_router(logs.router)


# HEALTH

@app.get("/health")
def health():
    return {"status": "OK", "message": "Server is running"}
