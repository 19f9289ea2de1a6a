from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from retail_inventory.core.config import settings
from retail_inventory.core.database import init_db
from retail_inventory.core.logging import configure_logging, get_logger
from retail_inventory.routers import product
from retail_inventory.services.results import ValidationFailed

configure_logging(settings)
logger = get_logger(__name__)

# ---------------------------------------------------------
# 1. LIFESPAN MANAGER
# ---------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- STARTUP ---
    logger.info("startup", app=settings.APP_NAME)
    try:
        await init_db()
        logger.info("database_connected", database=settings.DATABASE_NAME)
    except Exception:
        # The API still comes up; requests fail until the database is reachable
        logger.critical("database_connection_failed", database=settings.DATABASE_NAME, exc_info=True)

    yield

    # --- SHUTDOWN ---
    logger.info("shutdown", app=settings.APP_NAME)

# ---------------------------------------------------------
# 2. APP INITIALIZATION
# ---------------------------------------------------------
app = FastAPI(
    title=settings.APP_NAME,
    debug=settings.DEBUG,
    lifespan=lifespan,
    description="API for Retail Product Inventory"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------
# 3. ERROR HANDLING
# ---------------------------------------------------------
def validation_failure(exc: RequestValidationError) -> ValidationFailed:
    """Collapse pydantic's error list into one message per field."""
    errors = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(location) or "body"
        errors.setdefault(field, error.get("msg", "Invalid value"))
    return ValidationFailed(errors)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    failure = validation_failure(exc)
    logger.warning("request_validation_failed", path=request.url.path, errors=failure.errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": failure.message, "errors": failure.errors},
    )

# ---------------------------------------------------------
# 4. ROUTERS
# ---------------------------------------------------------
app.include_router(product.router, prefix=f"{settings.API_PREFIX}/products", tags=["Product Management"])


@app.get("/", tags=["System"])
async def root():
    """Root endpoint to verify the API is online."""
    return {
        "system": settings.APP_NAME,
        "status": "Online",
        "documentation": "/docs"
    }


@app.get("/health", tags=["System"])
async def health_check():
    return {"status": "ok"}


def run():
    import uvicorn

    uvicorn.run("retail_inventory.main:app", host="0.0.0.0", port=8000)
