from datetime import datetime, timezone
from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
import sentry_sdk
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import os

from api import auth, cart, categories, districts, products
from core.config import APP_ENV, CORS_ORIGINS, LOG_FILE, SENTRY_DSN
from core.exceptions import AppError
from db import engine, get_db
from logging_config import setup_logging
from models import Base


setup_logging(APP_ENV, LOG_FILE)
logger = logging.getLogger(__name__)

if SENTRY_DSN:
    sentry_sdk.init(dsn=SENTRY_DSN, environment=APP_ENV)


app = FastAPI(
    title="South Bay Mart",
    description="South Bay Mart storefront APIs",
    version="1.0.0",
    docs_url="/api/docs",
    openapi_url="/api/openapi.json",
    redoc_url="/api/redoc",
)


# ✔ Request logger middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.debug(f"Request: {request.method} {request.url.path}")
    response = await call_next(request)
    return response


# ✔ Structured errors for the OTP flow
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{exc.__class__.__name__} on {request.url.path}: {exc.message} ({exc.detail})")
    content = {"success": False, "message": exc.message}
    if APP_ENV == "development" and exc.detail:
        content["error"] = exc.detail
    return JSONResponse(status_code=exc.status_code, content=content)


# ✔ Malformed request bodies and path params get the same envelope (400)
@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = jsonable_encoder(exc.errors())
    message = errors[0]["msg"] if errors else "Invalid request"
    logger.debug(f"Validation failed on {request.url.path}: {errors}")
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": message, "errors": errors},
    )


# ✔ Unknown routes
@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and exc.detail == "Not Found":
        return JSONResponse(status_code=404, content={"message": "Route not found"})
    return await http_exception_handler(request, exc)


# ✔ Catch-all: never leak a raw traceback
@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled Exception on {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


# ✔ CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ✔ Startup / shutdown: store lifecycle
@app.on_event("startup")
def startup_event():
    Base.metadata.create_all(bind=engine)
    logger.info(f"South Bay Mart API started (env={APP_ENV})")


@app.on_event("shutdown")
def shutdown_event():
    engine.dispose()
    logger.info("Database connections closed")


@app.get("/", response_class=PlainTextResponse, include_in_schema=False)
def root():
    return "South Bay Mart API Running..."


@app.get("/health")
def health(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        db_status = "connected"
    except SQLAlchemyError as e:
        logger.warning(f"Health check could not reach the database: {e}")
        db_status = "disconnected"

    return {
        "status": "OK",
        "database": db_status,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# ✔ Routers
app.include_router(auth.router, prefix="/api", tags=["Auth"])
app.include_router(districts.router, prefix="/api")
app.include_router(categories.router, prefix="/api")
app.include_router(products.router, prefix="/api")
app.include_router(cart.router, prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=int(os.getenv("PORT", 5000)), reload=APP_ENV == "development")
