from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from core.config import settings
from core.database import engine, Base
from core.exceptions import AppException
from core.handlers import (
    app_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from core.logging_config import setup_logging
import core.models  # noqa: F401

from analytics.main import router as analytics_router
from transactions.main import router as transaction_router
from users.main import router as user_router
from webhooks.main import router as webhook_router

setup_logging(settings.LOG_LEVEL)

Base.metadata.create_all(bind=engine)

app = FastAPI(title="KeloPay Analytics API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

app.include_router(webhook_router)
app.include_router(transaction_router)
app.include_router(user_router)
app.include_router(analytics_router)


@app.get("/")
def health_check():
    return {"status": "healthy", "version": "1.0.0"}
