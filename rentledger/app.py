import logging

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from rentledger.core.breaker import CircuitBreaker
from rentledger.core.catch_error_middleware import ErrorHandlerMiddleware
from rentledger.core.database import Database
from rentledger.core.exception_handler import DomainErrorHandler, ValidationErrorHandler
from rentledger.core.exceptions import RentLedgerError
from rentledger.core.lifespan import lifespan
from rentledger.core.settings import Settings, settings as default_settings
from rentledger.fintechs.paystack import PaystackClient
from rentledger.identity.supabase import IdentityProviderClient
from rentledger.routes.auth_routes import router as auth_router
from rentledger.routes.lease_routes import router as lease_router
from rentledger.routes.maintenance_routes import router as maintenance_router
from rentledger.routes.payment_routes import router as payment_router
from rentledger.routes.property_routes import router as property_router
from rentledger.routes.tenant_routes import router as tenant_router
from rentledger.routes.unit_routes import router as unit_router
from rentledger.routes.webhooks_routes import router as webhook_router

logging.basicConfig(level=logging.INFO)


def create_app(
    settings: Settings | None = None,
    database: Database | None = None,
    gateway=None,
    identity=None,
) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(
        lifespan=lifespan,
        title=settings.PROJECT_NAME,
        version="1.0.0",
    )

    app.state.settings = settings
    app.state.database = database or Database(settings.DATABASE_URL, echo=settings.SQL_ECHO)
    app.state.gateway = gateway or PaystackClient(
        secret_key=settings.PAYSTACK_SECRET_KEY,
        base_url=settings.PAYSTACK_BASE_URL,
        preferred_bank=settings.PAYSTACK_PREFERRED_BANK,
        timeout=settings.PAYSTACK_TIMEOUT_SECONDS,
    )
    app.state.identity = identity or IdentityProviderClient(
        base_url=settings.IDENTITY_PROVIDER_URL,
        api_key=settings.IDENTITY_PROVIDER_API_KEY,
        timeout=settings.IDENTITY_PROVIDER_TIMEOUT_SECONDS,
    )
    app.state.gateway_breaker = CircuitBreaker(
        name="paystack",
        failure_threshold=settings.GATEWAY_BREAKER_FAILURE_THRESHOLD,
        base_recovery_time=settings.GATEWAY_BREAKER_RECOVERY_SECONDS,
    )

    prefix = settings.API_PREFIX
    app.include_router(auth_router, prefix=prefix)
    app.include_router(property_router, prefix=prefix)
    app.include_router(unit_router, prefix=prefix)
    app.include_router(tenant_router, prefix=prefix)
    app.include_router(lease_router, prefix=prefix)
    app.include_router(payment_router, prefix=prefix)
    app.include_router(maintenance_router, prefix=prefix)
    app.include_router(webhook_router, prefix=prefix)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_HOSTS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", tags=["System"])
    async def health_check():
        return {"status": "ok"}

    app.add_exception_handler(
        RequestValidationError,
        ValidationErrorHandler(),
    )
    app.add_exception_handler(
        RentLedgerError,
        DomainErrorHandler(),
    )

    app.add_middleware(ErrorHandlerMiddleware)

    return app


if __name__ == "__main__":
    uvicorn.run("rentledger.app:create_app", factory=True, host="127.0.0.1", port=8001)
