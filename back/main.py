# Standard library imports
from contextlib import asynccontextmanager

# Third-party imports
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute
import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from app.api import router as api_router
from app.api.internal.utils.exceptions import register_exception_handlers
from app.core.db import get_async_session
from app.core.monitoring.logging import get_logger
from app.db_selectors.admin import get_admin_user_by_id
from app.models.admin.admin_user import AdminRole
from app.schemas.admin.admin_user_schemas import AdminUserCreate
from app.services.admin.admin_user_services import create_admin_user
from app.settings import settings
from app.utils.validators.phone_validator import admin_id_from_phone, validate_phone_number

# Set up the main application logger
logger = get_logger("app")


def setup_sentry() -> None:
    if settings.ENVIRONMENT != "production" or not settings.SENTRY_DSN:
        return

    logger.info(f"Initializing Sentry in {settings.ENVIRONMENT} environment")
    # app.core.monitoring has already initialised Sentry with the logging and
    # celery integrations; only the FastAPI integration is added here
    sentry_client = sentry_sdk.get_client()
    if not sentry_client.is_active():
        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            integrations=[FastApiIntegration()],
            environment=settings.ENVIRONMENT,
            enable_tracing=True,
            traces_sample_rate=1.0,  # tweak for performance
        )
        return

    options = sentry_client.options
    integrations = list(options.get("integrations", []))
    if any(isinstance(integration, FastApiIntegration) for integration in integrations):
        return

    logger.info("Adding FastAPI integration to existing Sentry configuration")
    integrations.append(FastApiIntegration())
    sentry_sdk.init(
        dsn=options.get("dsn"),
        integrations=integrations,
        environment=options.get("environment", settings.ENVIRONMENT),
        enable_tracing=True,
        traces_sample_rate=options.get("traces_sample_rate", 1.0),
    )


setup_sentry()


async def ensure_default_super_admin(db: AsyncSession) -> str:
    """Provision the configured super admin once; later startups leave it alone."""
    phone = validate_phone_number(settings.ADMIN_PHONE_NUMBER)
    if phone is None:
        raise ValueError(f"ADMIN_PHONE_NUMBER is not a valid phone number: {settings.ADMIN_PHONE_NUMBER}")

    existing = await get_admin_user_by_id(db, admin_id_from_phone(phone))
    if existing is not None:
        logger.info("Super admin already exists.")
        return existing.id

    admin = await create_admin_user(
        db,
        AdminUserCreate(phone=phone, name=settings.ADMIN_NAME, role=AdminRole.SUPER_ADMIN),
    )
    logger.info("Super admin created.")
    return admin.id


# ---- FASTAPI APP CREATION ----
def custom_generate_unique_id(route: APIRoute) -> str:
    # Handle routes without tags
    if route.tags and len(route.tags) > 0:
        return f"{route.tags[0]}-{route.name}"
    else:
        return route.name or "unnamed_route"


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        logger.info("Starting up FastAPI application")

        try:
            async for db in get_async_session():
                admin_id = await ensure_default_super_admin(db)
                logger.info(f"Super admin ready with ID: {admin_id}")
        except Exception as e:
            logger.error(f"Failed to create super admin: {e}")

        yield

        logger.info("Shutting down FastAPI application")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="Civic issue reporting: submission, triage and resolution showcase",
        openapi_url=f"{settings.API_V1_STR}/openapi.json" if settings.ENVIRONMENT != "production" else None,
        docs_url=f"{settings.API_V1_STR}/docs" if settings.ENVIRONMENT != "production" else None,
        redoc_url=f"{settings.API_V1_STR}/redoc" if settings.ENVIRONMENT != "production" else None,
        generate_unique_id_function=custom_generate_unique_id,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.all_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "version": "1.0.0"}

    app.include_router(api_router)

    return app


# Create the app instance
app = create_app()
