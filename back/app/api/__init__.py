# Third-party imports
from fastapi import APIRouter

# Local application imports
from app.api.internal.routes.v1.routes import router as v1_router
from app.settings import settings

router = APIRouter(prefix=settings.API_V1_STR)

# Include internal API routers
router.include_router(v1_router)
