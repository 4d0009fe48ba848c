"""
API routes - combined router from all domain modules.

Shared infrastructure (limiter) lives here; the combined router is mounted
under the configured API prefix by ``courtla.api.main``.
"""

from fastapi import APIRouter
from slowapi import Limiter
from slowapi.util import get_remote_address

from courtla.services import settings_service

# ---------------------------------------------------------------------------
# Shared rate limiter
# ---------------------------------------------------------------------------
# One per-client budget shared by every route (SlowAPIMiddleware); disabled
# when ENV=test.
limiter = Limiter(
    key_func=get_remote_address,
    application_limits=[settings_service.get_rate_limit()],
    enabled=not settings_service.is_test_env(),
)

# ---------------------------------------------------------------------------
# Import sub-routers and combine
# ---------------------------------------------------------------------------
from courtla.api.routes.courts import router as courts_router  # noqa: E402
from courtla.api.routes.games import router as games_router  # noqa: E402
from courtla.api.routes.statistics import router as statistics_router  # noqa: E402
from courtla.api.routes.profiles import router as profiles_router  # noqa: E402

router = APIRouter()
router.include_router(courts_router)
router.include_router(games_router)
router.include_router(statistics_router)
router.include_router(profiles_router)
