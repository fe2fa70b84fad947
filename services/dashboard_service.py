"""Initial data load: vanishing reports, report gate and headline numbers."""

from datetime import date

from config.settings import settings
from models.schemas import DashboardResponse
from services.report_gate import ReportContext, ReportGate
from services.storage_service import StorageService
from services.streak import calculate_streak
from utils.logger import setup_logger

logger = setup_logger(__name__)


async def load_dashboard(
    storage: StorageService,
    gate: ReportGate,
    user_id: str,
    today: date,
) -> DashboardResponse:
    """Load the user's data the way the client expects it on startup.

    Reports from earlier days are purged before anything else looks at the
    analytics, then the report gate runs against the cleaned data.
    """
    data = await storage.get_app_data(user_id)
    data = await storage.purge_stale_analyses(user_id, data, today)

    result = await gate.run(ReportContext(user_id=user_id, today=today), data)

    return DashboardResponse(
        data=data,
        streak=calculate_streak(data.history, today, settings.streak_window_days),
        profile_incomplete=not data.profile.is_complete(),
        celebration=result.report_type if result.celebrate else None,
        report=result.analysis if result.celebrate else None,
    )
