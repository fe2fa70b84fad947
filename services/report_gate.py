"""Once-a-day gate for the automatic weekly/monthly coaching report.

On Sundays a weekly audit is due, on the last day of a month a monthly
review (month end wins when both apply). The first load of such a day
generates the report, stores it and marks the day seen; later loads that day
do nothing. A failed generation leaves the day unmarked so the next load
tries again.
"""

from datetime import date
from typing import Optional, Protocol

from pydantic import BaseModel, Field

from models.schemas import AIAnalysis, AnalysisType, AppData
from utils.dates import day_key, is_month_end, is_sunday
from utils.logger import setup_logger

logger = setup_logger(__name__)

SEEN_FLAG_VALUE = "true"


class GateStorage(Protocol):
    async def get_setting(self, user_id: str, key: str) -> Optional[str]: ...

    async def set_setting(self, user_id: str, key: str, value: str) -> bool: ...

    async def add_analysis(self, user_id: str, analysis: AIAnalysis) -> bool: ...


class ReportGenerator(Protocol):
    async def generate_report(self, report_type: AnalysisType, data: AppData, today: date) -> str: ...


class ReportContext(BaseModel):
    """Who the gate runs for and which calendar day it is."""
    user_id: str
    today: date

    @property
    def today_key(self) -> str:
        return day_key(self.today)

    @property
    def seen_key(self) -> str:
        """Per-day idempotency key stored in the user's settings."""
        return f"seen_popup_{self.today_key}"


class ReportGateResult(BaseModel):
    report_type: Optional[AnalysisType] = Field(None, description="Report due today, if any")
    celebrate: bool = Field(False, description="Show the report popup")
    generated: bool = Field(False, description="A new report was created on this run")
    analysis: Optional[AIAnalysis] = None


def due_report_type(today: date) -> Optional[AnalysisType]:
    if is_month_end(today):
        return AnalysisType.MONTHLY
    if is_sunday(today):
        return AnalysisType.WEEKLY
    return None


class ReportGate:
    def __init__(self, storage: GateStorage, generator: ReportGenerator):
        self.storage = storage
        self.generator = generator

    async def run(self, context: ReportContext, data: AppData) -> ReportGateResult:
        """Generate and announce today's report at most once.

        ``data.analytics`` is extended in place with a newly stored report.
        """
        report_type = due_report_type(context.today)
        if report_type is None:
            return ReportGateResult()

        if await self.storage.get_setting(context.user_id, context.seen_key):
            return ReportGateResult(report_type=report_type)

        existing = next(
            (
                analysis for analysis in data.analytics
                if analysis.date == context.today_key and analysis.type == report_type
            ),
            None,
        )
        if existing is not None:
            # Stored earlier but the popup was never marked seen
            await self.storage.set_setting(context.user_id, context.seen_key, SEEN_FLAG_VALUE)
            return ReportGateResult(report_type=report_type, celebrate=True, analysis=existing)

        try:
            content = await self.generator.generate_report(report_type, data, context.today)
        except Exception as e:
            logger.error(
                f"Auto-generation of {report_type.value} report failed for user {context.user_id}: {e}"
            )
            return ReportGateResult(report_type=report_type)

        analysis = AIAnalysis(date=context.today_key, type=report_type, content=content)
        # The report must exist before the day is marked seen
        if not await self.storage.add_analysis(context.user_id, analysis):
            return ReportGateResult(report_type=report_type)
        data.analytics.append(analysis)

        await self.storage.set_setting(context.user_id, context.seen_key, SEEN_FLAG_VALUE)
        logger.info(f"Generated {report_type.value} report for user {context.user_id}")
        return ReportGateResult(report_type=report_type, celebrate=True, generated=True, analysis=analysis)
