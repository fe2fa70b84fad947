"""AI coaching: weekly/monthly reports, chat replies and goal milestones."""

from datetime import date
import json
from typing import Any, Callable, Dict, List, Optional, Sequence

from langchain_core.prompts import PromptTemplate
from langchain_core.runnables import Runnable

from config.settings import settings
from models.schemas import AnalysisType, AppData, ChatMessage, GoalType
from prompts import COACH_CHAT_PROMPT, MILESTONE_PROMPT, MONTHLY_REPORT_PROMPT, WEEKLY_REPORT_PROMPT
from services.llm_factory import LLMNotConfiguredError, get_llm
from utils.dates import day_key, days_before
from utils.logger import setup_logger

logger = setup_logger(__name__)

WEEKLY_LOOKBACK_DAYS = 7
MAX_MILESTONES = 6

NO_KEY_MILESTONES = ["Define clear objective", "Break down into steps", "Execute first step", "Review progress"]
FALLBACK_MILESTONES = ["Research requirements", "Create daily habit", "Track first week", "Evaluate results"]

REPORT_AGENTS = {
    AnalysisType.WEEKLY: "weekly_report",
    AnalysisType.MONTHLY: "monthly_report",
}
REPORT_UNAVAILABLE = {
    AnalysisType.WEEKLY: "API Key missing. Cannot generate report.",
    AnalysisType.MONTHLY: "API Key missing.",
}
REPORT_FAILED = {
    AnalysisType.WEEKLY: "Failed to generate report due to an error.",
    AnalysisType.MONTHLY: "Failed to generate report.",
}
CHAT_UNAVAILABLE = "I cannot access my neural core (API Key missing)."
CHAT_FAILED = "My neural pathways are currently congested. Please try again."
CHAT_EMPTY = "I processed the data but could not formulate a verbal response."


class CoachError(Exception):
    """A coaching call produced no usable text."""


class CoachUnavailableError(CoachError):
    """No AI provider is configured."""


class EmptyResponseError(CoachError):
    """The model answered with no text."""


def _message_text(response: Any) -> str:
    content = getattr(response, "content", response)
    if isinstance(content, list):
        # Anthropic returns content blocks
        content = "".join(
            block.get("text", "") if isinstance(block, dict) else str(block) for block in content
        )
    return (content or "").strip()


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` wrapper if the model added one."""
    text = text.strip()
    if text.startswith("```"):
        text = text[3:]
        if text.lower().startswith("json"):
            text = text[4:]
        if text.rstrip().endswith("```"):
            text = text.rstrip()[:-3]
    return text.strip()


def parse_milestones(text: str) -> List[str]:
    """Parse the planner's JSON array into milestone strings."""
    parsed = json.loads(strip_code_fences(text) or "[]")
    if not isinstance(parsed, list):
        raise ValueError("Milestone response is not a JSON array")
    milestones = [str(item).strip() for item in parsed if str(item).strip()]
    if not milestones:
        raise ValueError("Milestone response is empty")
    return milestones[:MAX_MILESTONES]


class CoachService:
    """Talks to the configured chat model. Single attempt per call, no retries."""

    def __init__(
        self,
        llm_provider: Callable[[str], Runnable] = get_llm,
        history_window: Optional[int] = None,
    ):
        self._llm_provider = llm_provider
        self.history_window = history_window or settings.chat_history_window

    async def _complete(self, agent_name: str, prompt: PromptTemplate, variables: Dict[str, Any]) -> str:
        try:
            llm = self._llm_provider(agent_name)
        except LLMNotConfiguredError as e:
            raise CoachUnavailableError(str(e)) from e

        try:
            response = await (prompt | llm).ainvoke(variables)
        except Exception as e:
            raise CoachError(f"{agent_name} call failed: {e}") from e

        text = _message_text(response)
        if not text:
            raise EmptyResponseError(f"{agent_name} returned an empty response")
        return text

    # ------------------------------------------------------------------
    # Reports
    # ------------------------------------------------------------------

    @staticmethod
    def weekly_variables(data: AppData, today: date) -> Dict[str, Any]:
        """Entries from a week ago through today, plus how many days went unlogged."""
        recent, missed_days = [], 0
        for offset in range(WEEKLY_LOOKBACK_DAYS, -1, -1):
            entry = data.history.get(day_key(days_before(today, offset)))
            if entry is None:
                missed_days += 1
            else:
                recent.append(entry.model_dump(mode="json"))
        return {
            "profile": data.profile.model_dump_json(),
            "goals": json.dumps([goal.model_dump(mode="json") for goal in data.goals]),
            "recent_history": json.dumps(recent),
            "missed_days": missed_days,
        }

    async def generate_report(self, report_type: AnalysisType, data: AppData, today: date) -> str:
        """Produce report markdown or raise CoachError."""
        if report_type == AnalysisType.MONTHLY:
            prompt, variables = MONTHLY_REPORT_PROMPT, {"data": data.model_dump_json()}
        else:
            prompt, variables = WEEKLY_REPORT_PROMPT, self.weekly_variables(data, today)

        logger.info(f"Generating {report_type.value} report")
        return await self._complete(REPORT_AGENTS[report_type], prompt, variables)

    async def report_or_placeholder(self, report_type: AnalysisType, data: AppData, today: date) -> str:
        """Like generate_report, but failures become a user-visible message."""
        try:
            return await self.generate_report(report_type, data, today)
        except CoachUnavailableError:
            logger.warning("No AI provider configured for reports")
            return REPORT_UNAVAILABLE[report_type]
        except CoachError as e:
            logger.error(f"Report generation failed: {e}")
            return REPORT_FAILED[report_type]

    async def weekly_report(self, data: AppData, today: date) -> str:
        return await self.report_or_placeholder(AnalysisType.WEEKLY, data, today)

    async def monthly_report(self, data: AppData, today: date) -> str:
        return await self.report_or_placeholder(AnalysisType.MONTHLY, data, today)

    # ------------------------------------------------------------------
    # Chat
    # ------------------------------------------------------------------

    def format_conversation(self, history: Sequence[ChatMessage]) -> str:
        recent = list(history)[-self.history_window:]
        return "\n".join(f"{message.role.value.upper()}: {message.text}" for message in recent)

    async def chat(self, message: str, data: AppData, history: Sequence[ChatMessage]) -> str:
        variables = {
            "data": data.model_dump_json(),
            "conversation": self.format_conversation(history),
            "message": message,
        }
        try:
            return await self._complete("coach_chat", COACH_CHAT_PROMPT, variables)
        except CoachUnavailableError:
            return CHAT_UNAVAILABLE
        except EmptyResponseError:
            return CHAT_EMPTY
        except CoachError as e:
            logger.error(f"Chat error: {e}")
            return CHAT_FAILED

    @staticmethod
    def greeting(data: AppData) -> str:
        name = data.profile.name or "User"
        return (
            f"Greetings, {name}. I am your Neural Agent. I have analyzed your "
            f"{len(data.history)} logged days and {len(data.goals)} active goals. "
            "How can I assist your optimization today?"
        )

    # ------------------------------------------------------------------
    # Milestones
    # ------------------------------------------------------------------

    async def suggest_milestones(self, title: str, goal_type: GoalType) -> List[str]:
        """4-6 short milestones for a goal; a generic plan when the model fails."""
        try:
            text = await self._complete(
                "milestone_planner",
                MILESTONE_PROMPT,
                {"title": title, "goal_type": goal_type.value},
            )
            return parse_milestones(text)
        except CoachUnavailableError:
            return list(NO_KEY_MILESTONES)
        except (CoachError, ValueError) as e:
            logger.error(f"Milestone generation error: {e}")
            return list(FALLBACK_MILESTONES)
