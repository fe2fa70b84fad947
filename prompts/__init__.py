"""Prompts for the coaching tasks."""

from prompts.weekly_report_prompt import WEEKLY_REPORT_PROMPT
from prompts.monthly_report_prompt import MONTHLY_REPORT_PROMPT
from prompts.coach_chat_prompt import COACH_CHAT_PROMPT
from prompts.milestone_prompt import MILESTONE_PROMPT

__all__ = [
    "WEEKLY_REPORT_PROMPT",
    "MONTHLY_REPORT_PROMPT",
    "COACH_CHAT_PROMPT",
    "MILESTONE_PROMPT",
]
