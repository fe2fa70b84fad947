"""Tests for the AI coach with fake chat models."""

from datetime import date

from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.runnables import RunnableLambda
import pytest

from config.settings import settings
from models.schemas import AnalysisType, AppData, ChatMessage, ChatRole, GoalType, UserProfile
from services import llm_factory
from services.coach_service import (
    CHAT_EMPTY,
    CHAT_FAILED,
    CHAT_UNAVAILABLE,
    FALLBACK_MILESTONES,
    NO_KEY_MILESTONES,
    REPORT_FAILED,
    REPORT_UNAVAILABLE,
    CoachError,
    CoachService,
    CoachUnavailableError,
    parse_milestones,
    strip_code_fences,
)
from services.llm_factory import LLMNotConfiguredError
from tests.conftest import make_entry

TODAY = date(2024, 6, 2)


def replying(*responses):
    return lambda agent_name: FakeListChatModel(responses=list(responses))


def failing(agent_name):
    def boom(prompt_value):
        raise RuntimeError("rate limited")
    return RunnableLambda(boom)


def unconfigured(agent_name):
    raise LLMNotConfiguredError("no keys")


def recording(prompts, reply="ok"):
    def provider(agent_name):
        def capture(prompt_value):
            prompts.append((agent_name, prompt_value.to_string()))
            return reply
        return RunnableLambda(capture)
    return provider


def test_strip_code_fences():
    assert strip_code_fences('```json\n["a", "b"]\n```') == '["a", "b"]'
    assert strip_code_fences('```\n["a"]\n```') == '["a"]'
    assert strip_code_fences(' ["a"] ') == '["a"]'


def test_parse_milestones_caps_and_rejects():
    assert parse_milestones('["1","2","3","4","5","6","7"]') == ["1", "2", "3", "4", "5", "6"]
    with pytest.raises(ValueError):
        parse_milestones('{"steps": []}')
    with pytest.raises(ValueError):
        parse_milestones("[]")


async def test_generate_weekly_report():
    coach = CoachService(llm_provider=replying("## 🧠 Weekly Neural Audit"))
    report = await coach.generate_report(AnalysisType.WEEKLY, AppData(), TODAY)
    assert report == "## 🧠 Weekly Neural Audit"


async def test_generate_report_raises_for_gate():
    with pytest.raises(CoachUnavailableError):
        await CoachService(llm_provider=unconfigured).generate_report(AnalysisType.WEEKLY, AppData(), TODAY)
    with pytest.raises(CoachError):
        await CoachService(llm_provider=failing).generate_report(AnalysisType.MONTHLY, AppData(), TODAY)


async def test_report_placeholders():
    data = AppData()
    assert (
        await CoachService(llm_provider=unconfigured).report_or_placeholder(AnalysisType.WEEKLY, data, TODAY)
        == REPORT_UNAVAILABLE[AnalysisType.WEEKLY]
    )
    assert (
        await CoachService(llm_provider=failing).report_or_placeholder(AnalysisType.MONTHLY, data, TODAY)
        == REPORT_FAILED[AnalysisType.MONTHLY]
    )
    assert await CoachService(llm_provider=unconfigured).monthly_report(data, TODAY) == "API Key missing."
    assert await CoachService(llm_provider=replying("# Audit")).weekly_report(data, TODAY) == "# Audit"


def test_weekly_variables_cover_eight_days():
    data = AppData(history={
        "2024-05-25": make_entry("2024-05-25", 1, 1),
        "2024-05-26": make_entry("2024-05-26", 1, 1),
        "2024-06-02": make_entry("2024-06-02", 0, 1),
    })
    variables = CoachService.weekly_variables(data, TODAY)
    assert variables["missed_days"] == 6
    assert "2024-05-26" in variables["recent_history"]
    assert "2024-05-25" not in variables["recent_history"]


async def test_monthly_report_uses_monthly_agent():
    prompts = []
    coach = CoachService(llm_provider=recording(prompts, reply="## 📅 Monthly System Review"))
    data = AppData(profile=UserProfile(name="Ada"))

    assert await coach.generate_report(AnalysisType.MONTHLY, data, TODAY) == "## 📅 Monthly System Review"
    agent_name, prompt = prompts[0]
    assert agent_name == "monthly_report"
    assert '"name":"Ada"' in prompt


async def test_chat_sends_recent_history_only():
    prompts = []
    coach = CoachService(llm_provider=recording(prompts, reply="Keep going"), history_window=2)
    history = [
        ChatMessage(role=ChatRole.USER, text="first"),
        ChatMessage(role=ChatRole.MODEL, text="second"),
        ChatMessage(role=ChatRole.USER, text="third"),
    ]

    assert await coach.chat("How am I doing?", AppData(), history) == "Keep going"
    prompt = prompts[0][1]
    assert "MODEL: second\nUSER: third" in prompt
    assert "first" not in prompt
    assert "USER QUERY: How am I doing?" in prompt


async def test_chat_fallback_messages():
    data = AppData()
    assert await CoachService(llm_provider=unconfigured).chat("hi", data, []) == CHAT_UNAVAILABLE
    assert await CoachService(llm_provider=failing).chat("hi", data, []) == CHAT_FAILED
    assert await CoachService(llm_provider=replying("")).chat("hi", data, []) == CHAT_EMPTY


def test_greeting_mentions_counts():
    data = AppData(history={"2024-06-02": make_entry("2024-06-02", 0, 1)})
    assert CoachService.greeting(data).startswith("Greetings, User. I am your Neural Agent.")
    assert "1 logged days and 0 active goals" in CoachService.greeting(data)


async def test_suggest_milestones():
    coach = CoachService(llm_provider=replying('```json\n["Book a class", "Practice daily", "Take a test", "Review"]\n```'))
    milestones = await coach.suggest_milestones("Learn Spanish", GoalType.LONG_TERM)
    assert milestones == ["Book a class", "Practice daily", "Take a test", "Review"]


async def test_suggest_milestones_fallbacks():
    assert await CoachService(llm_provider=unconfigured).suggest_milestones("x", GoalType.SHORT_TERM) == NO_KEY_MILESTONES
    assert await CoachService(llm_provider=failing).suggest_milestones("x", GoalType.SHORT_TERM) == FALLBACK_MILESTONES
    assert (
        await CoachService(llm_provider=replying("not json")).suggest_milestones("x", GoalType.SHORT_TERM)
        == FALLBACK_MILESTONES
    )


def test_get_llm_requires_a_key(monkeypatch):
    monkeypatch.setattr(settings, "openai_api_key", "")
    monkeypatch.setattr(settings, "anthropic_api_key", "")
    with pytest.raises(LLMNotConfiguredError):
        llm_factory.get_llm("coach_chat")


def test_get_llm_unknown_agent():
    with pytest.raises(ValueError):
        llm_factory.get_llm("nutrition")


def test_get_llm_attaches_claude_fallback(monkeypatch):
    monkeypatch.setattr(settings, "openai_api_key", "sk-test")
    monkeypatch.setattr(settings, "anthropic_api_key", "sk-ant-test")
    llm = llm_factory.get_llm("weekly_report")
    assert llm.fallbacks[0].model == "claude-3-haiku-20240307"
    assert llm.runnable.model_name == "gpt-4o-mini"


def test_get_llm_uses_claude_alone(monkeypatch):
    monkeypatch.setattr(settings, "openai_api_key", "")
    monkeypatch.setattr(settings, "anthropic_api_key", "sk-ant-test")
    llm = llm_factory.get_llm("milestone_planner")
    assert llm.model == "claude-3-haiku-20240307"
