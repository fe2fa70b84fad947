"""Utility helpers for creating chat models with fallbacks."""

from typing import Optional

from config.agent_config import AGENT_CONFIG
from config.settings import settings
from langchain_anthropic import ChatAnthropic
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.runnables import Runnable
from langchain_openai import ChatOpenAI
from utils.logger import setup_logger

logger = setup_logger(__name__)


class LLMNotConfiguredError(RuntimeError):
    """No provider credentials are available for a coaching task."""


def get_llm(agent_name: str) -> Runnable:
    """Create a chat model for a coaching task with optional fallback.

    The function tries to create an OpenAI chat model first.
    If an Anthropic API key is also configured, a Claude model is
    attached with LangChain's `with_fallbacks` helper so a failing
    OpenAI call is retried once on Claude.
    """
    config = AGENT_CONFIG.get(agent_name)
    if not config:
        raise ValueError(f"No agent configuration found for '{agent_name}'")

    temperature = config.get("temperature", 0.3)
    primary_model_name = config.get("model")
    fallback_model_name = config.get("fallback_model")

    primary_llm: Optional[BaseChatModel] = None
    fallback_llm: Optional[BaseChatModel] = None

    if settings.openai_api_key and primary_model_name:
        try:
            primary_llm = ChatOpenAI(
                model=primary_model_name,
                temperature=temperature,
                api_key=settings.openai_api_key,
            )
        except Exception as e:
            logger.warning(
                "Failed to initialize OpenAI model '%s' for %s: %s",
                primary_model_name,
                agent_name,
                e,
            )

    if settings.anthropic_api_key and fallback_model_name:
        try:
            fallback_llm = ChatAnthropic(
                model=fallback_model_name,
                temperature=temperature,
                api_key=settings.anthropic_api_key,
            )
        except Exception as e:
            logger.warning(
                "Failed to initialize Anthropic fallback model '%s' for %s: %s",
                fallback_model_name,
                agent_name,
                e,
            )

    if primary_llm and fallback_llm:
        logger.info(
            "Configured OpenAI model '%s' with Claude fallback '%s' for %s",
            primary_model_name,
            fallback_model_name,
            agent_name,
        )
        return primary_llm.with_fallbacks([fallback_llm])

    if primary_llm:
        return primary_llm

    if fallback_llm:
        logger.info(
            "Using Claude fallback model '%s' as primary for %s",
            fallback_model_name,
            agent_name,
        )
        return fallback_llm

    raise LLMNotConfiguredError(
        f"Unable to configure chat model for '{agent_name}'. "
        "Ensure OpenAI or Anthropic credentials are provided."
    )
