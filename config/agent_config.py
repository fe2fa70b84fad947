"""Agent-specific configuration."""

from typing import Dict, Any

# Model configuration per coaching task
AGENT_CONFIG: Dict[str, Any] = {
    "weekly_report": {
        "model": "gpt-4o-mini",
        "fallback_model": "claude-3-haiku-20240307",
        "temperature": 0.4,
    },
    # Monthly reviews read the whole dataset, use the larger model
    "monthly_report": {
        "model": "gpt-4o",
        "fallback_model": "claude-3-5-sonnet-20240620",
        "temperature": 0.4,
    },
    "coach_chat": {
        "model": "gpt-4o-mini",
        "fallback_model": "claude-3-haiku-20240307",
        "temperature": 0.5,
    },
    "milestone_planner": {
        "model": "gpt-4o-mini",
        "fallback_model": "claude-3-haiku-20240307",
        "temperature": 0.2,
    },
}
