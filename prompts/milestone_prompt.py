"""Goal milestone planner prompt."""

from langchain_core.prompts import PromptTemplate

MILESTONE_PROMPT = PromptTemplate.from_template(
    """The user wants to achieve this goal: "{title}" which is a {goal_type} goal.
Generate a JSON ARRAY of 4 to 6 concrete, actionable, short milestones (sub-tasks) to achieve this.
Return ONLY the raw JSON array. Do not wrap in markdown code blocks.
Example output: ["Step 1", "Step 2", "Step 3", "Step 4"]"""
)
