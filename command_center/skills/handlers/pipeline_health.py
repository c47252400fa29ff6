"""
PipelineHealth Skill

Returns GTM pipeline health: headline KPIs, a 7-day trend and a summary insight.
"""

from typing import Any

from command_center.skills.base import (
    BaseSkill,
    FollowUp,
    ResponseType,
    SkillDomain,
    SkillField,
    SkillResult,
)

TIME_RANGES = ("7d", "30d", "90d")

# Sample figures until the warehouse integration lands
SAMPLE_METRICS: list[dict[str, Any]] = [
    {"label": "Pipeline Value", "value": 1_247_000, "format": "currency", "delta": 12},
    {"label": "Meetings Booked", "value": 24, "format": "number", "delta": 8},
    {"label": "Reply Rate", "value": 18.4, "format": "percent", "delta": -2.1},
    {"label": "Qualified Leads", "value": 186, "format": "number", "delta": 5},
    {"label": "Active Sequences", "value": 7, "format": "number", "delta": 0},
]

SAMPLE_TREND: list[dict[str, Any]] = [
    {"day": "Mon", "pipeline": 980, "meetings": 3},
    {"day": "Tue", "pipeline": 1020, "meetings": 4},
    {"day": "Wed", "pipeline": 1080, "meetings": 5},
    {"day": "Thu", "pipeline": 1150, "meetings": 3},
    {"day": "Fri", "pipeline": 1190, "meetings": 4},
    {"day": "Sat", "pipeline": 1210, "meetings": 2},
    {"day": "Sun", "pipeline": 1247, "meetings": 3},
]


def delta_direction(delta: float) -> str:
    if delta > 0:
        return "up"
    if delta < 0:
        return "down"
    return "flat"


class PipelineHealthSkill(BaseSkill):
    """
    Skill that summarizes pipeline health

    Parameters:
        time_range (optional): Reporting window, one of 7d, 30d, 90d

    Returns:
        Metric cards, trend series and an insight
    """

    id = "pipeline-health"
    name = "Pipeline Health"
    description = "Shows GTM pipeline health: KPIs, 7-day trend, and insights."
    domain = SkillDomain.ANALYTICS
    input_schema = (
        SkillField(
            name="time_range",
            type="string",
            description="Reporting window (7d, 30d or 90d)",
            default="7d",
        ),
    )
    response_type = ResponseType.METRICS
    estimated_ms = 500
    examples = (
        "show pipeline health",
        "dashboard summary",
        "how are we doing?",
        "pipeline overview",
    )
    keywords = ("funnel", "dashboard", "overview", "summary", "status")

    async def execute(self, args: dict[str, Any]) -> SkillResult:
        time_range = args.get("time_range", "7d")
        if time_range not in TIME_RANGES:
            return SkillResult(
                success=False,
                error=f"Unsupported time range '{time_range}', expected one of {list(TIME_RANGES)}",
            )

        metrics = [{**m, "delta_direction": delta_direction(m["delta"])} for m in SAMPLE_METRICS]

        return SkillResult(
            success=True,
            text=(
                "Pipeline value is up 12% week-over-week. Reply rate dipped slightly; "
                "consider A/B testing subject lines on active sequences."
            ),
            data={
                "time_range": time_range,
                "metrics": metrics,
                "trend": {"x_key": "day", "y_keys": ["pipeline", "meetings"], "data": SAMPLE_TREND},
                "insight": {
                    "title": "Pipeline growing steadily",
                    "severity": "success",
                    "confidence": 0.85,
                },
            },
            follow_ups=[
                FollowUp(label="Drill into reply rate", command="drill into reply rate"),
                FollowUp(label="Forecast pipeline", command="forecast pipeline"),
                FollowUp(label="Recommendations", command="what should I focus on?"),
            ],
            data_freshness="mock",
        )
