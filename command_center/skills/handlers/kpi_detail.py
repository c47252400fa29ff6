"""
KpiDetail Skill

Drills into a single KPI with its 30-day history and a short-term forecast.
"""

import re
from datetime import date, timedelta
from typing import Any

from command_center.skills.base import (
    BaseSkill,
    FollowUp,
    ResponseType,
    SkillDomain,
    SkillField,
    SkillResult,
)

KNOWN_KPIS = {
    "pipeline": "pipeline value",
    "meetings": "meetings booked",
    "reply rate": "reply rate",
    "qualified": "qualified leads",
    "leads": "qualified leads",
    "sequences": "active sequences",
}

_KPI_PATTERN = re.compile(r"\b(pipeline|meetings|reply rate|qualified|sequences|leads)\b", re.I)


def extract_kpi(query: str | None) -> str | None:
    if not query:
        return None
    match = _KPI_PATTERN.search(query)
    return KNOWN_KPIS[match.group(1).lower()] if match else None


def build_history(days: int, today: date | None = None) -> list[dict[str, Any]]:
    """Sample daily series ending today"""
    today = today or date.today()
    history = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        # Steady upward drift with a weekly wobble
        value = 1_000_000 + (days - offset) * 8_000 + (day.weekday() % 3) * 12_000
        history.append({"date": day.isoformat(), "value": value})
    return history


def linear_forecast(values: list[float], horizon: int) -> list[float]:
    """Extend the average day-over-day change by ``horizon`` steps"""
    if len(values) < 2:
        return [values[-1] if values else 0.0] * horizon
    step = (values[-1] - values[0]) / (len(values) - 1)
    return [round(values[-1] + step * (i + 1), 2) for i in range(horizon)]


class KpiDetailSkill(BaseSkill):
    """
    Skill that drills into a KPI

    Parameters:
        metric (optional): KPI name; when omitted it is read from ``query``
        time_range (optional): History window in days, as "30d"
        query (optional): Original request text

    Returns:
        History series, averages and a 7-day forecast
    """

    id = "kpi-detail"
    name = "KPI Detail"
    description = "Drills into a specific KPI with 30-day history and forecast."
    domain = SkillDomain.ANALYTICS
    input_schema = (
        SkillField(name="metric", type="string", description="KPI to drill into"),
        SkillField(
            name="time_range",
            type="string",
            description="History window in days, e.g. 30d",
            default="30d",
        ),
        SkillField(name="query", type="string", description="Original request text"),
    )
    response_type = ResponseType.CHART
    estimated_ms = 400
    examples = (
        "show KPI details",
        "forecast pipeline",
        "drill into reply rate",
        "metric breakdown",
    )
    keywords = ("kpis", "metric", "metrics", "forecast", "trend", "breakdown", "drill")

    async def execute(self, args: dict[str, Any]) -> SkillResult:
        metric = args.get("metric") or extract_kpi(args.get("query")) or "pipeline value"

        time_range = args.get("time_range", "30d")
        days_match = re.fullmatch(r"(\d{1,3})d", time_range)
        if not days_match or int(days_match.group(1)) < 2:
            return SkillResult(success=False, error=f"Invalid time range: {time_range}")
        days = int(days_match.group(1))

        history = build_history(days)
        values = [point["value"] for point in history]
        forecast = linear_forecast(values, horizon=7)

        average_7d = sum(values[-7:]) / len(values[-7:])
        average_all = sum(values) / len(values)

        return SkillResult(
            success=True,
            text=f"{metric.title()} has trended upward over the past {days} days.",
            data={
                "metric": metric,
                "current": values[-1],
                "average_7d": round(average_7d, 2),
                f"average_{days}d": round(average_all, 2),
                "history": history,
                "forecast": forecast,
            },
            follow_ups=[
                FollowUp(label="Full pipeline summary", command="show pipeline health"),
                FollowUp(label="Recommendations", command="what should I focus on?"),
            ],
            data_freshness="mock",
        )
