"""
Recommendations Skill

Returns prioritized, actionable recommendations based on current GTM health.
"""

from typing import Any

from command_center.skills.base import BaseSkill, FollowUp, ResponseType, SkillDomain, SkillResult

PRIORITY_ORDER = {"critical": 0, "high": 1, "medium": 2, "low": 3}

PRIORITY_TO_SEVERITY = {
    "critical": "critical",
    "high": "warning",
    "medium": "info",
    "low": "success",
}

SAMPLE_RECOMMENDATIONS: list[dict[str, Any]] = [
    {
        "title": "Refresh subject lines on fintech sequences",
        "description": "Reply rate fell 2.1 points this week; two sequences account for most of the drop.",
        "priority": "high",
        "confidence": 0.82,
    },
    {
        "title": "Follow up with 12 stalled qualified leads",
        "description": "These leads engaged in the last 14 days but have no meeting booked.",
        "priority": "medium",
        "confidence": 0.74,
    },
    {
        "title": "Unblock 3 autonomous tasks",
        "description": "Tasks are waiting on CRM credentials and cannot progress.",
        "priority": "critical",
        "confidence": 0.95,
    },
    {
        "title": "Expand the SaaS VP Engineering segment",
        "description": "Top-scored prospects in this segment convert above average.",
        "priority": "low",
        "confidence": 0.61,
    },
]


class RecommendationsSkill(BaseSkill):
    """Skill that lists recommendations, most urgent first"""

    id = "recommendations"
    name = "Recommendations"
    description = "Shows prioritized, actionable recommendations based on current GTM health."
    domain = SkillDomain.INTELLIGENCE
    response_type = ResponseType.INSIGHT
    estimated_ms = 300
    examples = (
        "what should I focus on?",
        "show recommendations",
        "any suggestions?",
        "top priorities",
    )
    keywords = ("recommend", "suggestion", "advice", "priorities", "insights", "opportunities")

    async def execute(self, args: dict[str, Any]) -> SkillResult:
        ranked = sorted(
            SAMPLE_RECOMMENDATIONS,
            key=lambda r: (PRIORITY_ORDER[r["priority"]], -r["confidence"]),
        )
        insights = [{**r, "severity": PRIORITY_TO_SEVERITY[r["priority"]]} for r in ranked]

        return SkillResult(
            success=True,
            text=f"{len(insights)} recommendations, starting with the most urgent.",
            data={"insights": insights},
            follow_ups=[
                FollowUp(label="Pipeline health", command="show pipeline health"),
                FollowUp(label="Drill into reply rate", command="drill into reply rate"),
                FollowUp(label="Find prospects", command="find CMOs at fintech companies"),
            ],
            data_freshness="mock",
        )
