"""
CreateCampaign Skill

Drafts an outbound campaign from ICP criteria and prospect context.
"""

from collections.abc import Mapping
from datetime import date
from typing import Any

from command_center.skills.base import (
    BaseSkill,
    FollowUp,
    ResponseType,
    SkillDomain,
    SkillField,
    SkillResult,
)
from command_center.skills.handlers.prospect_search import parse_icp

DEFAULT_TARGET_PROSPECTS = 100
MIN_TARGET_MEETINGS = 5
TARGET_REPLY_RATE = 0.15


def campaign_name_for(icp: Mapping[str, Any], today: date | None = None) -> str:
    """Name built from the first title and industry, stamped with the date"""
    today = today or date.today()
    parts = [values[0] for values in (icp.get("titles"), icp.get("industries")) if values]
    prefix = " + ".join(parts) if parts else "Outbound Campaign"
    return f"{prefix} - {today.isoformat()}"


def campaign_goals(prospect_count: int) -> dict[str, Any]:
    target = prospect_count or DEFAULT_TARGET_PROSPECTS
    return {
        "target_prospects": target,
        "target_meetings": max(round(target * 0.1), MIN_TARGET_MEETINGS),
        "target_reply_rate": TARGET_REPLY_RATE,
    }


class CreateCampaignSkill(BaseSkill):
    """
    Skill that drafts an outreach campaign

    Parameters:
        campaign_name (optional): Explicit name; generated when omitted
        icp (optional): {"titles": [...], "industries": [...]}
        prospect_ids (optional): Prospects to enrol
        query (optional): Request text, parsed for ICP when ``icp`` is omitted

    Returns:
        The draft campaign and its headline metrics
    """

    id = "create-campaign"
    name = "Create Campaign"
    description = "Creates an outreach campaign from ICP criteria and prospect context."
    domain = SkillDomain.WORKFLOW
    input_schema = (
        SkillField(name="campaign_name", type="string", description="Campaign name"),
        SkillField(name="icp", type="object", description="Targeting criteria"),
        SkillField(name="prospect_ids", type="array", description="Prospects to enrol"),
        SkillField(name="query", type="string", description="Original request text"),
    )
    response_type = ResponseType.METRICS
    estimated_ms = 2000
    examples = (
        "create campaign for these prospects",
        "launch email campaign",
        "build outreach sequence",
    )
    keywords = ("campaign", "sequence", "outreach", "launch")

    async def execute(self, args: dict[str, Any]) -> SkillResult:
        icp = args.get("icp") or parse_icp(args.get("query") or "")
        prospect_ids = list(args.get("prospect_ids") or [])
        name = args.get("campaign_name") or campaign_name_for(icp)

        targeting: dict[str, Any] = {}
        if icp.get("titles"):
            targeting["job_titles"] = list(icp["titles"])
        if icp.get("industries"):
            targeting["industries"] = list(icp["industries"])

        campaign = {
            "name": name,
            "type": "outbound_email",
            "status": "draft",
            "targeting": targeting,
            "audience_source": "icp_match" if prospect_ids else "manual",
            "goals": campaign_goals(len(prospect_ids)),
        }

        return SkillResult(
            success=True,
            text=f'Campaign "{name}" created as a draft. Add sequences, then activate when ready.',
            data={
                "campaign": campaign,
                "metrics": [
                    {"label": "Campaign", "value": name, "format": "text"},
                    {"label": "Type", "value": "Outbound Email", "format": "text"},
                    {"label": "Prospects", "value": len(prospect_ids) or "TBD", "format": "number"},
                    {"label": "Status", "value": "Draft", "format": "text"},
                ],
            },
            follow_ups=[
                FollowUp(label="Enrich prospects", command="enrich these prospects"),
                FollowUp(label="Export CSV", command="export results as csv"),
                FollowUp(label="Pipeline summary", command="show pipeline health"),
            ],
            data_freshness="mock",
        )
