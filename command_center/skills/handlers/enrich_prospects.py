"""
EnrichProspects Skill

Adds contact and company details (email, domain, LinkedIn) to prospects.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from command_center.skills.base import (
    BaseSkill,
    FollowUp,
    ResponseType,
    SkillDomain,
    SkillField,
    SkillResult,
)
from command_center.skills.handlers.prospect_search import SAMPLE_PROSPECTS

COMPANY_DOMAINS = {
    "FinPay": "finpay.io",
    "NexBank": "nexbank.com",
    "PayStream": "paystream.co",
    "CoinVault": "coinvault.io",
    "LendFlow": "lendflow.com",
    "StackPilot": "stackpilot.dev",
    "Formloop": "formloop.com",
    "Brightlane": "brightlane.co",
}

ENRICHED_COLUMNS = [
    {"key": "name", "label": "Name", "format": "text"},
    {"key": "title", "label": "Title", "format": "text"},
    {"key": "company", "label": "Company", "format": "text"},
    {"key": "email", "label": "Email", "format": "text"},
    {"key": "linkedin", "label": "LinkedIn", "format": "link"},
]


def enrich_prospect(prospect: Mapping[str, Any]) -> dict[str, Any]:
    """Prospect record with enrichment fields filled in"""
    domain = COMPANY_DOMAINS.get(prospect["company"], f"{prospect['company'].lower()}.com")
    first_name = prospect["name"].split()[0].lower()
    slug = "-".join(prospect["name"].lower().split())
    return {
        **prospect,
        "email": f"{first_name}@{domain}",
        "domain": domain,
        "linkedin": f"https://www.linkedin.com/in/{slug}",
        "enrichment_status": "enriched",
    }


def select_prospects(prospect_ids: Iterable[Any] | None) -> list[dict[str, Any]]:
    """Sample prospects with the given ids, or all of them when no ids are given"""
    if not prospect_ids:
        return list(SAMPLE_PROSPECTS)
    wanted = {str(prospect_id) for prospect_id in prospect_ids}
    return [p for p in SAMPLE_PROSPECTS if p["id"] in wanted]


class EnrichProspectsSkill(BaseSkill):
    """
    Skill that enriches prospects with contact data

    Parameters:
        prospect_ids (optional): Ids of the prospects to enrich; defaults to
            every prospect that has not been enriched yet

    Returns:
        Table of enriched prospects and progress counts
    """

    id = "enrich-prospects"
    name = "Enrich Prospects"
    description = "Enriches prospect data: emails, socials, firmographics."
    domain = SkillDomain.RESEARCH
    input_schema = (
        SkillField(name="prospect_ids", type="array", description="Prospects to enrich"),
    )
    response_type = ResponseType.TABLE
    estimated_ms = 10000
    examples = (
        "enrich these prospects",
        "validate contacts",
        "enrich all",
    )
    keywords = ("enrich", "validate", "verify", "augment")

    async def execute(self, args: dict[str, Any]) -> SkillResult:
        prospects = select_prospects(args.get("prospect_ids"))

        if not prospects:
            return SkillResult(
                success=True,
                text='No prospects to enrich. Run a search first, then try "enrich all" again.',
                data={"columns": ENRICHED_COLUMNS, "rows": [], "enriched": 0, "total": 0},
                follow_ups=[
                    FollowUp(label="Find prospects", command="find CMOs at fintech companies"),
                    FollowUp(label="Show help", command="help"),
                ],
                data_freshness="mock",
            )

        rows = [enrich_prospect(p) for p in prospects]
        noun = "prospect" if len(rows) == 1 else "prospects"

        return SkillResult(
            success=True,
            text=f"Enriched {len(rows)} of {len(prospects)} {noun}.",
            data={
                "columns": ENRICHED_COLUMNS,
                "rows": rows,
                "enriched": len(rows),
                "total": len(prospects),
            },
            follow_ups=[
                FollowUp(label="Create campaign", command="create campaign for these prospects"),
                FollowUp(label="Export CSV", command="export results as csv"),
                FollowUp(label="Pipeline summary", command="show pipeline health"),
            ],
            data_freshness="mock",
        )
