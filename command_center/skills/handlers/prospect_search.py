"""
ProspectSearch Skill

Finds prospects matching ICP criteria (titles and industries).
"""

import re
from collections.abc import Mapping
from typing import Any

from command_center.skills.base import (
    BaseSkill,
    FollowUp,
    ResponseType,
    SkillDomain,
    SkillField,
    SkillResult,
)

TABLE_COLUMNS = [
    {"key": "name", "label": "Name", "format": "text"},
    {"key": "title", "label": "Title", "format": "text"},
    {"key": "company", "label": "Company", "format": "text"},
    {"key": "industry", "label": "Industry", "format": "badge"},
    {"key": "score", "label": "Score", "format": "number"},
    {"key": "grade", "label": "Grade", "format": "badge"},
]

SAMPLE_PROSPECTS: list[dict[str, Any]] = [
    {"id": "p-001", "name": "Sarah Chen", "title": "CMO", "company": "FinPay", "industry": "Fintech", "score": 92, "grade": "A+"},
    {"id": "p-002", "name": "Marcus Johnson", "title": "VP Marketing", "company": "NexBank", "industry": "Fintech", "score": 88, "grade": "A"},
    {"id": "p-003", "name": "Emily Rodriguez", "title": "Head of Growth", "company": "PayStream", "industry": "Fintech", "score": 85, "grade": "A"},
    {"id": "p-004", "name": "David Kim", "title": "CMO", "company": "CoinVault", "industry": "Crypto", "score": 81, "grade": "B+"},
    {"id": "p-005", "name": "Lisa Thompson", "title": "VP Marketing", "company": "LendFlow", "industry": "Fintech", "score": 79, "grade": "B+"},
    {"id": "p-006", "name": "Priya Natarajan", "title": "VP Engineering", "company": "StackPilot", "industry": "SaaS", "score": 84, "grade": "A"},
    {"id": "p-007", "name": "Tom Becker", "title": "CTO", "company": "Formloop", "industry": "SaaS", "score": 77, "grade": "B"},
    {"id": "p-008", "name": "Ana Souza", "title": "Head of Marketing", "company": "Brightlane", "industry": "SaaS", "score": 74, "grade": "B"},
]

TITLE_PATTERNS = {
    "CMO": re.compile(r"\bcmos?\b", re.I),
    "CTO": re.compile(r"\bctos?\b", re.I),
    "VP Marketing": re.compile(r"\bvp (of )?marketing\b", re.I),
    "VP Engineering": re.compile(r"\bvp (of )?engineering\b", re.I),
    "Head of Growth": re.compile(r"\bhead of growth\b", re.I),
    "Head of Marketing": re.compile(r"\bhead of marketing\b", re.I),
}

INDUSTRY_PATTERNS = {
    "Fintech": re.compile(r"\bfintech\b", re.I),
    "SaaS": re.compile(r"\bsaas\b", re.I),
    "Crypto": re.compile(r"\bcrypto\b", re.I),
}


def parse_icp(query: str) -> dict[str, list[str]]:
    """Pull titles and industries mentioned in free text"""
    return {
        "titles": [title for title, pattern in TITLE_PATTERNS.items() if pattern.search(query)],
        "industries": [name for name, pattern in INDUSTRY_PATTERNS.items() if pattern.search(query)],
    }


def matches_icp(prospect: Mapping[str, Any], titles: list[str], industries: list[str]) -> bool:
    title_ok = not titles or any(t.lower() == prospect["title"].lower() for t in titles)
    industry_ok = not industries or any(i.lower() == prospect["industry"].lower() for i in industries)
    return title_ok and industry_ok


class ProspectSearchSkill(BaseSkill):
    """
    Skill that searches stored prospects by ICP

    Parameters:
        query: Search request text
        icp (optional): {"titles": [...], "industries": [...]}; overrides
            what is parsed from the query
        limit (optional): Maximum rows to return

    Returns:
        Table of matching prospects, best score first
    """

    id = "prospect-search"
    name = "Prospect Search"
    description = "Finds prospects matching ICP criteria: titles, industries, signals."
    domain = SkillDomain.RESEARCH
    input_schema = (
        SkillField(name="query", type="string", description="Search request", required=True),
        SkillField(name="icp", type="object", description="Explicit ICP filters"),
        SkillField(name="limit", type="integer", description="Maximum rows", default=25),
    )
    response_type = ResponseType.TABLE
    estimated_ms = 3000
    examples = (
        "find CMOs at fintech companies",
        "search for VP Engineering at SaaS startups",
        "look for Head of Marketing in NYC",
    )
    keywords = ("find", "search", "prospects", "look for", "discover", "leads list")

    async def execute(self, args: dict[str, Any]) -> SkillResult:
        query: str = args["query"]
        limit: int = args.get("limit", 25)
        if limit < 1:
            return SkillResult(success=False, error="limit must be at least 1")

        icp = args.get("icp") or parse_icp(query)
        titles = list(icp.get("titles") or [])
        industries = list(icp.get("industries") or [])

        rows = [p for p in SAMPLE_PROSPECTS if matches_icp(p, titles, industries)]
        rows.sort(key=lambda p: p["score"], reverse=True)
        rows = rows[:limit]

        who = ", ".join(titles) if titles else "prospects"
        where = f" in {', '.join(industries)}" if industries else ""

        return SkillResult(
            success=True,
            text=f"Found {len(rows)} {who}{where}.",
            data={
                "icp": {"titles": titles, "industries": industries},
                "columns": TABLE_COLUMNS,
                "rows": rows,
                "total": len(rows),
            },
            follow_ups=[
                FollowUp(label="Enrich prospects", command="enrich these prospects"),
                FollowUp(label="Search SaaS leaders", command="search for VP Engineering at SaaS startups"),
                FollowUp(label="Recommendations", command="what should I focus on?"),
                FollowUp(label="Pipeline health", command="show pipeline health"),
            ],
            data_freshness="mock",
        )
