"""
ExportResults Skill

Exports prospect data as CSV for use in other tools.
"""

import csv
import io
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
from command_center.skills.handlers.enrich_prospects import enrich_prospect, select_prospects

CSV_FIELDS = ("name", "title", "email", "company", "industry", "domain")


def to_csv(rows: Iterable[Mapping[str, Any]]) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=CSV_FIELDS, extrasaction="ignore", lineterminator="\n")
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue()


class ExportResultsSkill(BaseSkill):
    """
    Skill that exports prospects as CSV

    Parameters:
        prospect_ids (optional): Prospects to export; defaults to all

    Returns:
        CSV text with one row per prospect
    """

    id = "export-results"
    name = "Export Results"
    description = "Exports prospect data as CSV for use in other tools."
    domain = SkillDomain.WORKFLOW
    input_schema = (
        SkillField(name="prospect_ids", type="array", description="Prospects to export"),
    )
    response_type = ResponseType.TABLE
    estimated_ms = 1000
    examples = (
        "export results as csv",
        "download prospects",
        "save to spreadsheet",
    )
    keywords = ("export", "download", "csv", "spreadsheet")

    async def execute(self, args: dict[str, Any]) -> SkillResult:
        rows = [enrich_prospect(p) for p in select_prospects(args.get("prospect_ids"))]

        if not rows:
            return SkillResult(
                success=True,
                text="No prospects to export. Run a search first, then try exporting.",
                data={"filename": "prospects.csv", "csv": to_csv([]), "row_count": 0},
                follow_ups=[
                    FollowUp(label="Find prospects", command="find CMOs at fintech companies"),
                    FollowUp(label="Show help", command="help"),
                ],
                data_freshness="mock",
            )

        return SkillResult(
            success=True,
            text=f"Exported {len(rows)} prospects as CSV.",
            data={
                "filename": "prospects.csv",
                "csv": to_csv(rows),
                "row_count": len(rows),
                "columns": [{"key": key, "label": key.title(), "format": "text"} for key in CSV_FIELDS],
                "rows": [{key: row[key] for key in CSV_FIELDS} for row in rows],
            },
            follow_ups=[
                FollowUp(label="Create campaign", command="create campaign for these prospects"),
                FollowUp(label="Enrich prospects", command="enrich these prospects"),
            ],
            data_freshness="mock",
        )
