"""
Built-in skill handlers

Business data in these handlers is sample data; only their registry contract
is stable.
"""

from command_center.skills.handlers.create_campaign import CreateCampaignSkill
from command_center.skills.handlers.enrich_prospects import EnrichProspectsSkill
from command_center.skills.handlers.export_results import ExportResultsSkill
from command_center.skills.handlers.help import HelpSkill
from command_center.skills.handlers.kpi_detail import KpiDetailSkill
from command_center.skills.handlers.pipeline_health import PipelineHealthSkill
from command_center.skills.handlers.prospect_search import ProspectSearchSkill
from command_center.skills.handlers.recommendations import RecommendationsSkill

__all__ = [
    "PipelineHealthSkill",
    "KpiDetailSkill",
    "ProspectSearchSkill",
    "EnrichProspectsSkill",
    "RecommendationsSkill",
    "CreateCampaignSkill",
    "ExportResultsSkill",
    "HelpSkill",
]
