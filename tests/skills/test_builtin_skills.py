"""Tests for the built-in skills and the startup catalog"""

from datetime import date

import pytest

from command_center.schemas.dispatch import DispatchFailure, DispatchRequest, DispatchSuccess
from command_center.skills.catalog import build_registry, register_builtin_skills
from command_center.skills.dispatcher import SkillDispatcher
from command_center.skills.errors import DuplicateSkillError, RegistryFrozenError
from command_center.skills.handlers.create_campaign import campaign_goals, campaign_name_for
from command_center.skills.handlers.enrich_prospects import enrich_prospect
from command_center.skills.handlers.export_results import to_csv
from command_center.skills.handlers.kpi_detail import build_history, extract_kpi, linear_forecast
from command_center.skills.handlers.pipeline_health import PipelineHealthSkill, delta_direction
from command_center.skills.handlers.prospect_search import parse_icp
from command_center.skills.registry import SkillRegistry
from tests.fakes import PipelineHealthStub


class TestCatalog:
    def test_registers_builtins_in_order(self):
        registry = build_registry()

        assert [s.id for s in registry.list_all()] == [
            "pipeline-health",
            "kpi-detail",
            "prospect-search",
            "enrich-prospects",
            "recommendations",
            "create-campaign",
            "export-results",
            "help",
        ]

    def test_registry_is_frozen_after_startup(self):
        registry = build_registry()

        assert registry.frozen
        with pytest.raises(RegistryFrozenError):
            registry.register(PipelineHealthStub())

    def test_duplicate_builtin_is_fatal(self):
        registry = SkillRegistry()
        registry.register(PipelineHealthSkill())

        with pytest.raises(DuplicateSkillError, match="pipeline-health"):
            register_builtin_skills(registry)

    def test_metadata_is_complete(self):
        for skill in build_registry().list_all():
            assert skill.name and skill.description
            assert skill.estimated_ms > 0
            assert skill.examples


class TestBuiltinDispatch:
    def setup_method(self):
        self.registry = build_registry()
        self.dispatcher = SkillDispatcher(self.registry)

    @pytest.mark.asyncio
    async def test_minimal_input_never_invalid(self):
        for skill in self.registry.list_all():
            result = await self.dispatcher.dispatch(
                DispatchRequest(skill_id=skill.id, input=skill.minimal_input())
            )
            assert not (
                isinstance(result, DispatchFailure) and result.error_kind == "invalid_input"
            ), skill.id

    @pytest.mark.asyncio
    async def test_every_example_resolves_to_its_skill(self):
        for skill in self.registry.list_all():
            for example in skill.examples:
                result = await self.dispatcher.dispatch(DispatchRequest(text=example))
                assert result.skill_id == skill.id, example

    @pytest.mark.asyncio
    async def test_every_follow_up_resolves(self):
        for skill in self.registry.list_all():
            result = await self.dispatcher.dispatch(
                DispatchRequest(skill_id=skill.id, input=skill.minimal_input())
            )
            assert isinstance(result, DispatchSuccess), skill.id
            assert 1 <= len(result.follow_ups) <= 4
            for follow_up in result.follow_ups:
                assert self.dispatcher.matcher.resolve(follow_up.command) is not None, follow_up

    @pytest.mark.asyncio
    async def test_pipeline_health(self):
        result = await self.dispatcher.dispatch(DispatchRequest(text="show pipeline health"))

        assert isinstance(result, DispatchSuccess)
        assert result.response_type == "metrics"
        assert result.data_freshness == "mock"
        assert result.payload["time_range"] == "7d"
        assert len(result.payload["metrics"]) == 5

    @pytest.mark.asyncio
    async def test_pipeline_health_rejects_unknown_range(self):
        result = await self.dispatcher.dispatch(
            DispatchRequest(skill_id="pipeline-health", input={"time_range": "1y"})
        )

        assert isinstance(result, DispatchFailure)
        assert result.error_kind == "handler_error"

    @pytest.mark.asyncio
    async def test_kpi_detail_reads_metric_from_text(self):
        result = await self.dispatcher.dispatch(DispatchRequest(text="drill into reply rate"))

        assert isinstance(result, DispatchSuccess)
        assert result.skill_id == "kpi-detail"
        assert result.payload["metric"] == "reply rate"
        assert len(result.payload["history"]) == 30
        assert len(result.payload["forecast"]) == 7

    @pytest.mark.asyncio
    async def test_prospect_search_free_text_feeds_query(self):
        result = await self.dispatcher.dispatch(
            DispatchRequest(text="find CMOs at fintech companies")
        )

        assert isinstance(result, DispatchSuccess)
        assert result.response_type == "table"
        assert result.payload["icp"] == {"titles": ["CMO"], "industries": ["Fintech"]}
        assert [row["name"] for row in result.payload["rows"]] == ["Sarah Chen"]

    @pytest.mark.asyncio
    async def test_prospect_search_requires_query(self):
        result = await self.dispatcher.dispatch(
            DispatchRequest(skill_id="prospect-search", input={"limit": 5})
        )

        assert isinstance(result, DispatchFailure)
        assert result.invalid_fields == ["query"]

    @pytest.mark.asyncio
    async def test_prospect_search_explicit_icp_and_limit(self):
        result = await self.dispatcher.dispatch(
            DispatchRequest(
                skill_id="prospect-search",
                input={"query": "anyone", "icp": {"industries": ["fintech"]}, "limit": 2},
            )
        )

        assert isinstance(result, DispatchSuccess)
        assert [row["score"] for row in result.payload["rows"]] == [92, 88]

    @pytest.mark.asyncio
    async def test_recommendations_sorted_by_priority(self):
        result = await self.dispatcher.dispatch(DispatchRequest(text="what should I focus on?"))

        assert isinstance(result, DispatchSuccess)
        priorities = [r["priority"] for r in result.payload["insights"]]
        assert priorities == ["critical", "high", "medium", "low"]
        assert result.payload["insights"][0]["severity"] == "critical"

    @pytest.mark.asyncio
    async def test_help_lists_registry(self):
        result = await self.dispatcher.dispatch(DispatchRequest(text="help"))

        assert isinstance(result, DispatchSuccess)
        assert result.data_freshness == "live"
        assert [row["id"] for row in result.payload["rows"]] == [
            s.id for s in self.registry.list_all()
        ]


    @pytest.mark.asyncio
    async def test_enrich_all_prospects(self):
        result = await self.dispatcher.dispatch(DispatchRequest(text="enrich these prospects"))

        assert isinstance(result, DispatchSuccess)
        assert result.skill_id == "enrich-prospects"
        assert result.payload["enriched"] == result.payload["total"] == 8
        assert result.payload["rows"][0]["email"] == "sarah@finpay.io"

    @pytest.mark.asyncio
    async def test_enrich_selected_prospects(self):
        result = await self.dispatcher.dispatch(
            DispatchRequest(skill_id="enrich-prospects", input={"prospect_ids": ["p-007"]})
        )

        assert isinstance(result, DispatchSuccess)
        assert [row["name"] for row in result.payload["rows"]] == ["Tom Becker"]
        assert result.text == "Enriched 1 of 1 prospect."

    @pytest.mark.asyncio
    async def test_enrich_unknown_ids_suggests_search(self):
        result = await self.dispatcher.dispatch(
            DispatchRequest(skill_id="enrich-prospects", input={"prospect_ids": ["p-999"]})
        )

        assert isinstance(result, DispatchSuccess)
        assert result.payload["total"] == 0
        assert [f.command for f in result.follow_ups] == ["find CMOs at fintech companies", "help"]

    @pytest.mark.asyncio
    async def test_enrich_rejects_non_array_ids(self):
        result = await self.dispatcher.dispatch(
            DispatchRequest(skill_id="enrich-prospects", input={"prospect_ids": "p-001"})
        )

        assert isinstance(result, DispatchFailure)
        assert result.invalid_fields == ["prospect_ids"]

    @pytest.mark.asyncio
    async def test_create_campaign_from_free_text(self):
        result = await self.dispatcher.dispatch(
            DispatchRequest(text="launch email campaign for CMOs at fintech")
        )

        assert isinstance(result, DispatchSuccess)
        assert result.skill_id == "create-campaign"
        assert result.response_type == "metrics"
        campaign = result.payload["campaign"]
        assert campaign["name"].startswith("CMO + Fintech - ")
        assert campaign["targeting"] == {"job_titles": ["CMO"], "industries": ["Fintech"]}
        assert campaign["audience_source"] == "manual"
        assert campaign["status"] == "draft"

    @pytest.mark.asyncio
    async def test_create_campaign_with_prospects(self):
        result = await self.dispatcher.dispatch(
            DispatchRequest(
                skill_id="create-campaign",
                input={"campaign_name": "Q4 fintech push", "prospect_ids": ["p-001", "p-002"]},
            )
        )

        assert isinstance(result, DispatchSuccess)
        campaign = result.payload["campaign"]
        assert campaign["name"] == "Q4 fintech push"
        assert campaign["audience_source"] == "icp_match"
        assert campaign["goals"]["target_prospects"] == 2

    @pytest.mark.asyncio
    async def test_export_results_as_csv(self):
        result = await self.dispatcher.dispatch(DispatchRequest(text="export results as csv"))

        assert isinstance(result, DispatchSuccess)
        assert result.skill_id == "export-results"
        lines = result.payload["csv"].splitlines()
        assert lines[0] == "name,title,email,company,industry,domain"
        assert lines[1] == "Sarah Chen,CMO,sarah@finpay.io,FinPay,Fintech,finpay.io"
        assert result.payload["row_count"] == len(lines) - 1 == 8


def test_helpers():
    assert delta_direction(3) == "up"
    assert delta_direction(-1) == "down"
    assert delta_direction(0) == "flat"
    assert extract_kpi("show Meetings trend") == "meetings booked"
    assert extract_kpi(None) is None
    assert linear_forecast([1.0, 2.0, 3.0], horizon=2) == [4.0, 5.0]
    assert linear_forecast([], horizon=1) == [0.0]
    assert len(build_history(14)) == 14
    assert parse_icp("search for VP Engineering at SaaS startups") == {
        "titles": ["VP Engineering"],
        "industries": ["SaaS"],
    }


def test_workflow_helpers():
    today = date(2026, 10, 17)
    assert campaign_name_for({}, today) == "Outbound Campaign - 2026-10-17"
    assert campaign_name_for({"titles": ["CTO"], "industries": []}, today) == "CTO - 2026-10-17"
    assert campaign_goals(0) == {"target_prospects": 100, "target_meetings": 10, "target_reply_rate": 0.15}
    assert campaign_goals(20)["target_meetings"] == 5

    enriched = enrich_prospect({"name": "Jane Doe", "company": "Acme", "title": "CMO", "industry": "SaaS"})
    assert enriched["domain"] == "acme.com"
    assert enriched["linkedin"] == "https://www.linkedin.com/in/jane-doe"

    exported = to_csv([{"name": "Doe, Jane", "title": "CMO", "company": "Acme"}])
    assert exported.splitlines()[1] == '"Doe, Jane",CMO,,Acme,,'
