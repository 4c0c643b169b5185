"""Entity services running over the Supabase repositories."""

import time

import pytest

from domain.entities.inquiry import InquiryStatus
from domain.entities.project import ProjectStatus
from domain.schemas.project import ProjectFilters
from domain.services.inquiry_service import InquiryService
from domain.services.project_service import ProjectService
from domain.services.review_service import ReviewService
from domain.services.settings_service import SettingsService
from domain.services.stats_service import StatsService
from infrastructure.supabase.repositories.registry import SupabaseRepositories
from tests.integration.fake_supabase import FakeSupabase

NEW_PROJECT = {
    "title": "Pune Warehouse",
    "description": "Rooftop array on a logistics warehouse.",
    "capacity_kw": 320,
    "address": "Chakan MIDC",
    "city": "Pune",
    "state": "Maharashtra",
    "latitude": 18.75,
    "longitude": 73.85,
}


class TestRemoteProjects:
    @pytest.mark.asyncio
    async def test_create_applies_defaults_and_round_trips(
        self, remote_repos: SupabaseRepositories
    ):
        service = ProjectService(remote_repos.projects)

        created = await service.create(NEW_PROJECT)

        assert created is not None
        assert created.status == ProjectStatus.ACTIVE
        assert created.tags == []
        assert created.installation_date is None
        fetched = await service.get_by_id(created.id)
        assert fetched == created

    @pytest.mark.asyncio
    async def test_mutation_refreshes_mirror_with_last_filters(
        self, remote_repos: SupabaseRepositories
    ):
        service = ProjectService(remote_repos.projects)
        await service.fetch(ProjectFilters(city="Pune"))
        assert service.items == []

        created = await service.create(NEW_PROJECT)

        assert created is not None
        assert [p.id for p in service.items] == [created.id]

    @pytest.mark.asyncio
    async def test_update_merges_set_fields(self, remote_repos: SupabaseRepositories):
        service = ProjectService(remote_repos.projects)

        updated = await service.update("1", {"capacity_kw": 550, "tags": ["commercial"]})

        assert updated is not None
        assert updated.capacity_kw == 550
        assert updated.tags == ["commercial"]
        assert updated.title == "Mumbai Commercial Complex"
        assert updated.updated_at != "2023-06-15"

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self, remote_repos: SupabaseRepositories):
        service = ProjectService(remote_repos.projects)

        assert await service.update("missing", {"capacity_kw": 10}) is None

    @pytest.mark.asyncio
    async def test_delete_reports_existence(
        self, remote_repos: SupabaseRepositories, fake_supabase: FakeSupabase
    ):
        service = ProjectService(remote_repos.projects)

        assert await service.delete("2") is True
        assert await service.delete("2") is False
        assert [row["id"] for row in fake_supabase.tables["projects"]] == ["1", "3"]

    @pytest.mark.asyncio
    async def test_remote_failure_returns_sentinels(
        self, remote_repos: SupabaseRepositories, fake_supabase: FakeSupabase
    ):
        service = ProjectService(remote_repos.projects)
        await service.fetch()
        before = [p.id for p in service.items]
        fake_supabase.failing_tables.add("projects")

        assert [p.id for p in await service.fetch()] == before
        assert await service.get_by_id("1") is None
        assert await service.create(NEW_PROJECT) is None
        assert await service.update("1", {"capacity_kw": 1}) is None
        assert await service.delete("1") is False
        assert service.is_loading is False


class TestRemoteReviews:
    @pytest.mark.asyncio
    async def test_submission_starts_unapproved(self, remote_repos: SupabaseRepositories):
        service = ReviewService(remote_repos.reviews)

        created = await service.create(
            {
                "project_id": "3",
                "reviewer_name": "Meena",
                "rating": 4,
                "comment": "Smooth installation.",
            }
        )

        assert created is not None
        assert created.is_approved is False
        assert created.admin_response is None
        assert created.project is not None
        assert created.project.title == "Chennai Manufacturing Plant"

    @pytest.mark.asyncio
    async def test_approve_is_a_single_patch(
        self, remote_repos: SupabaseRepositories, fake_supabase: FakeSupabase
    ):
        service = ReviewService(remote_repos.reviews)
        created = await service.create(
            {"reviewer_name": "Meena", "rating": 4, "comment": "Smooth installation."}
        )
        assert created is not None

        approved = await service.approve(created.id, "Thanks Meena!")

        assert approved is not None
        assert approved.is_approved is True
        assert approved.admin_response == "Thanks Meena!"
        patches = fake_supabase.requests_to("reviews", "PATCH")
        assert len(patches) == 1
        assert created.id in {r.id for r in service.approved_items}

    @pytest.mark.asyncio
    async def test_approve_missing_review(self, remote_repos: SupabaseRepositories):
        service = ReviewService(remote_repos.reviews)

        assert await service.approve("missing") is None
        assert service.approved_items == []

    @pytest.mark.asyncio
    async def test_clearing_admin_response(self, remote_repos: SupabaseRepositories):
        service = ReviewService(remote_repos.reviews)

        updated = await service.update("1", {"admin_response": None})

        assert updated is not None
        assert updated.admin_response is None


class TestRemoteInquiries:
    @pytest.mark.asyncio
    async def test_submission_is_forced_new(self, remote_repos: SupabaseRepositories):
        service = InquiryService(remote_repos.inquiries)

        created = await service.create(
            {
                "project_id": "1",
                "name": "Ravi",
                "email": "ravi@example.com",
                "phone": "+91 90000 00009",
                "message": "Need a quote",
            }
        )

        assert created is not None
        assert created.status == InquiryStatus.NEW
        assert created.notes is None
        assert created.project is not None
        assert created.project.title == "Mumbai Commercial Complex"

    @pytest.mark.asyncio
    async def test_set_status(self, remote_repos: SupabaseRepositories):
        service = InquiryService(remote_repos.inquiries)

        updated = await service.set_status("i1", InquiryStatus.RESOLVED)

        assert updated is not None
        assert updated.status == InquiryStatus.RESOLVED


class TestRemoteSettings:
    @pytest.mark.asyncio
    async def test_get_and_update(self, remote_repos: SupabaseRepositories):
        service = SettingsService(remote_repos.settings)

        current = await service.get()
        assert current is not None
        assert current.org_name == "Solar Systems India"

        updated = await service.update({"tariff_per_kwh": 9.25})

        assert updated is not None
        assert updated.tariff_per_kwh == 9.25
        assert updated.org_name == "Solar Systems India"
        assert service.current == updated

    @pytest.mark.asyncio
    async def test_failure_keeps_previous_value(
        self, remote_repos: SupabaseRepositories, fake_supabase: FakeSupabase
    ):
        service = SettingsService(remote_repos.settings)
        previous = await service.get()
        fake_supabase.failing_tables.add("settings")

        assert await service.get() == previous
        assert await service.update({"tariff_per_kwh": 9.25}) is None


class TestRemoteStats:
    @pytest.mark.asyncio
    async def test_counts(self, remote_repos: SupabaseRepositories):
        stats = await StatsService(remote_repos.stats).compute()

        assert stats.total_projects == 3
        assert stats.total_capacity == 2250
        assert stats.pending_inquiries == 1
        assert stats.total_inquiries == 3
        assert stats.pending_reviews == 0
        assert stats.approved_reviews == 2

    @pytest.mark.asyncio
    async def test_queries_run_concurrently(
        self, remote_repos: SupabaseRepositories, fake_supabase: FakeSupabase
    ):
        for table in ("projects", "reviews", "inquiries"):
            fake_supabase.delays[table] = 0.1

        started = time.monotonic()
        await remote_repos.stats.compute()
        elapsed = time.monotonic() - started

        # Six delayed queries, sequential would take 0.6s
        assert elapsed < 0.45

    @pytest.mark.asyncio
    async def test_failure_keeps_last_value(
        self, remote_repos: SupabaseRepositories, fake_supabase: FakeSupabase
    ):
        service = StatsService(remote_repos.stats)
        first = await service.compute()
        fake_supabase.failing_tables.add("reviews")

        assert await service.compute() == first
