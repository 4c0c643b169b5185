"""Unit tests for the entity services (catalogue CRUD facades)."""

from unittest.mock import AsyncMock

import pytest

from core.exceptions import ErrorCode, RemoteServiceError
from domain.entities.inquiry import InquiryStatus
from domain.entities.project import ProjectStatus
from domain.entities.stats import DashboardStats
from domain.schemas.project import ProjectCreate, ProjectFilters
from domain.services.inquiry_service import InquiryService
from domain.services.project_service import ProjectService
from domain.services.review_service import ReviewService
from domain.services.settings_service import SettingsService
from domain.services.stats_service import StatsService
from infrastructure.memory.dataset import InMemoryDataset
from infrastructure.memory.repositories.registry import InMemoryRepositories

NEW_PROJECT = {
    "title": "Jaipur School",
    "description": "Rooftop system for a school campus",
    "capacity_kw": 80,
    "address": "MI Road",
    "city": "Jaipur",
    "state": "Rajasthan",
    "latitude": 26.91,
    "longitude": 75.79,
}


@pytest.fixture
def repos(dataset: InMemoryDataset) -> InMemoryRepositories:
    return InMemoryRepositories(dataset)


def _remote_failure() -> RemoteServiceError:
    return RemoteServiceError("connection reset", error_code=ErrorCode.TRANSPORT_ERROR)


# --- projects ---


class TestProjectService:
    @pytest.mark.asyncio
    async def test_fetch_fills_mirror(self, repos: InMemoryRepositories):
        service = ProjectService(repos.projects)

        items = await service.fetch({"city": "Chennai"})

        assert [p.id for p in items] == ["3"]
        assert service.items is items
        assert service.is_loading is False

    @pytest.mark.asyncio
    async def test_list_is_fetch(self, repos: InMemoryRepositories):
        service = ProjectService(repos.projects)

        items = await service.list(ProjectFilters(query="tech"))

        assert [p.id for p in items] == ["2"]

    @pytest.mark.asyncio
    async def test_create_applies_defaults_and_round_trips(self, repos: InMemoryRepositories):
        service = ProjectService(repos.projects)

        created = await service.create(NEW_PROJECT)

        assert created is not None
        assert created.status == ProjectStatus.ACTIVE
        assert created.images == []
        assert created.tags == []
        assert created.installation_date is None
        fetched = await service.get_by_id(created.id)
        assert fetched == created

    @pytest.mark.asyncio
    async def test_create_accepts_model(self, repos: InMemoryRepositories):
        service = ProjectService(repos.projects)

        created = await service.create(ProjectCreate(**NEW_PROJECT, tags=["school"]))

        assert created.tags == ["school"]

    @pytest.mark.asyncio
    async def test_create_refreshes_mirror_with_last_filters(self, repos: InMemoryRepositories):
        service = ProjectService(repos.projects)
        await service.fetch({"city": "Jaipur"})
        assert service.items == []

        created = await service.create(NEW_PROJECT)

        assert [p.id for p in service.items] == [created.id]

    @pytest.mark.asyncio
    async def test_create_invalid_input_returns_none(self, repos: InMemoryRepositories):
        service = ProjectService(repos.projects)

        assert await service.create({**NEW_PROJECT, "capacity_kw": -1}) is None
        assert await service.create({"title": "missing fields"}) is None
        assert len(await repos.projects.list()) == 3

    @pytest.mark.asyncio
    async def test_update_merges_partial(self, repos: InMemoryRepositories):
        service = ProjectService(repos.projects)

        updated = await service.update("2", {"status": "completed"})

        assert updated.status == ProjectStatus.COMPLETED
        assert updated.title == "Bangalore Tech Park"
        assert updated.updated_at != "2023-09-20"

    @pytest.mark.asyncio
    async def test_update_can_clear_installation_date(self, repos: InMemoryRepositories):
        service = ProjectService(repos.projects)

        updated = await service.update("1", {"installation_date": None, "title": None})

        assert updated.installation_date is None
        assert updated.title == "Mumbai Commercial Complex"

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self, repos: InMemoryRepositories):
        service = ProjectService(repos.projects)

        assert await service.update("does-not-exist", {"title": "x"}) is None

    @pytest.mark.asyncio
    async def test_delete(self, repos: InMemoryRepositories):
        service = ProjectService(repos.projects)
        await service.fetch()

        assert await service.delete("1") is True
        assert [p.id for p in service.items] == ["3", "2"]
        assert await service.delete("1") is False

    @pytest.mark.asyncio
    async def test_failures_become_sentinels(self):
        repo = AsyncMock()
        repo.list.side_effect = _remote_failure()
        repo.get.side_effect = _remote_failure()
        repo.create.side_effect = _remote_failure()
        repo.update.side_effect = _remote_failure()
        repo.delete.side_effect = _remote_failure()
        service = ProjectService(repo)

        assert await service.fetch() == []
        assert await service.get_by_id("1") is None
        assert await service.create(NEW_PROJECT) is None
        assert await service.update("1", {"title": "x"}) is None
        assert await service.delete("1") is False
        assert service.is_loading is False

    @pytest.mark.asyncio
    async def test_failed_fetch_keeps_previous_mirror(self, repos: InMemoryRepositories):
        service = ProjectService(repos.projects)
        await service.fetch()
        previous = service.items

        service._repository = AsyncMock()
        service._repository.list.side_effect = RuntimeError("unexpected")

        assert await service.fetch() is previous


# --- reviews ---


class TestReviewService:
    @pytest.mark.asyncio
    async def test_new_reviews_start_unapproved(self, repos: InMemoryRepositories):
        service = ReviewService(repos.reviews)

        review = await service.create(
            {
                "project_id": "1",
                "reviewer_name": "Meera",
                "rating": 4,
                "comment": "Smooth install",
                "is_approved": True,
                "admin_response": "sneaky",
            }
        )

        assert review.is_approved is False
        assert review.admin_response is None
        assert review.project.title == "Mumbai Commercial Complex"

    @pytest.mark.asyncio
    async def test_rating_out_of_range_is_rejected(self, repos: InMemoryRepositories):
        service = ReviewService(repos.reviews)

        result = await service.create(
            {"reviewer_name": "X", "rating": 6, "comment": "Too good"}
        )

        assert result is None

    @pytest.mark.asyncio
    async def test_approve_is_single_mutation(self):
        repo = AsyncMock()
        repo.list.return_value = []
        service = ReviewService(repo)

        await service.approve("r1", "Thanks!")

        repo.update.assert_awaited_once()
        review_id, changes = repo.update.await_args.args
        assert review_id == "r1"
        assert changes["is_approved"] is True
        assert changes["admin_response"] == "Thanks!"

    @pytest.mark.asyncio
    async def test_approve_refreshes_public_mirror(self, repos: InMemoryRepositories):
        service = ReviewService(repos.reviews)
        pending = await service.create(
            {"project_id": "2", "reviewer_name": "Kiran", "rating": 5, "comment": "Great"}
        )
        await service.fetch_approved()
        assert pending.id not in [r.id for r in service.approved_items]

        approved = await service.approve(pending.id)

        assert approved.is_approved is True
        assert approved.admin_response is None
        assert pending.id in [r.id for r in service.approved_items]

    @pytest.mark.asyncio
    async def test_approve_missing_returns_none(self, repos: InMemoryRepositories):
        service = ReviewService(repos.reviews)

        assert await service.approve("missing", "hi") is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response", ["", "   "])
    async def test_blank_approval_response_is_stored_as_none(
        self, repos: InMemoryRepositories, response: str
    ):
        service = ReviewService(repos.reviews)
        pending = await service.create(
            {"project_id": "2", "reviewer_name": "Kiran", "rating": 5, "comment": "Great"}
        )

        approved = await service.approve(pending.id, response)

        assert approved.admin_response is None

    @pytest.mark.asyncio
    async def test_unapproving_by_update_refreshes_public_mirror(
        self, repos: InMemoryRepositories
    ):
        service = ReviewService(repos.reviews)
        await service.fetch_approved()
        assert "1" in [r.id for r in service.approved_items]

        updated = await service.update("1", {"is_approved": False})

        assert updated.is_approved is False
        assert "1" not in [r.id for r in service.approved_items]
        assert "2" in [r.id for r in service.approved_items]

    @pytest.mark.asyncio
    async def test_delete_refreshes_public_mirror(self, repos: InMemoryRepositories):
        service = ReviewService(repos.reviews)
        await service.fetch_approved()
        assert "2" in [r.id for r in service.approved_items]

        assert await service.delete("2") is True

        assert [r.id for r in service.approved_items] == ["1"]

    @pytest.mark.asyncio
    async def test_failed_update_leaves_public_mirror(self):
        repo = AsyncMock()
        repo.update.return_value = None
        service = ReviewService(repo)

        assert await service.update("missing", {"is_approved": True}) is None

        repo.list.assert_not_awaited()


# --- inquiries ---


class TestInquiryService:
    @pytest.mark.asyncio
    async def test_new_inquiries_start_new(self, repos: InMemoryRepositories):
        service = InquiryService(repos.inquiries)

        inquiry = await service.create(
            {
                "project_id": "3",
                "name": "Sunil",
                "email": "sunil@example.com",
                "phone": "+91 98200 00000",
                "message": "Need a quote for 20kW",
            }
        )

        assert inquiry.status == InquiryStatus.NEW
        assert inquiry.notes is None
        assert inquiry.project.title == "Chennai Manufacturing Plant"

    @pytest.mark.asyncio
    async def test_invalid_email_is_rejected(self, repos: InMemoryRepositories):
        service = InquiryService(repos.inquiries)

        result = await service.create(
            {"name": "A", "email": "not-an-email", "phone": "1", "message": "Hi"}
        )

        assert result is None

    @pytest.mark.asyncio
    async def test_status_workflow(self, repos: InMemoryRepositories):
        service = InquiryService(repos.inquiries)
        inquiry = await service.create(
            {"name": "A", "email": "a@example.com", "phone": "1", "message": "Hi"}
        )

        updated = await service.set_status(inquiry.id, InquiryStatus.IN_PROGRESS)
        assert updated.status == InquiryStatus.IN_PROGRESS

        listed = await service.fetch({"status": "in_progress"})
        assert [i.id for i in listed] == [inquiry.id]


# --- settings & stats ---


class TestSettingsService:
    @pytest.mark.asyncio
    async def test_get_and_update(self, repos: InMemoryRepositories):
        service = SettingsService(repos.settings)

        current = await service.get()
        assert current.org_name == "Solar Systems India"

        updated = await service.update({"tariff_per_kwh": 9.25, "org_name": None})

        assert updated.tariff_per_kwh == 9.25
        assert updated.org_name == "Solar Systems India"
        assert service.current is updated

    @pytest.mark.asyncio
    async def test_invalid_update_returns_none(self, repos: InMemoryRepositories):
        service = SettingsService(repos.settings)

        assert await service.update({"subsidy_percentage": 150}) is None

    @pytest.mark.asyncio
    async def test_failed_get_keeps_last_value(self, repos: InMemoryRepositories):
        service = SettingsService(repos.settings)
        first = await service.get()
        service._repository = AsyncMock()
        service._repository.get.side_effect = _remote_failure()

        assert await service.get() is first


class TestStatsService:
    @pytest.mark.asyncio
    async def test_compute(self, repos: InMemoryRepositories):
        service = StatsService(repos.stats)

        stats = await service.compute()

        assert stats.total_projects == 3
        assert stats.approved_reviews == 2

    @pytest.mark.asyncio
    async def test_failure_returns_previous_stats(self):
        repo = AsyncMock()
        good = DashboardStats(total_projects=4, total_capacity=10)
        repo.compute.side_effect = [good, _remote_failure()]
        service = StatsService(repo)

        assert await service.compute() == good
        assert await service.compute() == good
