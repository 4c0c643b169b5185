"""Fixtures for tests that run against the fake Supabase project."""

from collections.abc import AsyncGenerator

import httpx
import pytest

from domain.entities.inquiry import Inquiry, InquiryStatus
from infrastructure.memory.dataset import InMemoryDataset
from infrastructure.supabase.client import SupabaseClient
from infrastructure.supabase.repositories.registry import SupabaseRepositories
from tests.conftest import TEST_ANON_KEY, TEST_SUPABASE_URL
from tests.integration.fake_supabase import FakeSupabase


def _sample_inquiries() -> list[Inquiry]:
    return [
        Inquiry(
            id="i1",
            project_id="1",
            name="Asha Rao",
            email="asha@example.com",
            phone="+91 90000 00001",
            message="Interested in a 10kW rooftop system",
            status=InquiryStatus.NEW,
            created_at="2024-01-05",
            updated_at="2024-01-05",
        ),
        Inquiry(
            id="i2",
            project_id=None,
            name="Vikram Singh",
            email="vikram@factory.in",
            phone="+91 90000 00002",
            message="Quote for 250 kW ground mount",
            status=InquiryStatus.IN_PROGRESS,
            notes="Site visit booked",
            created_at="2024-02-10",
            updated_at="2024-02-11",
        ),
        Inquiry(
            id="i3",
            project_id="3",
            name="Lakshmi Iyer",
            email="lakshmi@example.com",
            phone="+91 90000 00003",
            message="Maintenance contract question",
            status=InquiryStatus.RESOLVED,
            created_at="2024-03-01",
            updated_at="2024-03-02",
        ),
    ]


@pytest.fixture
def shared_dataset() -> InMemoryDataset:
    """Seeded catalogue plus a few inquiries."""
    dataset = InMemoryDataset.seeded()
    for inquiry in _sample_inquiries():
        dataset.inquiries[inquiry.id] = inquiry
    return dataset


@pytest.fixture
def fake_supabase(shared_dataset: InMemoryDataset) -> FakeSupabase:
    fake = FakeSupabase()
    fake.seed_from(shared_dataset)
    return fake


@pytest.fixture
async def http_client(fake_supabase: FakeSupabase) -> AsyncGenerator[httpx.AsyncClient, None]:
    async with httpx.AsyncClient(transport=fake_supabase.transport()) as client:
        yield client


@pytest.fixture
def rest_client(http_client: httpx.AsyncClient) -> SupabaseClient:
    return SupabaseClient(http_client, f"{TEST_SUPABASE_URL}/rest/v1", TEST_ANON_KEY)


@pytest.fixture
def remote_repos(rest_client: SupabaseClient) -> SupabaseRepositories:
    return SupabaseRepositories(rest_client)
