"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.config import Settings
from infrastructure.memory.dataset import InMemoryDataset
from infrastructure.storage.local_store import LocalStore

TEST_SUPABASE_URL = "https://test-project.supabase.co"
TEST_ANON_KEY = "test-anon-key"


@pytest.fixture
def local_store(tmp_path: Path) -> LocalStore:
    """A local store backed by a fresh file."""
    return LocalStore(tmp_path / "local_storage.json")


@pytest.fixture
def memory_settings(tmp_path: Path) -> Settings:
    """Settings with no Supabase credentials (in-memory mode)."""
    return Settings(
        _env_file=None,
        supabase_url="",
        supabase_anon_key="",
        local_storage_path=str(tmp_path / "local_storage.json"),
    )


@pytest.fixture
def remote_settings(tmp_path: Path) -> Settings:
    """Settings pointing at the fake Supabase project."""
    return Settings(
        _env_file=None,
        supabase_url=TEST_SUPABASE_URL,
        supabase_anon_key=TEST_ANON_KEY,
        local_storage_path=str(tmp_path / "local_storage.json"),
        profile_fetch_timeout_seconds=0.5,
        sign_in_timeout_seconds=0.5,
    )


@pytest.fixture
def dataset() -> InMemoryDataset:
    """A freshly seeded in-memory dataset."""
    return InMemoryDataset.seeded()
