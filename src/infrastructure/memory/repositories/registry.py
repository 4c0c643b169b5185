"""In-memory repository registry."""

from infrastructure.memory.dataset import InMemoryDataset
from infrastructure.memory.repositories.memory_inquiry_repo import InMemoryInquiryRepository
from infrastructure.memory.repositories.memory_misc_repos import (
    InMemoryProfileRepository,
    InMemorySettingsRepository,
    InMemoryStatsRepository,
)
from infrastructure.memory.repositories.memory_project_repo import InMemoryProjectRepository
from infrastructure.memory.repositories.memory_review_repo import InMemoryReviewRepository


class InMemoryRepositories:
    """IRepositories backed by a single shared :class:`InMemoryDataset`."""

    def __init__(self, dataset: InMemoryDataset | None = None) -> None:
        self.dataset = dataset if dataset is not None else InMemoryDataset.seeded()
        self.projects = InMemoryProjectRepository(self.dataset)
        self.reviews = InMemoryReviewRepository(self.dataset)
        self.inquiries = InMemoryInquiryRepository(self.dataset)
        self.settings = InMemorySettingsRepository(self.dataset)
        self.stats = InMemoryStatsRepository(self.dataset)
        self.profiles = InMemoryProfileRepository(self.dataset)
