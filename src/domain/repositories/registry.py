"""Repository registry protocol."""

from typing import Protocol

from domain.repositories.inquiry_repository import IInquiryRepository
from domain.repositories.profile_repository import IProfileRepository
from domain.repositories.project_repository import IProjectRepository
from domain.repositories.review_repository import IReviewRepository
from domain.repositories.settings_repository import ISettingsRepository
from domain.repositories.stats_repository import IStatsRepository


class IRepositories(Protocol):
    """All repositories for one backend, selected once at startup."""

    projects: IProjectRepository
    reviews: IReviewRepository
    inquiries: IInquiryRepository
    settings: ISettingsRepository
    stats: IStatsRepository
    profiles: IProfileRepository
