"""In-memory substitute for the remote tables."""

from dataclasses import dataclass, field

from domain.entities.inquiry import Inquiry
from domain.entities.profile import Profile
from domain.entities.project import Project
from domain.entities.review import Review
from domain.entities.site_settings import SiteSettings
from infrastructure.memory.seed import seed_projects, seed_reviews, seed_settings


@dataclass
class InMemoryDataset:
    """Mutable tables shared by all in-memory repositories.

    Repositories are the only writers. Every read returns copies, so a
    caller mutating a returned entity never changes the stored row.
    """

    projects: dict[str, Project] = field(default_factory=dict)
    reviews: dict[str, Review] = field(default_factory=dict)
    inquiries: dict[str, Inquiry] = field(default_factory=dict)
    profiles: dict[str, Profile] = field(default_factory=dict)
    settings: SiteSettings = field(default_factory=SiteSettings)

    @classmethod
    def seeded(cls) -> "InMemoryDataset":
        """Dataset pre-filled with the demo catalogue."""
        return cls(
            projects={project.id: project for project in seed_projects()},
            reviews={review.id: review for review in seed_reviews()},
            settings=seed_settings(),
        )
