"""In-memory implementation of Inquiry repository."""

import copy
from typing import Any

from domain.entities.inquiry import Inquiry, InquiryProject
from domain.schemas.inquiry import INQUIRY_SEARCH_FIELDS
from infrastructure.memory.repositories.memory_base_repo import InMemoryTableRepository


class InMemoryInquiryRepository(InMemoryTableRepository[Inquiry]):
    """In-memory implementation of IInquiryRepository."""

    search_fields = INQUIRY_SEARCH_FIELDS

    def _table(self) -> dict[str, Inquiry]:
        return self._dataset.inquiries

    def _to_entity(self, row: dict[str, Any]) -> Inquiry:
        row = {**row, "project": None}
        return Inquiry.from_row(row)

    def _present(self, record: Inquiry) -> Inquiry:
        inquiry = copy.deepcopy(record)
        project = self._dataset.projects.get(inquiry.project_id) if inquiry.project_id else None
        inquiry.project = InquiryProject(title=project.title) if project else None
        return inquiry
