"""Supabase implementation of Inquiry repository."""

from typing import Any

from domain.entities.inquiry import Inquiry
from domain.schemas.inquiry import INQUIRY_SEARCH_FIELDS
from infrastructure.supabase.repositories.supabase_base_repo import SupabaseTableRepository


class SupabaseInquiryRepository(SupabaseTableRepository[Inquiry]):
    """Supabase implementation of IInquiryRepository."""

    table = "inquiries"
    select = "*,project:projects(title)"
    search_fields = INQUIRY_SEARCH_FIELDS

    def _to_entity(self, row: dict[str, Any]) -> Inquiry:
        return Inquiry.from_row(row)
