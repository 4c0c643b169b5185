"""Inquiry repository protocol."""

from typing import Protocol

from domain.entities.inquiry import Inquiry
from domain.repositories.entity_repository import IEntityRepository


class IInquiryRepository(IEntityRepository[Inquiry], Protocol):
    """Repository interface for Inquiry entities (rows carry the joined project)."""
