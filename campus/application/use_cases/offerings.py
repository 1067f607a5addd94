"""Offering administration: publish or withdraw an offering from enrollment."""

from __future__ import annotations

import logging

from campus.application.dtos.enrollment import OfferingResult
from campus.application.interfaces.repositories import IOfferingRepository
from campus.domain.exceptions import ResourceNotFoundException

logger = logging.getLogger(__name__)


class PublishOfferingUseCase:
    """Flip the publish flag the eligibility gate checks first."""

    def __init__(self, offerings: IOfferingRepository) -> None:
        self.offerings = offerings

    async def execute(self, offering_id: str, published: bool) -> OfferingResult:
        offering = await self.offerings.set_published(offering_id, published)
        if offering is None:
            raise ResourceNotFoundException("course_offering", offering_id)
        logger.info(
            "Offering %s %s", offering_id, "published" if published else "unpublished"
        )
        return offering
