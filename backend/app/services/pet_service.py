"""
StrayLink Backend — Pet Service
=================================

What:  Looks up adoptable pets for the share responder.
How:   Primary-key lookup only. Pet links are always generated from the id,
       so anything that is not a UUID cannot match a row.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError
from app.models.pet import Pet
from app.services.article_service import parse_uuid

logger = logging.getLogger(__name__)


class PetService:
    """Read access to the `pets` table."""

    async def get_pet(self, db: AsyncSession, identifier: str) -> Optional[Pet]:
        """
        Returns:
            The Pet, or None for a blank/non-UUID identifier or a missing row.

        Raises:
            DatabaseError: The query failed.
        """
        pet_id = parse_uuid((identifier or "").strip())
        if pet_id is None:
            return None

        try:
            result = await db.execute(select(Pet).where(Pet.id == pet_id))
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error("Database error fetching pet %s: %s", pet_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the pet. Please try again.",
                context={"pet_id": str(pet_id), "error_type": type(e).__name__},
            )


# ── Singleton Instance ────────────────────────────────────────────────────
pet_service = PetService()
