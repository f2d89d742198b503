"""
Service layer for perks.

``PerkService`` orchestrates validation and persistence for each
operation and translates persistence outcomes into the error taxonomy
of ``core.exceptions``.  It never touches SQL itself: everything goes
through the repository passed to the constructor, which makes the
service easy to exercise against a stub store.

Validation happens before every write.  Creation validates in
``strict-create`` mode so the stored record is complete and defaulted;
updates validate in ``partial-update`` mode and write only the fields
the caller supplied, so an explicit ``0`` or ``""`` is a real change
while an absent key leaves the stored value alone.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from perks_api.app.core.exceptions import (
    BadRequestError,
    ConflictError,
    NotFoundError,
    UniqueConstraintViolation,
)
from perks_api.app.repositories.perk_repository import PerkRepository
from perks_api.app.schemas.perk import ALIAS_TO_COLUMN, PARTIAL_UPDATE, STRICT_CREATE, PerkRead
from perks_api.app.services.perk_validator import validate_perk


logger = logging.getLogger(__name__)


class PerkService:
    """Create, read, filter, update and delete perks."""

    def __init__(self, repository: Optional[PerkRepository] = None) -> None:
        self.repository = repository or PerkRepository()

    async def create_perk(self, payload: Any) -> PerkRead:
        """Validate ``payload`` and insert it as a new perk.

        Raises ``ValidationError`` for bad input and ``ConflictError``
        when the merchant already has a perk with this title.
        """
        values = validate_perk(payload, STRICT_CREATE)
        try:
            record = self.repository.insert(values)
        except UniqueConstraintViolation:
            logger.warning(
                "Duplicate perk %r for merchant %r", values["title"], values["merchant"]
            )
            raise ConflictError()
        logger.info("Created perk %s", record["id"])
        return self._to_read(record)

    async def get_perk(self, perk_id: str) -> PerkRead:
        record = self.repository.find_by_id(perk_id)
        if record is None:
            logger.warning("Perk %s not found", perk_id)
            raise NotFoundError()
        return self._to_read(record)

    async def list_perks(self) -> List[PerkRead]:
        """Return every perk, newest first."""
        return [self._to_read(record) for record in self.repository.find_all()]

    async def filter_perks(self, title: Optional[str]) -> List[PerkRead]:
        """Return perks whose title equals ``title`` exactly, newest first."""
        if not isinstance(title, str) or not title:
            raise BadRequestError("Title query parameter is required")
        records = self.repository.find_exact("title", title)
        return [self._to_read(record) for record in records]

    async def update_perk(self, perk_id: str, payload: Any) -> PerkRead:
        """Apply a partial update to an existing perk.

        The existence check runs before the body is validated, so an
        unknown id is reported as ``NotFoundError`` even when the body
        is invalid.
        """
        if self.repository.find_by_id(perk_id) is None:
            logger.warning("Perk %s not found for update", perk_id)
            raise NotFoundError()

        values = validate_perk(payload, PARTIAL_UPDATE)
        updates = self._changed_fields(payload, values)
        try:
            record = self.repository.update_by_id(perk_id, updates)
        except UniqueConstraintViolation:
            logger.warning("Update of perk %s would duplicate another perk", perk_id)
            raise ConflictError()
        if record is None:
            # Deleted between the existence check and the write.
            raise NotFoundError()
        if updates:
            logger.info("Updated perk %s fields=%s", perk_id, sorted(updates))
        return self._to_read(record)

    async def delete_perk(self, perk_id: str) -> None:
        record = self.repository.delete_by_id(perk_id)
        if record is None:
            logger.warning("Perk %s not found for deletion", perk_id)
            raise NotFoundError()
        logger.info("Deleted perk %s", perk_id)

    @staticmethod
    def _changed_fields(payload: Mapping[str, Any], values: Dict[str, Any]) -> Dict[str, Any]:
        """Keep validated values only for keys the caller actually sent."""
        supplied = {
            ALIAS_TO_COLUMN[key]
            for key, value in payload.items()
            if key in ALIAS_TO_COLUMN and value is not None
        }
        return {column: value for column, value in values.items() if column in supplied}

    @staticmethod
    def _to_read(record: Dict[str, Any]) -> PerkRead:
        return PerkRead(**record)
