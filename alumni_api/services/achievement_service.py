"""Achievement workflow across MongoDB documents and PostgreSQL status rows.

A draft is written to MongoDB first and then registered in PostgreSQL. The
two stores have no shared transaction, so when the second write fails the
document is soft deleted again and the original error is raised.
"""

import logging
from typing import Optional

from alumni_api.api.deps import Principal
from alumni_api.core.exceptions import (
    ForbiddenError,
    InvalidTransitionError,
    NotFoundError,
)
from alumni_api.core.pagination import PaginationParams
from alumni_api.models.base import utcnow
from alumni_api.models.nosql.achievement import AchievementDocument
from alumni_api.models.sql.achievement import AchievementReference, AchievementStatus
from alumni_api.repositories.base import (
    AchievementDocumentRepository,
    AchievementReferenceRepository,
)
from alumni_api.schemas.achievement import AchievementCreate, AchievementUpdate

logger = logging.getLogger(__name__)

Detail = tuple[AchievementReference, Optional[AchievementDocument]]

# Document fields an edit may set back to null; a null for any other field is ignored
CLEARABLE_FIELDS = frozenset({"event_date", "organizer", "level"})


class AchievementService:
    def __init__(
        self,
        documents: AchievementDocumentRepository,
        references: AchievementReferenceRepository,
    ):
        self.documents = documents
        self.references = references

    async def create_draft(self, alumni_id: str, data: AchievementCreate) -> Detail:
        """Write the document first, then its status row.

        The document is soft deleted again when the status row cannot be created.
        """
        document = await self.documents.create(
            AchievementDocument(alumni_id=alumni_id, **data.model_dump())
        )
        try:
            reference = await self.references.create(alumni_id, document.id)
        except Exception:
            logger.error(
                "Status row insert failed for achievement %s, rolling back document",
                document.id,
            )
            try:
                await self.documents.soft_delete(document.id)
            except Exception:
                logger.exception("Could not roll back achievement document %s", document.id)
            raise

        logger.info("Achievement draft %s created by alumni %s", reference.id, alumni_id)
        return reference, document

    async def _load(self, reference_id: str, principal: Principal) -> AchievementReference:
        reference = await self.references.get(reference_id)
        if reference is None or reference.status == AchievementStatus.DELETED.value:
            raise NotFoundError("Achievement", reference_id)
        if principal.is_alumni and reference.alumni_id != principal.id:
            raise ForbiddenError("access this achievement", principal_id=principal.id)
        return reference

    async def _transition(
        self,
        reference: AchievementReference,
        expected: AchievementStatus,
        target: AchievementStatus,
        **fields,
    ) -> AchievementReference:
        if reference.status != expected.value:
            raise InvalidTransitionError(reference.status, target.value)
        updated = await self.references.transition(
            reference.id, expected.value, target.value, **fields
        )
        if updated is None:
            # Someone else moved it between the read and the update
            current = await self.references.get(reference.id)
            raise InvalidTransitionError(
                current.status if current else "unknown", target.value
            )
        return updated

    async def get_detail(self, reference_id: str, principal: Principal) -> Detail:
        reference = await self._load(reference_id, principal)
        document = await self.documents.get(reference.document_id)
        return reference, document

    async def list_achievements(
        self,
        params: PaginationParams,
        principal: Principal,
        status: str | None = None,
    ) -> tuple[list[Detail], int]:
        alumni_id = principal.id if principal.is_alumni else None
        references, total = await self.references.paginate(
            params, alumni_id=alumni_id, status=status
        )
        documents = await self.documents.get_many([ref.document_id for ref in references])
        return [(ref, documents.get(ref.document_id)) for ref in references], total

    async def update_draft(
        self, reference_id: str, principal: Principal, data: AchievementUpdate
    ) -> Detail:
        """Apply a partial edit to the owner's draft. Null clears only the optional fields."""
        reference = await self._load(reference_id, principal)
        if reference.alumni_id != principal.id:
            raise ForbiddenError("edit this achievement")
        if reference.status != AchievementStatus.DRAFT.value:
            raise InvalidTransitionError(reference.status, AchievementStatus.DRAFT.value)

        changes = {
            field: value
            for field, value in data.model_dump(exclude_unset=True, mode="json").items()
            if value is not None or field in CLEARABLE_FIELDS
        }
        if changes.get("event_date") is not None:
            changes["event_date"] = data.event_date
        document = await self.documents.update(reference.document_id, changes)
        if document is None:
            raise NotFoundError("Achievement document", reference.document_id)
        return reference, document

    async def submit(self, reference_id: str, principal: Principal) -> AchievementReference:
        reference = await self._load(reference_id, principal)
        if reference.alumni_id != principal.id:
            raise ForbiddenError("submit this achievement")
        reference = await self._transition(
            reference,
            AchievementStatus.DRAFT,
            AchievementStatus.SUBMITTED,
            submitted_at=utcnow(),
        )
        logger.info("Achievement %s submitted", reference_id)
        return reference

    async def verify(self, reference_id: str, verifier: Principal) -> AchievementReference:
        """Mark a submitted achievement verified and record the reviewer."""
        reference = await self._load(reference_id, verifier)
        reference = await self._transition(
            reference,
            AchievementStatus.SUBMITTED,
            AchievementStatus.VERIFIED,
            verified_at=utcnow(),
            verified_by=verifier.id,
        )
        logger.info("Achievement %s verified by %s", reference_id, verifier.id)
        return reference

    async def reject(
        self, reference_id: str, verifier: Principal, note: str
    ) -> AchievementReference:
        """Reject a submitted achievement with a note. The reviewer is recorded as for verify."""
        reference = await self._load(reference_id, verifier)
        reference = await self._transition(
            reference,
            AchievementStatus.SUBMITTED,
            AchievementStatus.REJECTED,
            verified_at=utcnow(),
            verified_by=verifier.id,
            rejection_note=note,
        )
        logger.info("Achievement %s rejected by %s", reference_id, verifier.id)
        return reference

    async def delete_draft(self, reference_id: str, principal: Principal) -> None:
        """Mark a draft deleted in PostgreSQL, then soft delete its document.

        A MongoDB failure propagates so the request's SQL session rolls back.
        """
        reference = await self._load(reference_id, principal)
        if reference.alumni_id != principal.id:
            raise ForbiddenError("delete this achievement")
        await self._transition(reference, AchievementStatus.DRAFT, AchievementStatus.DELETED)
        await self.documents.soft_delete(reference.document_id)
        logger.info("Achievement draft %s deleted", reference_id)
