"""Alumni lifecycle operations that also touch employment history."""

import logging

from alumni_api.core.exceptions import BadRequestError, NotFoundError
from alumni_api.repositories.base import AlumniRepository, EmploymentRepository

logger = logging.getLogger(__name__)


async def trash_alumni(
    alumni: AlumniRepository,
    employment: EmploymentRepository,
    alumni_id: str,
    deleted_by: str,
) -> int:
    """Move an alumni and their active employment rows to the trash.

    Returns the number of employment rows trashed along with the alumni.
    """
    if not await alumni.soft_delete(alumni_id, deleted_by):
        raise NotFoundError("Alumni", alumni_id)
    trashed = await employment.soft_delete_by_alumni(alumni_id, deleted_by)
    logger.info(
        "Alumni %s trashed by %s with %d employment rows", alumni_id, deleted_by, trashed
    )
    return trashed


async def restore_alumni(alumni: AlumniRepository, alumni_id: str) -> None:
    if not await alumni.restore(alumni_id):
        raise NotFoundError("Trashed alumni", alumni_id)
    logger.info("Alumni %s restored", alumni_id)


async def purge_alumni(
    alumni: AlumniRepository,
    employment: EmploymentRepository,
    alumni_id: str,
) -> int:
    """Permanently remove a trashed alumni and their trashed employment rows."""
    record = await alumni.get(alumni_id, include_deleted=True)
    if record is None:
        raise NotFoundError("Alumni", alumni_id)
    if not record.is_deleted:
        raise BadRequestError("Permanent delete is only allowed for trashed alumni")

    purged = await employment.purge_by_alumni(alumni_id)
    if not await alumni.purge(alumni_id):
        raise BadRequestError("Permanent delete is only allowed for trashed alumni")
    logger.info("Alumni %s purged with %d employment rows", alumni_id, purged)
    return purged


async def delete_alumni(
    alumni: AlumniRepository,
    employment: EmploymentRepository,
    alumni_id: str,
) -> None:
    """Remove an alumni straight away together with all their employment."""
    if await alumni.get(alumni_id, include_deleted=True) is None:
        raise NotFoundError("Alumni", alumni_id)
    await employment.delete_by_alumni(alumni_id)
    await alumni.delete(alumni_id)
    logger.info("Alumni %s deleted", alumni_id)
