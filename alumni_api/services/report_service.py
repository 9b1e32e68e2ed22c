"""Achievement statistics for admins and alumni."""

from alumni_api.core.exceptions import NotFoundError
from alumni_api.models.sql.achievement import AchievementStatus
from alumni_api.repositories.base import (
    AchievementDocumentRepository,
    AchievementReferenceRepository,
    AlumniRepository,
)
from alumni_api.schemas.report import (
    AchievementStatistics,
    AlumniAchievementStatistics,
    TopAlumni,
)

REPORTED_STATUSES = (
    AchievementStatus.DRAFT.value,
    AchievementStatus.SUBMITTED.value,
    AchievementStatus.VERIFIED.value,
    AchievementStatus.REJECTED.value,
)


def _summarize(counts: dict[str, int]) -> tuple[int, dict[str, int], float]:
    """Total, per status counts and verification rate, ignoring deleted rows."""
    by_status = {status: counts.get(status, 0) for status in REPORTED_STATUSES}
    total = sum(by_status.values())
    verified = by_status[AchievementStatus.VERIFIED.value]
    rate = verified / total if total else 0.0
    return total, by_status, rate


class ReportService:
    def __init__(
        self,
        references: AchievementReferenceRepository,
        documents: AchievementDocumentRepository,
        alumni: AlumniRepository,
    ):
        self.references = references
        self.documents = documents
        self.alumni = alumni

    async def achievement_statistics(self, top: int = 10) -> AchievementStatistics:
        total, by_status, rate = _summarize(await self.references.count_by_status())

        top_alumni = []
        for alumni_id, count in await self.references.top_alumni(limit=top):
            record = await self.alumni.get(alumni_id, include_deleted=True)
            top_alumni.append(
                TopAlumni(
                    alumni_id=alumni_id,
                    name=record.name if record else "unknown",
                    achievement_count=count,
                )
            )

        return AchievementStatistics(
            total_achievements=total,
            achievements_by_status=by_status,
            achievements_by_type=await self.documents.count_by_type(),
            top_alumni=top_alumni,
            verification_rate=rate,
        )

    async def alumni_statistics(self, alumni_id: str) -> AlumniAchievementStatistics:
        record = await self.alumni.get(alumni_id)
        if record is None:
            raise NotFoundError("Alumni", alumni_id)

        total, by_status, rate = _summarize(
            await self.references.count_by_status(alumni_id=alumni_id)
        )
        return AlumniAchievementStatistics(
            alumni_id=record.id,
            student_number=record.student_number,
            name=record.name,
            major=record.major,
            entry_year=record.entry_year,
            total_achievements=total,
            achievements_by_status=by_status,
            verified_count=by_status[AchievementStatus.VERIFIED.value],
            draft_count=by_status[AchievementStatus.DRAFT.value],
            submitted_count=by_status[AchievementStatus.SUBMITTED.value],
            rejected_count=by_status[AchievementStatus.REJECTED.value],
            verification_rate=rate,
        )
