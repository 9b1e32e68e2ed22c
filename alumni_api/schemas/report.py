"""Report schemas."""

from pydantic import BaseModel


class TopAlumni(BaseModel):
    alumni_id: str
    name: str
    achievement_count: int


class AchievementStatistics(BaseModel):
    total_achievements: int
    achievements_by_status: dict[str, int]
    achievements_by_type: dict[str, int]
    top_alumni: list[TopAlumni]
    verification_rate: float


class AlumniAchievementStatistics(BaseModel):
    alumni_id: str
    student_number: str
    name: str
    major: str
    entry_year: int
    total_achievements: int
    achievements_by_status: dict[str, int]
    verified_count: int
    draft_count: int
    submitted_count: int
    rejected_count: int
    verification_rate: float
