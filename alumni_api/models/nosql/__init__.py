"""MongoDB models package."""

from alumni_api.models.nosql.achievement import AchievementDocument, AchievementType
from alumni_api.models.nosql.file import FileCategory, FileRecord

__all__ = ["AchievementDocument", "AchievementType", "FileCategory", "FileRecord"]
