"""SQLAlchemy models package."""

from alumni_api.models.sql.achievement import AchievementReference, AchievementStatus
from alumni_api.models.sql.alumni import Alumni
from alumni_api.models.sql.employment import Employment
from alumni_api.models.sql.user import User

__all__ = ["User", "Alumni", "Employment", "AchievementReference", "AchievementStatus"]
