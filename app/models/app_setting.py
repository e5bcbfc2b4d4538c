from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime
from app.core.database import Base


class AppSetting(Base):
    """Provider API key saved from the settings screen.

    ``key`` is the env var the value overrides (``SERPAPI_API_KEY``,
    ``PEXELS_API_KEY``, ``GITHUB_TOKEN``).
    """

    __tablename__ = "app_settings"

    key = Column(String, primary_key=True)
    value = Column(String, nullable=False, default="")
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
