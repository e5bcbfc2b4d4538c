from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime
from app.core.database import Base


class User(Base):
    """Local mirror of an identity-provider account.

    ``id`` is the provider's subject claim, so no password or session
    state is stored here.
    """

    __tablename__ = "users"

    id = Column(String, primary_key=True)
    email = Column(String, nullable=True, index=True)
    full_name = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
