from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from podrun.db import Base


class Profile(Base):
    __tablename__ = "profiles"

    # Same id as the authenticated user
    id = Column(String, primary_key=True, index=True)

    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    username = Column(String, nullable=True)
    avatar_url = Column(String, nullable=True)

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
