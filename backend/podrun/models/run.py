from sqlalchemy import Column, Integer, String, DateTime, Numeric
from sqlalchemy.sql import func
from podrun.db import Base

class Run(Base):
    __tablename__ = "runs"

    id = Column(Integer, primary_key=True, index=True)

    # Owner; comes from the X-User-Id header, never from the payload
    user_id = Column(String, nullable=False, index=True)

    distance = Column(Numeric(8, 3), nullable=False)  # km, e.g. 5.245

    # Duration stored as **total seconds** (int)
    duration = Column(Integer, nullable=False)

    # Pace is frozen at journal time as 'M:SS' per km
    pace = Column(String(16), nullable=False)

    location = Column(String, nullable=True)

    # energized, accomplished, peaceful, happy, grateful
    mood = Column(String(20), nullable=False)
    journal_note = Column(String, nullable=True)

    calories = Column(Integer, nullable=False, server_default="0")
    steps = Column(Integer, nullable=False, server_default="0")

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
