from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from podrun.db import Base


class RunCheer(Base):
    __tablename__ = "run_cheers"
    __table_args__ = (UniqueConstraint("run_id", "user_id", name="uq_run_cheers_run_user"),)

    id = Column(Integer, primary_key=True, index=True)
    run_id = Column(Integer, ForeignKey("runs.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
