from sqlalchemy import Column, Integer, String, DateTime, Numeric, ForeignKey
from sqlalchemy.sql import func
from podrun.db import Base


class Pod(Base):
    __tablename__ = "pods"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)

    # Shared goal for the Monday-based week
    weekly_goal_km = Column(Numeric(6, 2), nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class PodMember(Base):
    __tablename__ = "pod_members"

    pod_id = Column(Integer, ForeignKey("pods.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(String, primary_key=True, index=True)
