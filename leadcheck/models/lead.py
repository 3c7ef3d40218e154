"""
Lead model — one row per analysis submission.

Scores are stored on a 0–100 scale at 2-decimal precision.
"""
from sqlalchemy import Column, Integer, Numeric, Text, Boolean, DateTime, JSON, false
from sqlalchemy.sql import func

from leadcheck.database import Base


class Lead(Base):
    __tablename__ = 'leads'

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(Text, nullable=False, index=True)
    website_url = Column(Text, nullable=False)
    performance_score = Column(Numeric(5, 2), nullable=True)
    accessibility_score = Column(Numeric(5, 2), nullable=True)
    best_practices_score = Column(Numeric(5, 2), nullable=True)
    seo_score = Column(Numeric(5, 2), nullable=True)
    analysis_data = Column(JSON(none_as_null=True), nullable=True)
    continue_requested = Column(Boolean, nullable=False, default=False, server_default=false())
    submitted_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
