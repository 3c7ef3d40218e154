"""
Lead persistence — one session checkout per operation.

Every function closes its session on every exit path. SQLAlchemy failures are
rolled back and re-raised as StorageError; "not found" is a normal return value.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from sqlalchemy import insert
from sqlalchemy.exc import SQLAlchemyError

from leadcheck.database import get_session
from leadcheck.errors import StorageError
from leadcheck.models.lead import Lead

logger = logging.getLogger('services.lead_store')


@dataclass
class LeadData:
    """Storage-ready lead input. Scores on the 0..1 scale."""
    email: str
    website_url: str
    performance_score: Optional[float] = None
    accessibility_score: Optional[float] = None
    best_practices_score: Optional[float] = None
    seo_score: Optional[float] = None
    analysis_data: Optional[Dict[str, Any]] = None


@dataclass
class LeadRecord:
    """A stored lead, scores rescaled to 0..1."""
    id: int
    email: str
    website_url: str
    performance_score: Optional[float]
    accessibility_score: Optional[float]
    best_practices_score: Optional[float]
    seo_score: Optional[float]
    analysis_data: Optional[Dict[str, Any]]
    continue_requested: bool
    submitted_at: Optional[datetime]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'email': self.email,
            'websiteUrl': self.website_url,
            'performanceScore': self.performance_score,
            'accessibilityScore': self.accessibility_score,
            'bestPracticesScore': self.best_practices_score,
            'seoScore': self.seo_score,
            'analysisData': self.analysis_data,
            'continueRequested': self.continue_requested,
            'submittedAt': self.submitted_at.isoformat() if self.submitted_at else None,
        }


def to_stored_score(score: Optional[float]) -> Optional[Decimal]:
    """0..1 -> 0..100 at 2 decimals. None stays None; 0.0 stays 0.00."""
    if score is None:
        return None
    return Decimal(str(round(score * 100, 2))).quantize(Decimal('0.01'))


def from_stored_score(value) -> Optional[float]:
    """0..100 (Decimal, float or text) -> 0..1 float."""
    if value is None:
        return None
    return round(float(value) / 100, 4)


def _to_record(lead) -> LeadRecord:
    """Map a Lead instance or a RETURNING row (same attribute names)."""
    return LeadRecord(
        id=lead.id,
        email=lead.email,
        website_url=lead.website_url,
        performance_score=from_stored_score(lead.performance_score),
        accessibility_score=from_stored_score(lead.accessibility_score),
        best_practices_score=from_stored_score(lead.best_practices_score),
        seo_score=from_stored_score(lead.seo_score),
        analysis_data=lead.analysis_data,
        continue_requested=bool(lead.continue_requested),
        submitted_at=lead.submitted_at,
    )


def create_lead(data: LeadData) -> LeadRecord:
    """INSERT ... RETURNING a lead and return it as stored."""
    session = get_session()
    try:
        stmt = (
            insert(Lead.__table__)
            .values(
                email=data.email,
                website_url=data.website_url,
                performance_score=to_stored_score(data.performance_score),
                accessibility_score=to_stored_score(data.accessibility_score),
                best_practices_score=to_stored_score(data.best_practices_score),
                seo_score=to_stored_score(data.seo_score),
                analysis_data=data.analysis_data or None,
            )
            .returning(*Lead.__table__.c)
        )
        row = session.execute(stmt).first()
        if row is None:
            raise StorageError("Failed to create lead, no rows returned.")

        session.commit()
        return _to_record(row)
    except SQLAlchemyError as e:
        session.rollback()
        logger.error("Error creating lead for %s", data.email, exc_info=True)
        raise StorageError(f"Database error: {e}") from e
    finally:
        session.close()


def update_continue_requested(lead_id: int) -> bool:
    """Set continue_requested for one lead. False when no row has that id."""
    session = get_session()
    try:
        matched = session.query(Lead).filter_by(id=lead_id).update(
            {Lead.continue_requested: True}, synchronize_session=False,
        )
        session.commit()
        return matched == 1
    except SQLAlchemyError as e:
        session.rollback()
        logger.error("Error updating continue_requested for lead %s", lead_id, exc_info=True)
        raise StorageError(f"Database error: {e}") from e
    finally:
        session.close()


def find_lead_by_id(lead_id: int) -> Optional[LeadRecord]:
    session = get_session()
    try:
        lead = session.get(Lead, lead_id)
        if lead is None:
            return None
        return _to_record(lead)
    except SQLAlchemyError as e:
        session.rollback()
        logger.error("Error finding lead by id %s", lead_id, exc_info=True)
        raise StorageError(f"Database error: {e}") from e
    finally:
        session.close()
