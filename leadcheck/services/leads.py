"""
Lead pipeline — analysis (best-effort) then persistence (mandatory).

Stage 1 turns the PageSpeed call into an AnalysisOutcome and never raises for
analysis failures. Stage 2 always builds and stores a lead from whichever
outcome came back. Only storage failures abort the operation.
"""
import logging
from typing import Any, Dict, Optional

from leadcheck.config import DEFAULT_STRATEGY
from leadcheck.errors import ValidationError, StorageError
from leadcheck.services import lead_store
from leadcheck.services.lead_store import LeadData, LeadRecord
from leadcheck.services.pagespeed import AnalysisOutcome, AnalysisFailed, run_analysis

logger = logging.getLogger('services.leads')


def build_lead_data(email: str, website_url: str, outcome: AnalysisOutcome) -> LeadData:
    """Stage 2 input: trimmed email and the URL as submitted (not https-prefixed)."""
    scores = outcome.scores
    return LeadData(
        email=email.strip(),
        website_url=website_url.strip(),
        performance_score=scores.performance,
        accessibility_score=scores.accessibility,
        best_practices_score=scores.best_practices,
        seo_score=scores.seo,
        analysis_data=outcome.payload,
    )


def _present(value) -> bool:
    return isinstance(value, str) and bool(value.strip())


def analyze_and_create_lead(email: str, website_url: str,
                            strategy: str = DEFAULT_STRATEGY) -> Dict[str, Any]:
    """
    Analyze website_url and store a lead for it.

    Returns {'leadId': int, 'scores': {...}} with scores on the 0..1 scale
    as stored. A failed analysis still creates the lead, with null scores.

    Raises:
        ValidationError: email or website_url empty or blank.
        StorageError:    the lead could not be saved.
    """
    if not _present(email) or not _present(website_url):
        raise ValidationError("Email and Website URL are required.")

    logger.info("Starting PageSpeed analysis for %s", website_url)
    outcome = run_analysis(website_url, strategy)
    if isinstance(outcome, AnalysisFailed):
        logger.error("Analysis failed for %s: %s", website_url, outcome.reason)
    else:
        logger.info("PageSpeed analysis finished for %s", website_url)

    lead_data = build_lead_data(email, website_url, outcome)

    try:
        record = lead_store.create_lead(lead_data)
    except StorageError as e:
        logger.error("Failed to save lead for %s / %s: %s", email, website_url, e)
        raise StorageError(f"Database error while saving lead: {e}") from e

    logger.info("Lead created with id %d", record.id, extra={'lead_id': record.id})
    return {
        'leadId': record.id,
        'scores': {
            'performance': record.performance_score,
            'accessibility': record.accessibility_score,
            'bestPractices': record.best_practices_score,
            'seo': record.seo_score,
        },
    }


def _check_lead_id(lead_id):
    if isinstance(lead_id, bool) or not isinstance(lead_id, int) or lead_id <= 0:
        raise ValidationError(f"Invalid Lead ID provided: {lead_id}. Must be a positive number.")


def request_continue(lead_id: int) -> bool:
    """Mark a lead as wanting follow-up. False when the lead does not exist."""
    _check_lead_id(lead_id)
    try:
        updated = lead_store.update_continue_requested(lead_id)
    except StorageError as e:
        logger.error("Error processing continue request for lead %s: %s", lead_id, e)
        raise StorageError(f"Failed to update lead status for ID {lead_id}: {e}") from e

    if updated:
        logger.info("Marked continue requested for lead %d", lead_id, extra={'lead_id': lead_id})
    else:
        logger.warning("Continue requested for non-existent lead %d", lead_id, extra={'lead_id': lead_id})
    return updated


def get_lead(lead_id: int) -> Optional[LeadRecord]:
    _check_lead_id(lead_id)
    try:
        return lead_store.find_lead_by_id(lead_id)
    except StorageError as e:
        logger.error("Error loading lead %s: %s", lead_id, e)
        raise StorageError(f"Failed to load lead {lead_id}: {e}") from e
