"""
Lead routes — submit a website for analysis, mark a lead for continuation,
fetch a stored lead.
"""
import logging

from flask import Blueprint, request, jsonify

from leadcheck.errors import ErrorKind, LeadCheckError
from leadcheck.services import leads
from leadcheck.services.pagespeed import parse_strategy
from leadcheck.services.validators import is_valid_email

logger = logging.getLogger(__name__)

bp = Blueprint('leads', __name__, url_prefix='/api/v1/leads')


def _fail(status, message, **extra):
    body = {'success': False, 'message': message}
    body.update(extra)
    return jsonify(body), status


def _parse_lead_id(raw):
    """Positive integer from a path segment, or None."""
    if not raw or not (raw.isascii() and raw.isdigit()):
        return None
    lead_id = int(raw)
    return lead_id if lead_id > 0 else None


def _blank(value):
    return not value or (isinstance(value, str) and not value.strip())


@bp.route('/analyze', methods=['POST'])
def analyze():
    """Run a PageSpeed analysis and store the lead."""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return _fail(400, 'Missing request body')

    email = body.get('email')
    website_url = body.get('websiteUrl')

    errors = []
    if _blank(email):
        errors.append('Email is required.')
    elif not is_valid_email(email):
        errors.append('Invalid email format.')
    if _blank(website_url):
        errors.append('Website URL is required.')
    elif not isinstance(website_url, str):
        errors.append('Invalid website URL format.')

    if errors:
        return _fail(400, 'Validation failed', errors=errors)

    strategy = parse_strategy(request.args.get('strategy'))
    logger.info("Analysis request: email=%s url=%s strategy=%s", email, website_url, strategy)

    try:
        result = leads.analyze_and_create_lead(email, website_url, strategy)
    except LeadCheckError as e:
        logger.error("Analyze failed: %s", e)
        if e.kind == ErrorKind.VALIDATION:
            return _fail(400, e.message)
        if e.kind == ErrorKind.EXTERNAL_SERVICE:
            return _fail(502, 'Failed to analyze the website due to an external service error.',
                         details=e.message)
        if e.kind == ErrorKind.STORAGE:
            return _fail(500, 'Failed to save analysis results due to a database issue.',
                         details=e.message)
        return _fail(500, 'An unexpected server error occurred.', details=e.message)
    except Exception as e:
        logger.error("Unexpected error during analyze", exc_info=True)
        return _fail(500, 'An unexpected server error occurred.', details=str(e))

    logger.info("Lead %d created", result['leadId'], extra={'lead_id': result['leadId']})
    return jsonify({'success': True, 'data': result}), 201


@bp.route('/continue', methods=['PATCH'], defaults={'raw_id': None})
@bp.route('/<raw_id>/continue', methods=['PATCH'])
def request_continue(raw_id):
    """Mark a lead as wanting follow-up."""
    if not raw_id:
        return _fail(400, 'Missing lead ID in URL path.')
    lead_id = _parse_lead_id(raw_id)
    if lead_id is None:
        return _fail(400, 'Invalid lead ID format. Must be a positive integer.')

    try:
        updated = leads.request_continue(lead_id)
    except LeadCheckError as e:
        logger.error("Continue request for lead %s failed: %s", lead_id, e, extra={'lead_id': lead_id})
        if e.kind == ErrorKind.VALIDATION:
            return _fail(400, e.message)
        if e.kind == ErrorKind.STORAGE:
            return _fail(500, 'Failed to update lead status.', details=e.message)
        return _fail(500, 'An unexpected server error occurred.', details=e.message)
    except Exception as e:
        logger.error("Unexpected error during continue request", exc_info=True)
        return _fail(500, 'An unexpected server error occurred.', details=str(e))

    if not updated:
        return _fail(404, 'Lead not found.')
    return jsonify({'success': True, 'message': 'Lead marked for continuation.'}), 200


@bp.route('/<raw_id>', methods=['GET'])
def get_lead(raw_id):
    """Return one stored lead."""
    lead_id = _parse_lead_id(raw_id)
    if lead_id is None:
        return _fail(400, 'Invalid lead ID format. Must be a positive integer.')

    try:
        record = leads.get_lead(lead_id)
    except LeadCheckError as e:
        logger.error("Lookup for lead %s failed: %s", lead_id, e, extra={'lead_id': lead_id})
        if e.kind == ErrorKind.VALIDATION:
            return _fail(400, e.message)
        return _fail(500, 'Failed to load lead.', details=e.message)

    if record is None:
        return _fail(404, 'Lead not found.')
    return jsonify({'success': True, 'data': record.to_dict()})
