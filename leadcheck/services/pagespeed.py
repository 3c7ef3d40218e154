"""
Google PageSpeed Insights client.

analyze_url() raises on any failure. run_analysis() is the best-effort wrapper
used by the lead pipeline: it always returns an AnalysisOutcome.
"""
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

import requests

from leadcheck.config import (
    PAGESPEED_API_KEY, PAGESPEED_API_URL, PAGESPEED_TIMEOUT,
    PAGESPEED_CATEGORIES, DEFAULT_STRATEGY, STRATEGIES,
)
from leadcheck.errors import ValidationError, ExternalServiceError
from leadcheck.services.validators import is_valid_url

logger = logging.getLogger('services.pagespeed')


@dataclass
class Scores:
    """Category scores on the 0..1 scale. None means unavailable."""
    performance: Optional[float] = None
    accessibility: Optional[float] = None
    best_practices: Optional[float] = None
    seo: Optional[float] = None

    def to_dict(self) -> Dict[str, Optional[float]]:
        return {
            'performance': self.performance,
            'accessibility': self.accessibility,
            'bestPractices': self.best_practices,
            'seo': self.seo,
        }


@dataclass
class AnalysisSucceeded:
    scores: Scores
    payload: Dict[str, Any] = field(default_factory=dict)


@dataclass
class AnalysisFailed:
    reason: str

    @property
    def scores(self) -> Scores:
        return Scores()

    @property
    def payload(self) -> Dict[str, Any]:
        return {'error': {'code': 500, 'message': f'Analysis failed: {self.reason}'}}


AnalysisOutcome = Union[AnalysisSucceeded, AnalysisFailed]


def parse_strategy(value) -> str:
    """Case-insensitive match against STRATEGIES; anything else is DEFAULT_STRATEGY."""
    if isinstance(value, str):
        candidate = value.strip().upper()
        if candidate in STRATEGIES:
            return candidate
    return DEFAULT_STRATEGY


def normalize_url(url: str) -> str:
    """Trim and default to https:// when no http(s) scheme is given."""
    target = url.strip()
    if not target.startswith('http://') and not target.startswith('https://'):
        target = 'https://' + target
    return target


def _score(categories: Dict[str, Any], key: str) -> Optional[float]:
    category = categories.get(key)
    if not isinstance(category, dict):
        return None
    score = category.get('score')
    return float(score) if isinstance(score, (int, float)) else None


def extract_scores(payload: Dict[str, Any]) -> Scores:
    """Pull the four category scores out of a PageSpeed response."""
    categories = payload['lighthouseResult']['categories']
    return Scores(
        performance=_score(categories, 'performance'),
        accessibility=_score(categories, 'accessibility'),
        best_practices=_score(categories, 'best-practices'),
        seo=_score(categories, 'seo'),
    )


def analyze_url(url: str, strategy: str = DEFAULT_STRATEGY) -> Tuple[Scores, Dict[str, Any]]:
    """
    Run a PageSpeed analysis and return (scores, raw payload).

    Raises:
        ValidationError:      url empty or not a parseable absolute URL.
        ExternalServiceError: transport failure, non-2xx, API error payload,
                              or a payload without lighthouseResult.categories.
    """
    if not url or not url.strip():
        raise ValidationError("URL is required for PageSpeed analysis.")

    target_url = normalize_url(url)
    if not is_valid_url(target_url):
        raise ValidationError(f"Invalid URL format: {url}")

    if not PAGESPEED_API_KEY:
        logger.warning("PAGESPEED_API_KEY not set — skipping analysis for %s", target_url)
        return Scores(), {'error': {'code': 0, 'message': 'API Key not configured'}}

    params = [
        ('url', target_url),
        ('key', PAGESPEED_API_KEY),
        ('strategy', strategy),
    ]
    params.extend(('category', category) for category in PAGESPEED_CATEGORIES)

    logger.info("Requesting PageSpeed analysis for %s (strategy=%s)", target_url, strategy)

    def fail(cause):
        return ExternalServiceError(f"Failed to analyze URL '{target_url}': {cause}")

    try:
        response = requests.get(PAGESPEED_API_URL, params=params, timeout=PAGESPEED_TIMEOUT)
        # Body first, so error detail survives a non-2xx status
        body = response.text
    except requests.exceptions.RequestException as e:
        logger.error("PageSpeed request error for %s: %s", target_url, e)
        raise fail(e) from e

    if not response.ok:
        logger.error("PageSpeed API error (%d): %s", response.status_code, body[:500])
        raise fail(f"PageSpeed API request failed with status {response.status_code}")

    try:
        data = json.loads(body)
    except ValueError as e:
        logger.error("PageSpeed API returned non-JSON body: %s", body[:200])
        raise fail(f"PageSpeed API returned invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise fail("Invalid PageSpeed API response structure.")

    if data.get('error'):
        error = data['error']
        message = error.get('message', 'Unknown error') if isinstance(error, dict) else str(error)
        logger.error("PageSpeed API returned an error: %s", message)
        raise fail(f"PageSpeed analysis error: {message}")

    lighthouse = data.get('lighthouseResult')
    if not isinstance(lighthouse, dict) or not isinstance(lighthouse.get('categories'), dict):
        logger.error("PageSpeed response missing lighthouseResult.categories for %s", target_url)
        raise fail("Invalid PageSpeed API response structure.")

    scores = extract_scores(data)
    logger.info("Analysis complete for %s: %s", target_url, scores.to_dict())
    return scores, data


def run_analysis(url: str, strategy: str = DEFAULT_STRATEGY) -> AnalysisOutcome:
    """Best-effort analysis. Every failure becomes AnalysisFailed."""
    try:
        scores, payload = analyze_url(url, strategy)
    except Exception as e:
        logger.warning("Analysis failed for %s: %s", url, e)
        return AnalysisFailed(reason=str(e))
    return AnalysisSucceeded(scores=scores, payload=payload)
