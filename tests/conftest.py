"""Shared test fixtures."""
import json

import pytest
from unittest.mock import patch, MagicMock
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from leadcheck.database import Base


@pytest.fixture
def db_engine():
    """In-memory SQLite engine with schema created."""
    engine = create_engine('sqlite:///:memory:')
    import leadcheck.models.lead
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    """Session for assertions against the in-memory DB."""
    Session = sessionmaker(bind=db_engine)
    session = Session()
    yield session
    session.rollback()
    session.close()


@pytest.fixture(autouse=True)
def patch_get_session(db_engine):
    """
    Route get_session() calls inside the lead store to the in-memory DB.

    The store does `from leadcheck.database import get_session` at import time,
    so the patch targets its local binding. Each call returns a fresh session so
    close() in the production code behaves as it does against a real pool.
    """
    TestSession = sessionmaker(bind=db_engine)
    with patch('leadcheck.services.lead_store.get_session', side_effect=lambda: TestSession()):
        yield TestSession


@pytest.fixture
def app():
    """Flask test app."""
    from leadcheck import create_app
    app = create_app()
    app.config['TESTING'] = True
    yield app


@pytest.fixture
def client(app):
    """Flask test client."""
    with app.test_client() as c:
        yield c


@pytest.fixture
def pagespeed_payload():
    """Factory for PageSpeed-shaped response bodies."""
    def _make(performance=0.91, accessibility=0.82, best_practices=0.73, seo=0.94):
        categories = {}
        for key, score in (('performance', performance), ('accessibility', accessibility),
                           ('best-practices', best_practices), ('seo', seo)):
            if score is not None:
                categories[key] = {'id': key, 'score': score}
        return {
            'id': 'https://example-test.com/',
            'lighthouseResult': {
                'requestedUrl': 'https://example-test.com',
                'finalUrl': 'https://example-test.com/',
                'categories': categories,
            },
            'analysisUTCTimestamp': '2026-10-19T12:00:00.000Z',
        }
    return _make


@pytest.fixture
def mock_response():
    """Factory — builds a requests.Response-like MagicMock."""
    def _make(body, status_code=200):
        resp = MagicMock()
        resp.status_code = status_code
        resp.ok = 200 <= status_code < 400
        resp.text = body if isinstance(body, str) else json.dumps(body)
        return resp
    return _make


@pytest.fixture
def pagespeed_api(mock_response, pagespeed_payload):
    """API key configured + requests.get patched to return a successful analysis."""
    with patch('leadcheck.services.pagespeed.PAGESPEED_API_KEY', 'test-key'), \
         patch('leadcheck.services.pagespeed.requests.get') as mock_get:
        mock_get.return_value = mock_response(pagespeed_payload())
        yield mock_get
