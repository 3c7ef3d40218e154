"""Tests for the app factory -- JSON error handlers, request id and timing headers, CORS."""
from unittest.mock import patch

import pytest


class TestNotFound:

    def test_unknown_route_returns_json_404(self, client):
        resp = client.get('/nope')
        assert resp.status_code == 404
        data = resp.get_json()
        assert data['success'] is False
        assert data['message'].startswith('Not Found - GET ')
        assert '/nope' in data['message']

    def test_method_not_allowed_returns_json_405(self, client):
        resp = client.delete('/api/v1/leads/analyze')
        assert resp.status_code == 405
        assert resp.get_json()['success'] is False


class TestUnhandledErrors:

    def test_uncaught_exception_becomes_500(self, app):
        @app.route('/boom')
        def boom():
            raise RuntimeError('kaboom')

        resp = app.test_client().get('/boom')
        assert resp.status_code == 500
        assert resp.get_json() == {'success': False, 'message': 'kaboom'}


class TestResponseTime:

    def test_header_present(self, client):
        resp = client.get('/health')
        assert resp.headers['X-Response-Time'].endswith('ms')


class TestRequestId:

    def test_generated_when_absent(self, client):
        first = client.get('/health').headers['X-Request-ID']
        second = client.get('/health').headers['X-Request-ID']
        assert len(first) == 32
        assert first != second

    def test_echoes_caller_id(self, client):
        resp = client.get('/health', headers={'X-Request-ID': 'edge-42'})
        assert resp.headers['X-Request-ID'] == 'edge-42'


class TestCors:

    ORIGIN = 'https://app.example.com'

    @pytest.fixture
    def cors_client(self):
        with patch('leadcheck.config.ALLOWED_ORIGIN', self.ORIGIN):
            from leadcheck import create_app
            app = create_app()
        app.config['TESTING'] = True
        with app.test_client() as c:
            yield c

    def test_allow_origin_from_config(self, cors_client):
        resp = cors_client.get('/health', headers={'Origin': self.ORIGIN})
        assert resp.headers['Access-Control-Allow-Origin'] == self.ORIGIN
        assert resp.headers['Access-Control-Allow-Credentials'] == 'true'
        assert 'Origin' in resp.headers.get('Vary', '')

    def test_preflight_returns_200(self, cors_client):
        resp = cors_client.options('/api/v1/leads/analyze', headers={
            'Origin': self.ORIGIN,
            'Access-Control-Request-Method': 'POST',
            'Access-Control-Request-Headers': 'Content-Type',
        })
        assert resp.status_code == 200
        assert resp.headers['Access-Control-Allow-Origin'] == self.ORIGIN
        assert 'POST' in resp.headers['Access-Control-Allow-Methods']

    def test_preflight_allows_patch(self, cors_client):
        resp = cors_client.options('/api/v1/leads/1/continue', headers={
            'Origin': self.ORIGIN,
            'Access-Control-Request-Method': 'PATCH',
        })
        assert 'PATCH' in resp.headers['Access-Control-Allow-Methods']

    def test_other_origin_gets_no_allow_header(self, cors_client):
        resp = cors_client.get('/health', headers={'Origin': 'https://evil.example.net'})
        assert resp.status_code == 200
        assert 'Access-Control-Allow-Origin' not in resp.headers

    def test_no_cors_headers_without_configured_origin(self):
        with patch('leadcheck.config.ALLOWED_ORIGIN', None):
            from leadcheck import create_app
            app = create_app()
        resp = app.test_client().get('/health', headers={'Origin': self.ORIGIN})
        assert 'Access-Control-Allow-Origin' not in resp.headers
