"""
Flask application factory.

Creates and configures the Flask app: logging, request ids and timing, CORS,
JSON error handlers, blueprints.
"""
import logging
import time
import uuid

from flask import Flask, g, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

logger = logging.getLogger('leadcheck')


def create_app():
    """Create and configure the Flask application."""
    from leadcheck.logging_config import configure_logging
    from leadcheck.config import ALLOWED_ORIGIN

    app = Flask(__name__)

    configure_logging(app)

    # ── CORS ────────────────────────────────────────────────────────────────
    if ALLOWED_ORIGIN:
        CORS(
            app,
            origins=ALLOWED_ORIGIN,
            supports_credentials=True,
            methods=['GET', 'POST', 'PATCH', 'OPTIONS'],
            allow_headers=['Content-Type', 'Authorization'],
        )
    else:
        logger.warning("ALLOWED_ORIGIN not set, cross-origin requests will be rejected by browsers")

    # ── Request id, timing + logging ───────────────────────────────────────
    @app.before_request
    def start_request():
        g.request_id = request.headers.get('X-Request-ID') or uuid.uuid4().hex
        g.request_started = time.monotonic()

    @app.after_request
    def finish_request(response):
        request_id = g.get('request_id')
        if request_id:
            response.headers['X-Request-ID'] = request_id
        started = g.pop('request_started', None)
        if started is not None:
            ms = int((time.monotonic() - started) * 1000)
            response.headers['X-Response-Time'] = f'{ms}ms'
            logger.info("%s %s - %d - %dms", request.method, request.path, response.status_code, ms,
                        extra={'status': response.status_code, 'duration_ms': ms})
        return response

    # ── JSON errors ─────────────────────────────────────────────────────────
    @app.errorhandler(404)
    def not_found(e):
        return jsonify({
            'success': False,
            'message': f'Not Found - {request.method} {request.url}',
        }), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({
            'success': False,
            'message': f'Method Not Allowed - {request.method} {request.url}',
        }), 405

    @app.errorhandler(Exception)
    def unhandled(e):
        if isinstance(e, HTTPException):
            return jsonify({'success': False, 'message': e.description}), e.code
        logger.error("Unhandled error: %s", e, exc_info=True)
        return jsonify({'success': False, 'message': str(e) or 'Internal Server Error'}), 500

    # Register blueprints
    from leadcheck.routes.health import bp as health_bp
    from leadcheck.routes.leads import bp as leads_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(leads_bp)

    # Import models so Base.metadata knows about them.
    # Schema is managed by Alembic; no create_all() here.
    import importlib
    importlib.import_module('leadcheck.models.lead')

    return app
