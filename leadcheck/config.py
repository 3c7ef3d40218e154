"""
Centralized configuration — all env vars and constants.

A local .env file is loaded first when present; real environment variables win.
"""
import os

from dotenv import load_dotenv

load_dotenv()


# ── Server ────────────────────────────────────────────────────────────────────
PORT = int(os.getenv('PORT', 8000))

# ── CORS ──────────────────────────────────────────────────────────────────────
ALLOWED_ORIGIN = os.getenv('ALLOWED_ORIGIN')

# ── Logging ──────────────────────────────────────────────────────────────────
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOG_FORMAT = os.getenv('LOG_FORMAT', 'text')

# ── PostgreSQL ────────────────────────────────────────────────────────────────
DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///local.db')
DB_POOL_SIZE = int(os.getenv('DB_POOL_SIZE', 5))

# ── PageSpeed Insights ────────────────────────────────────────────────────────
PAGESPEED_API_KEY = os.getenv('PAGESPEED_API_KEY')
PAGESPEED_API_URL = os.getenv(
    'PAGESPEED_API_URL', 'https://www.googleapis.com/pagespeedonline/v5/runPagespeed'
)
PAGESPEED_TIMEOUT = int(os.getenv('PAGESPEED_TIMEOUT', 60))

# ── Analysis strategies ───────────────────────────────────────────────────────
STRATEGIES = [
    'MOBILE',
    'DESKTOP',
]
DEFAULT_STRATEGY = 'MOBILE'

# ── PageSpeed categories requested on every analysis ─────────────────────────
PAGESPEED_CATEGORIES = [
    'PERFORMANCE',
    'ACCESSIBILITY',
    'BEST_PRACTICES',
    'SEO',
]
