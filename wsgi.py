"""
WSGI entry point — used by gunicorn in Procfile.

Owns the database lifecycle: the pool is disposed once at process exit.
"""
import atexit

from leadcheck import create_app
from leadcheck.database import DatabaseLifecycle

app = create_app()

lifecycle = DatabaseLifecycle()
atexit.register(lifecycle.shutdown)

if __name__ == '__main__':
    from leadcheck.config import PORT
    app.run(host='0.0.0.0', port=PORT)
