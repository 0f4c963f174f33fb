"""
Flask Application Factory

Creates the status endpoint application and the background server that
hosts it.
"""

import logging
import threading
from datetime import datetime

import pytz
from flask import Flask, Response
from werkzeug.serving import make_server

from utils.duration import format_duration

logger = logging.getLogger(__name__)


def get_local_time_now(timezone='Europe/London'):
    """
    Get current time in the display time zone.

    Args:
        timezone (str): pytz time zone name

    Returns:
        datetime: Current time in that zone
    """
    return datetime.now(pytz.timezone(timezone))


def format_status(state, now):
    """
    Render the plain-text status body.

    Args:
        state (AvailabilityState): Snapshot of the last recorded poll
        now (datetime): Current time, timezone-aware

    Returns:
        str: e.g. "available: false last polled 4m3.5s ago \\n\\n(2026-10-19 ...)"
    """
    elapsed = (now - state.last_polled).total_seconds()
    timestamp = now.strftime('%Y-%m-%d %H:%M:%S.%f %z %Z')
    return (
        f"available: {'true' if state.available else 'false'} "
        f"last polled {format_duration(elapsed)} ago \n\n({timestamp})"
    )


def create_app(store, timezone='Europe/London'):
    """Create the status application reading from the given AvailabilityStore."""
    app = Flask(__name__, static_folder=None)

    # Runs before Flask raises routing errors (404, 405, slash redirects),
    # so every method and path gets the status page.
    @app.before_request
    def status():
        """Report the last poll result for any method and path."""
        body = format_status(store.get(), get_local_time_now(timezone))
        return Response(body, status=200, mimetype='text/plain')

    return app


def start_status_server(app, port, host='0.0.0.0'):
    """
    Serve the app from a daemon thread.

    Args:
        app (Flask): Application to serve
        port (int): Listening port
        host (str): Bind address

    Returns:
        BaseWSGIServer: Running server; call shutdown() to stop it
    """
    server = make_server(host, port, app, threaded=True)
    thread = threading.Thread(target=server.serve_forever, name='status-server', daemon=True)
    thread.start()
    logger.info(f"Status server listening on http://{host}:{server.server_port}")
    return server
