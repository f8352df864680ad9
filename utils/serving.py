"""
===============================================================================
Flue Server Lifecycle
===============================================================================
Runs the Flask app on a threaded WSGI server (one thread per request) and
shuts it down gracefully on SIGINT/SIGTERM: new connections stop being
accepted, then in-flight requests get a bounded grace period to finish.
"""

import logging
import signal
import threading

from werkzeug.serving import make_server
from werkzeug.wsgi import ClosingIterator

from utils.config import FrontendConfig

logger = logging.getLogger(__name__)


class InFlightTracker:
    """WSGI middleware counting requests that have not finished yet."""

    def __init__(self, app):
        self.app = app
        self.active = 0
        self._condition = threading.Condition()

    def __call__(self, environ, start_response):
        self._enter()
        try:
            app_iter = self.app(environ, start_response)
        except BaseException:
            self._exit()
            raise
        return ClosingIterator(app_iter, self._exit)

    def _enter(self):
        with self._condition:
            self.active += 1

    def _exit(self):
        with self._condition:
            self.active -= 1
            if self.active == 0:
                self._condition.notify_all()

    def wait_idle(self, timeout: float) -> bool:
        """Block until no request is active or the timeout expires. Returns True if idle."""
        with self._condition:
            return self._condition.wait_for(lambda: self.active == 0, timeout=timeout)


def serve(app, config: FrontendConfig, stop_event: threading.Event = None) -> bool:
    """
    Serve the app until a shutdown signal arrives or stop_event is set.

    Args:
        app (Flask): The application to serve.
        config (FrontendConfig): Host, port and shutdown grace period.
        stop_event (threading.Event, optional): Set to request shutdown.
            Signal handlers are only installed when this is omitted.

    Returns:
        bool: True if all in-flight requests drained within the grace period.
    """
    tracker = InFlightTracker(app)
    server = make_server(config.host, config.port, tracker, threaded=True)

    if stop_event is None:
        stop_event = threading.Event()

        def _request_stop(signum, frame):
            logger.info("Received %s", signal.Signals(signum).name)
            stop_event.set()

        signal.signal(signal.SIGINT, _request_stop)
        signal.signal(signal.SIGTERM, _request_stop)

    worker = threading.Thread(target=server.serve_forever, name="flue-server", daemon=True)
    worker.start()
    logger.info("Listening on http://%s:%d (backend %s)", config.host, server.port, config.backend_url)

    # Short waits keep the main thread responsive to signals
    while not stop_event.wait(0.5):
        if not worker.is_alive():
            logger.error("Server thread exited unexpectedly")
            break

    logger.info("Shutting down server...")
    server.shutdown()
    drained = tracker.wait_idle(config.shutdown_grace)
    server.server_close()

    if drained:
        logger.info("Server shutdown complete")
    else:
        logger.warning(
            "Shutdown grace period of %.1fs expired with %d request(s) still running",
            config.shutdown_grace,
            tracker.active,
        )
    return drained
