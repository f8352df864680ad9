"""
===============================================================================
Flue Frontend Web Application Entry Point
===============================================================================
Builds the Flask app from an explicit FrontendConfig, registers routes,
error handlers and request logging, and runs the server from the command line.

Note:
- main() serves through utils.serving, which drains in-flight requests on
  SIGINT/SIGTERM before exiting.
"""

import logging
import sys
from typing import Optional

from flask import Flask, request
from werkzeug.exceptions import HTTPException

from routes import routes  # Import application routes (Blueprint)
from utils.backend_client import BackendClient
from utils.config import FrontendConfig, parse_args
from utils.errors import FrontendError
from utils.logging_config import setup_logging
from utils.serving import serve

logger = logging.getLogger(__name__)


def _plain_text(message, status_code):
    return message, status_code, {'Content-Type': 'text/plain; charset=utf-8'}


def create_app(config: Optional[FrontendConfig] = None) -> Flask:
    """
    Application factory.

    Args:
        config (FrontendConfig, optional): Runtime configuration. Defaults are
            taken from the environment when omitted.

    Returns:
        Flask: Configured application with the backend client attached.
    """
    if config is None:
        config = FrontendConfig()

    app = Flask(__name__)
    app.config['FLUE'] = config
    app.extensions['flue_backend'] = BackendClient(config.generation_url, config.request_timeout)

    # Register routes from the routes Blueprint
    app.register_blueprint(routes)

    @app.errorhandler(FrontendError)
    def handle_frontend_error(error):
        if error.status_code < 500:
            logger.warning("Rejected request: %s", error.message)
        return _plain_text(error.message, error.status_code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        # Routing errors (404, 405) keep their own status
        if isinstance(error, HTTPException):
            return error
        logger.exception("Unhandled error while serving %s", request.path)
        return _plain_text("Internal Server Error", 500)

    @app.after_request
    def log_request(response):
        if response.status_code >= 500:
            log = logger.error
            event = "REQUEST_ERROR"
        else:
            log = logger.info
            event = "REQUEST"
        log(
            "%s client=%s method=%s uri=%s status=%d",
            event,
            request.remote_addr,
            request.method,
            request.full_path.rstrip('?'),
            response.status_code,
        )
        return response

    return app


def main(argv=None) -> int:
    """
    Console entry point: parse flags, configure logging and serve until signalled.
    """
    config = parse_args(argv)
    setup_logging(config.log_level)
    app = create_app(config)
    try:
        drained = serve(app, config)
    except OSError as e:
        logger.error("Failed to start server on %s:%d: %s", config.host, config.port, e)
        return 1
    return 0 if drained else 1


if __name__ == "__main__":
    sys.exit(main())
