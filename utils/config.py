"""
utils/config.py

🔧 Centralized configuration file for the Flue frontend.

Includes:
- Environment variables (via dotenv)
- Backend endpoint and timeouts
- Validation ranges for generation parameters
- Command-line parsing into a FrontendConfig value
"""

import argparse
import os
from dataclasses import dataclass
from typing import Optional, Sequence

from dotenv import load_dotenv

# ========== Environment Setup ==========
# Load environment variables from .env
load_dotenv()

DEFAULT_HOST = os.getenv("FLUE_HOST", default="0.0.0.0")
DEFAULT_PORT = int(os.getenv("FLUE_PORT", default="8765"))
DEFAULT_BACKEND = os.getenv("FLUE_BACKEND", default="http://localhost:8000")
DEFAULT_SHUTDOWN_GRACE = float(os.getenv("FLUE_SHUTDOWN_GRACE", default="10"))
DEFAULT_REQUEST_TIMEOUT = float(os.getenv("FLUE_REQUEST_TIMEOUT", default="300"))
DEFAULT_LOG_LEVEL = os.getenv("FLUE_LOG_LEVEL", default="INFO").upper()

# ========== Backend API ==========
GENERATION_PATH = "/v1/images/generations"

# ========== Validation Ranges ==========
WIDTH_RANGE = (64, 1024)
HEIGHT_RANGE = (64, 1024)
NUM_STEPS_RANGE = (1, 10)
GUIDANCE_SCALE_RANGE = (0.0, 10.0)
SEED_RANGE = (-(2 ** 63), 2 ** 63 - 1)  # Signed 64-bit, as the backend expects

# ========== Result Formatting ==========
GEN_TIME_PRECISION = 2  # Decimal places reported for generation time

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class FrontendConfig:
    """Runtime configuration, built once at startup and passed to create_app()."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    backend_url: str = DEFAULT_BACKEND
    shutdown_grace: float = DEFAULT_SHUTDOWN_GRACE
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def generation_url(self) -> str:
        """Full URL of the backend generation endpoint."""
        return self.backend_url.rstrip("/") + GENERATION_PATH


# ========== Argument Parsing ==========

def _port(value: str) -> int:
    port = int(value)
    if not 1 <= port <= 65535:
        raise argparse.ArgumentTypeError(f"port must be between 1 and 65535, got {port}")
    return port


def _non_negative(value: str) -> float:
    seconds = float(value)
    if seconds < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {value}")
    return seconds


def _positive(value: str) -> float:
    seconds = float(value)
    if seconds <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return seconds


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flue-frontend",
        description="Web frontend for the Flue image generation backend",
    )
    parser.add_argument("--host", default=DEFAULT_HOST, help="Address to listen on")
    parser.add_argument("--port", type=_port, default=DEFAULT_PORT, help="Port to listen on")
    parser.add_argument("--backend", default=DEFAULT_BACKEND, help="Base URL of the generation backend")
    parser.add_argument(
        "--shutdown-grace",
        type=_non_negative,
        default=DEFAULT_SHUTDOWN_GRACE,
        help="Seconds to let in-flight requests finish on shutdown",
    )
    parser.add_argument(
        "--timeout",
        type=_positive,
        default=DEFAULT_REQUEST_TIMEOUT,
        help="Seconds to wait for the backend before giving up",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=DEFAULT_LOG_LEVEL,
        help="Logging verbosity",
    )
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> FrontendConfig:
    """
    Parse command-line flags into a FrontendConfig.

    Flags override values taken from the environment (or .env file).

    Args:
        argv (sequence of str, optional): Arguments to parse. Defaults to sys.argv[1:].

    Returns:
        FrontendConfig: Immutable configuration for the running server.
    """
    args = build_parser().parse_args(argv)
    return FrontendConfig(
        host=args.host,
        port=args.port,
        backend_url=args.backend,
        shutdown_grace=args.shutdown_grace,
        request_timeout=args.timeout,
        log_level=args.log_level,
    )
