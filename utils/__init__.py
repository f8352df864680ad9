"""
===============================================================================
Flue Utilities Initialization
===============================================================================
Exposes core utility modules for the frontend:
- Configuration and command-line parsing
- Form validation
- Backend client
- Server lifecycle
"""

# Configuration
from .config import (
    FrontendConfig,
    parse_args,
    GENERATION_PATH,
)

# Errors
from .errors import (
    FrontendError,
    ValidationError,
    BackendError,
)

# Validation
from .validation import (
    GenerationRequest,
    parse_generation_form,
)

# Backend Client
from .backend_client import (
    BackendClient,
    GenerationResult,
    round_half_away_from_zero,
)

# Exports
__all__ = [
    # config
    "FrontendConfig", "parse_args", "GENERATION_PATH",

    # errors
    "FrontendError", "ValidationError", "BackendError",

    # validation
    "GenerationRequest", "parse_generation_form",

    # backend_client
    "BackendClient", "GenerationResult", "round_half_away_from_zero",
]
