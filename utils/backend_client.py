"""
===============================================================================
Flue Backend Client
===============================================================================
Forwards a validated GenerationRequest to the image generation backend and
turns its reply into a GenerationResult.

Handles:
- JSON encoding of the request payload
- A single POST to the generation endpoint (no retries)
- Timing the call from just before sending until the body is fully read
- Mapping every failure onto a distinct BackendError
"""

import json
import logging
import math
import time
from dataclasses import dataclass
from typing import Any, Dict

import requests

from utils.config import GEN_TIME_PRECISION
from utils.errors import BackendError
from utils.validation import GenerationRequest

logger = logging.getLogger(__name__)

# ========== Data Model ==========

@dataclass(frozen=True)
class GenerationResult:
    """Backend image plus the wall time the frontend spent waiting for it."""

    image: Any
    gen_time: float

    def to_context(self) -> Dict[str, Any]:
        """Template context for result.html."""
        return {"image": self.image, "gen_time": self.gen_time}

# ========== Helper Functions ==========

def round_half_away_from_zero(value: float, precision: int = GEN_TIME_PRECISION) -> float:
    """
    Round to a fixed number of decimals, sending halves away from zero.

    Python's round() rounds halves to even, so 0.125 would become 0.12;
    here it becomes 0.13.

    Args:
        value (float): Number to round.
        precision (int): Decimal places to keep.

    Returns:
        float: Rounded value.
    """
    ratio = 10 ** precision
    return math.copysign(math.floor(abs(value) * ratio + 0.5), value) / ratio

# ========== Client ==========

class BackendClient:
    """Synchronous client for the backend's /v1/images/generations endpoint."""

    def __init__(self, generation_url: str, timeout: float, clock=time.perf_counter):
        self.generation_url = generation_url
        self.timeout = timeout
        self.clock = clock

    def generate(self, generation_request: GenerationRequest) -> GenerationResult:
        """
        Call the backend once and assemble the result.

        Args:
            generation_request (GenerationRequest): Validated parameters.

        Returns:
            GenerationResult: Image passed through verbatim and rounded elapsed time.

        Raises:
            BackendError: If encoding, the call, reading or parsing fails.
        """
        try:
            body = json.dumps(generation_request.to_payload(), allow_nan=False)
        except (TypeError, ValueError) as e:
            logger.error("Failed to encode payload: %s", e)
            raise BackendError("Failed to encode JSON") from e

        start = self.clock()
        try:
            response = requests.post(
                self.generation_url,
                data=body,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
                stream=True,
            )
        except requests.exceptions.RequestException as e:
            logger.error("Backend request to %s failed: %s", self.generation_url, e)
            raise BackendError("Failed to call backend") from e

        with response:
            if not response.ok:
                logger.error("Backend returned HTTP %s", response.status_code)
                raise BackendError("Failed to call backend")
            try:
                content = response.content
            except requests.exceptions.RequestException as e:
                logger.error("Failed to read backend response: %s", e)
                raise BackendError("Failed to read response") from e
            elapsed = self.clock() - start

        try:
            result = json.loads(content)
        except ValueError as e:
            logger.error("Backend returned malformed JSON: %s", e)
            raise BackendError("Failed to parse JSON response") from e

        if not isinstance(result, dict) or "image" not in result:
            logger.error("Backend response has no 'image' field")
            raise BackendError("Failed to parse JSON response")

        gen_time = round_half_away_from_zero(elapsed)
        logger.info("Backend generated image in %.2fs", gen_time)
        return GenerationResult(image=result["image"], gen_time=gen_time)
