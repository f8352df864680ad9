"""
===============================================================================
Flue Generation Request Validation
===============================================================================
Turns a submitted form into a typed, range-checked GenerationRequest.

Fields are checked in a fixed order (prompt, width, height, num_steps,
guidance_scale, seed) and the first failure is raised immediately, so later
fields are never inspected once an earlier one is invalid.
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from utils.config import (
    WIDTH_RANGE,
    HEIGHT_RANGE,
    NUM_STEPS_RANGE,
    GUIDANCE_SCALE_RANGE,
    SEED_RANGE,
)
from utils.errors import ValidationError

# ========== Data Model ==========

@dataclass(frozen=True)
class GenerationRequest:
    """Validated generation parameters for a single form submission."""

    prompt: str
    width: int
    height: int
    num_steps: int
    guidance_scale: float
    seed: Optional[int] = None

    def to_payload(self) -> Dict[str, Any]:
        """
        Build the JSON body expected by the backend.

        The 'seed' key is only present when a seed was supplied; leaving it
        out lets the backend pick one.

        Returns:
            dict: {prompt, width, height, steps, guidance[, seed]}
        """
        payload = {
            "prompt": self.prompt,
            "width": self.width,
            "height": self.height,
            "steps": self.num_steps,
            "guidance": self.guidance_scale,
        }
        if self.seed is not None:
            payload["seed"] = self.seed
        return payload

# ========== Field Parsers ==========

# ASCII digits only: no surrounding spaces, underscores, leading "+" or Unicode digits
INTEGER_PATTERN = re.compile(r"-?[0-9]+")
DECIMAL_PATTERN = re.compile(r"-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def _parse_int(raw: Optional[str], label: str, bounds: tuple) -> int:
    if raw is None or not INTEGER_PATTERN.fullmatch(raw):
        raise ValidationError(f"Invalid {label}: must be an integer")
    value = int(raw)

    low, high = bounds
    if not low <= value <= high:
        raise ValidationError(f"Invalid {label}: must be between {low} and {high}")
    return value


def _parse_float(raw: Optional[str], label: str, bounds: tuple) -> float:
    if raw is None or not DECIMAL_PATTERN.fullmatch(raw):
        raise ValidationError(f"Invalid {label}: must be a number")
    value = float(raw)

    low, high = bounds
    # Exponents like 1e400 overflow to infinity
    if not (math.isfinite(value) and low <= value <= high):
        raise ValidationError(f"Invalid {label}: must be between {low} and {high}")
    return value


def parse_generation_form(form: Mapping[str, str]) -> GenerationRequest:
    """
    Validate a submitted form and build a GenerationRequest.

    Args:
        form (Mapping): Form fields, e.g. flask.request.form.

    Returns:
        GenerationRequest: The typed, range-checked parameters.

    Raises:
        ValidationError: On the first missing, malformed or out-of-range field.
    """
    prompt = form.get("prompt", "")
    if not prompt:
        raise ValidationError("Prompt is required")

    width = _parse_int(form.get("width"), "width", WIDTH_RANGE)
    height = _parse_int(form.get("height"), "height", HEIGHT_RANGE)
    num_steps = _parse_int(form.get("num_steps"), "number of steps", NUM_STEPS_RANGE)
    guidance_scale = _parse_float(form.get("guidance_scale"), "guidance scale", GUIDANCE_SCALE_RANGE)

    seed = None
    raw_seed = form.get("seed", "")
    if raw_seed:
        seed = _parse_int(raw_seed, "seed", SEED_RANGE)

    return GenerationRequest(
        prompt=prompt,
        width=width,
        height=height,
        num_steps=num_steps,
        guidance_scale=guidance_scale,
        seed=seed,
    )
