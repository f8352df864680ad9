"""
===============================================================================
Flue Generation Endpoints
===============================================================================
Serves the form page and proxies form submissions to the generation backend.

Accepts:
- POST form fields: prompt, width, height, num_steps, guidance_scale, seed (optional)

Returns:
- HTML fragment 'result.html' with the image and generation time, or
- Plain-text error with status 400 (bad input) or 500 (backend failure).
"""

import logging

from flask import current_app, render_template, request

from routes import routes  # Blueprint instance
from utils.validation import parse_generation_form

logger = logging.getLogger(__name__)

# ========== Endpoints ==========

@routes.route('/', methods=['GET'])
def index():
    """
    GET /
    Renders the full page containing the generation form.
    """
    return render_template('index.html', backend_url=current_app.config['FLUE'].backend_url)


@routes.route('/', methods=['POST'])
def generate():
    """
    POST /
    Validates the submitted form, calls the backend once and renders the result fragment.

    ValidationError and BackendError propagate to the app's error handler,
    which turns them into plain-text 400/500 responses.
    """
    generation_request = parse_generation_form(request.form)
    logger.info(
        "Generating %dx%d image, %d steps, guidance %.2f",
        generation_request.width,
        generation_request.height,
        generation_request.num_steps,
        generation_request.guidance_scale,
    )

    result = current_app.extensions['flue_backend'].generate(generation_request)
    return render_template('result.html', **result.to_context())
