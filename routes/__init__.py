"""
===============================================================================
Flue Routes Initialization
===============================================================================
Sets up the Flask Blueprint for the application and imports route handlers.

Blueprint:
- 'routes' — Groups the form page and the generation handler.
"""

from flask import Blueprint

# Initialize the main Blueprint for all endpoints
routes = Blueprint('routes', __name__)

# Import route handlers to register them automatically
from routes.generation import index, generate
