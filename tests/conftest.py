import json
import os
import sys
from unittest.mock import MagicMock, patch

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from app import create_app
from utils.config import FrontendConfig

BACKEND_URL = "http://flue-backend.test:8000"


def make_backend_response(payload=None, status_code=200, content=None):
    """Fake streamed requests.Response usable as a context manager."""
    response = MagicMock()
    response.__enter__.return_value = response
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    if content is None:
        content = json.dumps(payload).encode()
    response.content = content
    return response


@pytest.fixture()
def config():
    return FrontendConfig(host="127.0.0.1", port=8765, backend_url=BACKEND_URL, request_timeout=30)


@pytest.fixture()
def app(config):
    app = create_app(config)
    app.config.update(TESTING=True)
    return app


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def sample_form():
    return {
        "prompt": "cat",
        "width": "512",
        "height": "384",
        "num_steps": "4",
        "guidance_scale": "0.0",
    }


@pytest.fixture()
def mock_post():
    with patch('utils.backend_client.requests.post') as mock:
        mock.return_value = make_backend_response({"image": "data:image/png;base64,iVBORw0KGgo="})
        yield mock
