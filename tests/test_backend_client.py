import json
from unittest.mock import PropertyMock

import pytest
import requests

from conftest import BACKEND_URL, make_backend_response
from utils.backend_client import BackendClient, GenerationResult, round_half_away_from_zero
from utils.errors import BackendError
from utils.validation import GenerationRequest

GENERATION_URL = BACKEND_URL + "/v1/images/generations"


@pytest.fixture()
def backend():
    return BackendClient(GENERATION_URL, timeout=30)


@pytest.fixture()
def generation_request():
    return GenerationRequest(prompt="cat", width=512, height=384, num_steps=4, guidance_scale=2.5, seed=42)


@pytest.mark.parametrize("value, expected", [
    (1.2349, 1.23),
    (1.2351, 1.24),
    (0.125, 0.13),
    (0.0, 0.0),
    (-0.125, -0.13),
])
def test_round_half_away_from_zero(value, expected):
    assert round_half_away_from_zero(value) == expected


def test_generate_posts_json_payload(backend, generation_request, mock_post):
    result = backend.generate(generation_request)

    mock_post.assert_called_once()
    args, kwargs = mock_post.call_args
    assert args == (GENERATION_URL,)
    assert kwargs["headers"] == {"Content-Type": "application/json"}
    assert kwargs["timeout"] == 30
    assert json.loads(kwargs["data"]) == {
        "prompt": "cat", "width": 512, "height": 384, "steps": 4, "guidance": 2.5, "seed": 42,
    }

    assert isinstance(result, GenerationResult)
    assert result.image == "data:image/png;base64,iVBORw0KGgo="
    assert 0.0 <= result.gen_time <= 0.1


def test_image_is_passed_through_verbatim(backend, generation_request, mock_post):
    mock_post.return_value = make_backend_response({"image": ["not", "a", "string"], "extra": 1})

    result = backend.generate(generation_request)

    assert result.image == ["not", "a", "string"]


def test_generation_time_is_rounded(generation_request, mock_post):
    ticks = iter([100.0, 101.2351])
    backend = BackendClient(GENERATION_URL, timeout=30, clock=lambda: next(ticks))

    result = backend.generate(generation_request)

    assert result.gen_time == 1.24


def test_connection_failure(backend, generation_request, mock_post):
    mock_post.side_effect = requests.exceptions.ConnectionError("refused")

    with pytest.raises(BackendError, match="Failed to call backend"):
        backend.generate(generation_request)


def test_timeout_is_a_call_failure(backend, generation_request, mock_post):
    mock_post.side_effect = requests.exceptions.Timeout("slow")

    with pytest.raises(BackendError, match="Failed to call backend"):
        backend.generate(generation_request)


def test_non_2xx_status(backend, generation_request, mock_post):
    response = make_backend_response({"image": "ignored"}, status_code=503)
    mock_post.return_value = response

    with pytest.raises(BackendError, match="Failed to call backend"):
        backend.generate(generation_request)

    response.__exit__.assert_called_once()


def test_read_failure(backend, generation_request, mock_post):
    response = make_backend_response(content=b"")
    type(response).content = PropertyMock(side_effect=requests.exceptions.ChunkedEncodingError("cut"))
    mock_post.return_value = response

    with pytest.raises(BackendError, match="Failed to read response"):
        backend.generate(generation_request)

    response.__exit__.assert_called_once()


@pytest.mark.parametrize("content", [
    b"<html>oops</html>",
    b"",
    b"[1, 2, 3]",
    b'{"url": "missing image key"}',
])
def test_malformed_response(backend, generation_request, mock_post, content):
    response = make_backend_response(content=content)
    mock_post.return_value = response

    with pytest.raises(BackendError, match="Failed to parse JSON response"):
        backend.generate(generation_request)

    response.__exit__.assert_called_once()


def test_response_is_released_on_success(backend, generation_request, mock_post):
    backend.generate(generation_request)

    mock_post.return_value.__exit__.assert_called_once()


def test_unencodable_payload(backend, mock_post):
    generation_request = GenerationRequest(
        prompt="cat", width=512, height=512, num_steps=4, guidance_scale=float("inf")
    )

    with pytest.raises(BackendError, match="Failed to encode JSON") as exc_info:
        backend.generate(generation_request)

    assert exc_info.value.status_code == 500
    mock_post.assert_not_called()
