from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from pipeline.tools import DetectionServiceError, fetch_image, request_prediction


def fake_response(status_code=200, content=b"", json_body=None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.content = content
    response.json.return_value = json_body
    if not response.ok:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Client Error")
    return response


@patch("pipeline.tools.requests.get")
def test_fetch_image_returns_content(mock_get):
    mock_get.return_value = fake_response(content=b"\xff\xd8\xff")
    assert fetch_image.invoke({"url": "http://x/img.jpg", "timeout": 2.0}) == b"\xff\xd8\xff"
    mock_get.assert_called_once_with("http://x/img.jpg", timeout=2.0)


@patch("pipeline.tools.requests.get")
def test_fetch_image_raises_on_http_error(mock_get):
    mock_get.return_value = fake_response(status_code=404)
    with pytest.raises(requests.HTTPError):
        fetch_image.invoke({"url": "http://x/missing.jpg"})


@patch("pipeline.tools.requests.post")
def test_request_prediction_posts_key_as_query(mock_post):
    body = {"detection_count": 1, "labels": ["cat"], "prediction_uid": "u1"}
    mock_post.return_value = fake_response(json_body=body)

    result = request_prediction.invoke(
        {"object_key": "uploads/1-image.jpeg", "service_address": "localhost:8080", "timeout": 3.0}
    )

    assert result == body
    mock_post.assert_called_once_with(
        "http://localhost:8080/predict",
        params={"img": "uploads/1-image.jpeg"},
        timeout=3.0,
    )


@patch("pipeline.tools.requests.post")
def test_request_prediction_non_2xx_raises_with_status(mock_post):
    mock_post.return_value = fake_response(status_code=500)
    with pytest.raises(DetectionServiceError, match="Prediction API error: 500"):
        request_prediction.invoke({"object_key": "uploads/1-image.jpeg", "service_address": "localhost:8080"})
