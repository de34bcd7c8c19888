from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from api.main import app, get_pipeline_context
from pipeline.state import PipelineContext


class FakeStorage:
    def put_image(self, object_name, data):
        return object_name


@pytest.fixture
def client():
    context = PipelineContext(storage=FakeStorage(), service_address="localhost:8080", timeout=5.0)
    app.dependency_overrides[get_pipeline_context] = lambda: context
    yield TestClient(app)
    app.dependency_overrides.clear()


def decode(body):
    records = [(line[0], json.loads(line[2:])) for line in body.splitlines()]
    content = "".join(payload for tag, payload in records if tag == "0")
    return content, records


def test_chat_without_image_streams_default_prompt(client):
    resp = client.post("/api/chat", json={"messages": [{"role": "user", "content": "hi"}], "selectedModel": "m"})

    assert resp.status_code == 200
    assert resp.headers["content-type"] == "text/plain; charset=utf-8"
    assert resp.headers["x-vercel-ai-data-stream"] == "v1"

    content, records = decode(resp.text)
    assert content == "Please provide an image for object detection."
    assert [tag for tag, _ in records] == ["0", "e", "d"]
    assert records[1][1]["usage"]["completionTokens"] == len(content)


@patch("pipeline.nodes.request_prediction")
@patch("pipeline.nodes.fetch_image")
def test_chat_with_image_streams_detection(mock_fetch, mock_predict, client):
    mock_fetch.invoke.return_value = b"jpeg"
    mock_predict.invoke.return_value = {"detection_count": 2, "labels": ["cat", "dog"], "prediction_uid": "abc123"}

    resp = client.post(
        "/api/chat",
        json={"messages": [], "selectedModel": "m", "data": {"images": ["http://x/img.jpg"]}},
    )

    assert resp.status_code == 200
    content, records = decode(resp.text)
    assert "**Detection Count:** 2" in content
    assert "cat, dog" in content
    assert "abc123" in content
    assert [tag for tag, _ in records[-2:]] == ["e", "d"]


@patch("pipeline.nodes.fetch_image")
def test_chat_pipeline_failure_is_still_200(mock_fetch, client):
    mock_fetch.invoke.side_effect = TimeoutError("timed out")

    resp = client.post("/api/chat", json={"messages": [], "data": {"images": ["http://x/img.jpg"]}})

    assert resp.status_code == 200
    content, _ = decode(resp.text)
    assert content.startswith("❌ **Object Detection Error**")
    assert "timed out" in content


def test_chat_rejects_invalid_body(client):
    resp = client.post("/api/chat", content=b"not json", headers={"content-type": "application/json"})
    assert resp.status_code == 422


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_graph_mermaid_lists_nodes(client):
    mermaid = client.get("/graph/mermaid").json()["mermaid"]
    for node in ("process_request", "fetch_image", "upload_image", "predict", "format_response"):
        assert node in mermaid


def test_graph_ascii_lists_nodes(client):
    resp = client.get("/graph/ascii")
    assert resp.status_code == 200
    diagram = resp.json()["graph"]
    for node in ("process_request", "fetch_image", "upload_image", "predict", "format_response"):
        assert node in diagram
