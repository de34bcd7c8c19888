from __future__ import annotations

import logging
import time
from typing import Any, Dict

from langchain_core.runnables import RunnableConfig

from pipeline.state import (
    ChatState,
    DetectionFailure,
    DetectionResult,
    PipelineContext,
)
from pipeline.tools import fetch_image, request_prediction

log = logging.getLogger(__name__)

ATTACHMENTS_FIELD = "experimental_attachments"
DEFAULT_PROMPT = "Please provide an image for object detection."
UNKNOWN_ERROR = "Unknown error"


def get_context(config: RunnableConfig) -> PipelineContext:
    return config["configurable"]["context"]


def make_object_key() -> str:
    """Storage key derived from the current epoch time in milliseconds."""
    return f"uploads/{int(time.time() * 1000)}-image.jpeg"


def _failure(exc: Exception) -> DetectionFailure:
    return DetectionFailure(error=str(exc) or UNKNOWN_ERROR)


def format_detection_message(result: DetectionResult) -> str:
    labels = ", ".join(result.labels)
    return (
        "🔍 **Object Detection Results**\n"
        "\n"
        f"**Detection Count:** {result.detection_count}\n"
        f"**Detected Objects:** {labels}\n"
        f"**Prediction ID:** {result.prediction_uid}\n"
        "\n"
        f"I've analyzed your image and detected {result.detection_count} object(s). "
        f"The detected objects include: {labels}."
    )


def format_error_message(error: str, service_address: str) -> str:
    return (
        "❌ **Object Detection Error**\n"
        "\n"
        f"Sorry, I encountered an error while processing your image: {error or UNKNOWN_ERROR}\n"
        "\n"
        f"Please make sure the object detection service is running on {service_address}."
    )


def process_request(state: ChatState) -> Dict[str, Any]:
    """Drops attachment fields from the conversation and picks the first image URL."""
    messages = state.get("messages") or []
    cleaned = [
        {key: value for key, value in message.items() if key != ATTACHMENTS_FIELD}
        if isinstance(message, dict)
        else message
        for message in messages
    ]

    images = state.get("images") or []
    image_url = images[0] if images else None

    log.info(
        "[REQUEST] %d messages, model=%s, image=%s",
        len(cleaned),
        state.get("selected_model"),
        image_url,
    )
    return {"messages": cleaned, "image_url": image_url}


def node_fetch_image(state: ChatState, config: RunnableConfig) -> Dict[str, Any]:
    """Node wrapper around the image download tool."""
    context = get_context(config)
    image_url = state["image_url"]
    log.info("[FETCH] %s", image_url)

    try:
        image_bytes = fetch_image.invoke({"url": image_url, "timeout": context.timeout})
        log.info("[FETCH] %d bytes", len(image_bytes))
        return {"image_bytes": image_bytes}
    except Exception as e:
        log.exception("[FETCH] Object detection error: %s", e)
        return {"outcome": _failure(e)}


def node_upload_image(state: ChatState, config: RunnableConfig) -> Dict[str, Any]:
    """Persists the downloaded image to object storage."""
    context = get_context(config)
    object_key = make_object_key()
    log.info("[UPLOAD] key=%s", object_key)

    try:
        context.storage.put_image(object_key, state["image_bytes"])
        return {"object_key": object_key}
    except Exception as e:
        log.exception("[UPLOAD] Object detection error: %s", e)
        return {"outcome": _failure(e)}


def node_predict(state: ChatState, config: RunnableConfig) -> Dict[str, Any]:
    """Node wrapper around the detection service call."""
    context = get_context(config)
    log.info("[PREDICT] %s via %s", state["object_key"], context.service_address)

    try:
        payload = request_prediction.invoke(
            {
                "object_key": state["object_key"],
                "service_address": context.service_address,
                "timeout": context.timeout,
            }
        )
        result = DetectionResult.model_validate(payload)
        log.info("[PREDICT] %d objects: %s", result.detection_count, result.labels)
        return {"outcome": result}
    except Exception as e:
        log.exception("[PREDICT] Object detection error: %s", e)
        return {"outcome": _failure(e)}


def format_response(state: ChatState, config: RunnableConfig) -> Dict[str, Any]:
    """Turns the detection outcome into the chat reply."""
    outcome = state.get("outcome")

    if outcome is None:
        return {"response": DEFAULT_PROMPT}
    if isinstance(outcome, DetectionFailure):
        return {"response": format_error_message(outcome.error, get_context(config).service_address)}
    return {"response": format_detection_message(outcome)}
