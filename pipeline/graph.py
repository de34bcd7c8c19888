from typing import Any, Dict, List, Optional

from langgraph.graph import StateGraph, END
from pipeline.state import ChatState, DetectionFailure, PipelineContext
from pipeline.nodes import (
    process_request,
    node_fetch_image,
    node_upload_image,
    node_predict,
    format_response,
)


def has_image(state):
    """Router: without an image URL, answer with the default prompt."""
    if state.get("image_url") is not None:
        return "fetch_image"
    return "format_response"


def continue_unless_failed(next_node):
    """Router factory: skip to the response once a step recorded a failure."""

    def route(state):
        if isinstance(state.get("outcome"), DetectionFailure):
            return "format_response"
        return next_node

    return route


def build_graph():
    workflow = StateGraph(ChatState)

    # Add all nodes
    workflow.add_node("process_request", process_request)
    workflow.add_node("fetch_image", node_fetch_image)
    workflow.add_node("upload_image", node_upload_image)
    workflow.add_node("predict", node_predict)
    workflow.add_node("format_response", format_response)

    # Set entry point
    workflow.set_entry_point("process_request")

    workflow.add_conditional_edges(
        "process_request",
        has_image,
        {
            "fetch_image": "fetch_image",
            "format_response": "format_response",
        },
    )

    # fetch_image -> upload_image -> predict, each short-circuiting on failure
    workflow.add_conditional_edges(
        "fetch_image",
        continue_unless_failed("upload_image"),
        {
            "upload_image": "upload_image",
            "format_response": "format_response",
        },
    )
    workflow.add_conditional_edges(
        "upload_image",
        continue_unless_failed("predict"),
        {
            "predict": "predict",
            "format_response": "format_response",
        },
    )
    workflow.add_edge("predict", "format_response")

    workflow.add_edge("format_response", END)

    return workflow.compile()


pipeline = build_graph()


def run_pipeline(
    messages: List[Dict[str, Any]],
    images: Optional[List[str]],
    selected_model: Optional[str],
    context: PipelineContext,
) -> str:
    """
    Runs one chat request through the graph and returns the reply text.

    Failures in the detection chain are rendered into the reply, so this
    only raises on programming errors.
    """
    result = pipeline.invoke(
        {
            "messages": messages,
            "images": images,
            "selected_model": selected_model,
            "image_url": None,
            "image_bytes": None,
            "object_key": None,
            "outcome": None,
        },
        config={"configurable": {"context": context}},
    )
    return result["response"]


def detect_image(image_url: str, context: PipelineContext) -> str:
    """Runs only the detection chain for a single image URL."""
    return run_pipeline([], [image_url], None, context)
