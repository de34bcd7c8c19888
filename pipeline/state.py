from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, TypedDict, Union

from pydantic import BaseModel, ConfigDict

from clients.storage import StorageClient


class DetectionResult(BaseModel):
    """Payload returned by the detection service's `/predict` endpoint."""

    # Numeric prediction ids are rendered as text
    model_config = ConfigDict(coerce_numbers_to_str=True)

    detection_count: int
    labels: List[str]
    prediction_uid: str


@dataclass(frozen=True)
class DetectionFailure:
    """Error detail recorded when any step of the detection chain fails."""

    error: str


DetectionOutcome = Union[DetectionResult, DetectionFailure]


@dataclass(frozen=True)
class PipelineContext:
    """
    Long-lived collaborators injected into every pipeline run.

    Passed through the graph config as `configurable["context"]`.
    """

    storage: StorageClient
    service_address: str
    timeout: float = 30.0


class ChatState(TypedDict, total=False):
    """
    Shared state passed between LangGraph nodes for one chat request.
    """

    # Request input
    messages: List[Dict[str, Any]]  # open-ended message records
    images: Optional[List[str]]  # auxiliary image URLs
    selected_model: Optional[str]  # passed through, unused

    # Set by process_request
    image_url: Optional[str]

    # Detection chain
    image_bytes: Optional[bytes]
    object_key: Optional[str]
    outcome: Optional[DetectionOutcome]  # result or failure, None without image

    # Final chat reply
    response: str
