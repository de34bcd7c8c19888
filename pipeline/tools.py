from __future__ import annotations

from typing import Any, Dict

import requests
from langchain_core.tools import tool


class DetectionServiceError(RuntimeError):
    """Raised when the detection service answers with a non-2xx status."""


@tool
def fetch_image(url: str, timeout: float = 30.0) -> bytes:
    """
    Downloads an image and returns its raw bytes.

    Args:
        url: Publicly reachable image URL.
        timeout: Seconds before the request is abandoned.

    Returns:
        The response body.
    """
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    return response.content


@tool
def request_prediction(
    object_key: str,
    service_address: str,
    timeout: float = 30.0,
) -> Dict[str, Any]:
    """
    Asks the YOLO detection service to run on an uploaded image.

    Args:
        object_key: Storage key of the uploaded image, e.g. "uploads/1700000000000-image.jpeg".
        service_address: host:port of the detection service.
        timeout: Seconds before the request is abandoned.

    Returns:
        The decoded JSON body, with keys:
            - detection_count : number of detections
            - labels          : detected class names
            - prediction_uid  : identifier of the stored prediction
    """
    response = requests.post(
        f"http://{service_address}/predict",
        params={"img": object_key},
        timeout=timeout,
    )
    if not response.ok:
        raise DetectionServiceError(f"Prediction API error: {response.status_code}")
    return response.json()
