from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env if present; don't override OS-provided env vars
load_dotenv(override=False)


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# Object storage (S3 or any S3-compatible endpoint)
AWS_REGION = os.getenv("AWS_REGION", "us-east-1")
S3_BUCKET_NAME = os.getenv("S3_BUCKET_NAME", "uploads")
S3_ENDPOINT = os.getenv("S3_ENDPOINT", "s3.amazonaws.com")
S3_SECURE = _env_bool("S3_SECURE", True)
AWS_ACCESS_KEY_ID = os.getenv("AWS_ACCESS_KEY_ID")
AWS_SECRET_ACCESS_KEY = os.getenv("AWS_SECRET_ACCESS_KEY")

# host:port of the YOLO detection service
YOLO_SERVICE = os.getenv("YOLO_SERVICE", "localhost:8080")

# Seconds, applied to every outbound HTTP call
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "30"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
