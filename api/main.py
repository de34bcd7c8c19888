"""FastAPI layer for the object-detection chat endpoint."""

from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse

import config
from api.schemas import ChatRequest, HealthResponse
from clients.storage import get_storage_client
from pipeline.graph import run_pipeline
from pipeline.state import PipelineContext
from utils.stream import (
    STREAM_MEDIA_TYPE,
    STREAM_PROTOCOL_HEADER,
    STREAM_PROTOCOL_VERSION,
    DataStreamFramer,
)
from utils.visualize import render_ascii, render_mermaid

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
log = logging.getLogger(__name__)

app = FastAPI(
    title="Object Detection Chat",
    version="1.0.0",
    description="Chat endpoint that runs uploaded images through a YOLO detection service.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache(maxsize=1)
def get_pipeline_context() -> PipelineContext:
    """
    Builds the shared storage client and service settings once per process.
    """
    log.info(
        "Storage bucket=%s endpoint=%s, detection service=%s",
        config.S3_BUCKET_NAME,
        config.S3_ENDPOINT,
        config.YOLO_SERVICE,
    )
    return PipelineContext(
        storage=get_storage_client(),
        service_address=config.YOLO_SERVICE,
        timeout=config.REQUEST_TIMEOUT,
    )


@app.post("/api/chat")
def chat(request: ChatRequest, context: PipelineContext = Depends(get_pipeline_context)):
    """
    Run the detection pipeline and stream the reply as data-stream records.
    """
    message = run_pipeline(
        messages=request.messages,
        images=request.images,
        selected_model=request.selectedModel,
        context=context,
    )

    return StreamingResponse(
        DataStreamFramer(message),
        media_type=STREAM_MEDIA_TYPE,
        headers={STREAM_PROTOCOL_HEADER: STREAM_PROTOCOL_VERSION},
    )


@app.get("/graph/ascii")
def graph_ascii():
    """
    Return an ASCII representation of the pipeline graph.
    """
    return {"graph": render_ascii()}


@app.get("/graph/mermaid")
def graph_mermaid():
    """
    Return Mermaid source for visualizing the pipeline graph.
    """
    return {"mermaid": render_mermaid()}


@app.get("/health", response_model=HealthResponse)
def health():
    """
    Basic health check.
    """
    return {"status": "ok"}
