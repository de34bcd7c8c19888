from __future__ import annotations

import argparse
import logging

import config
from clients.storage import get_storage_client
from pipeline.graph import pipeline
from pipeline.state import PipelineContext
from utils.stream import DataStreamFramer

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def main(argv=None) -> None:
    """
    Run one request through the pipeline against the configured services.

    Prints each node's state delta, then the framed stream records.
    """
    parser = argparse.ArgumentParser(description="Debug the object-detection chat pipeline.")
    parser.add_argument("image_url", nargs="?", help="image to detect objects in")
    args = parser.parse_args(argv)

    context = PipelineContext(
        storage=get_storage_client(),
        service_address=config.YOLO_SERVICE,
        timeout=config.REQUEST_TIMEOUT,
    )
    initial_state = {
        "messages": [{"role": "user", "content": "What is in this image?"}],
        "images": [args.image_url] if args.image_url else [],
        "selected_model": None,
    }

    response = ""
    # Stream: see each node's state delta live
    for step in pipeline.stream(initial_state, config={"configurable": {"context": context}}):
        node = list(step.keys())[0]
        print("\n" + "=" * 40)
        print(f"NODE: {node}")
        delta = {
            key: f"<{len(value)} bytes>" if isinstance(value, bytes) else value
            for key, value in step[node].items()
        }
        print(f"DELTA: {delta}")
        response = step[node].get("response", response)

    print("\n" + "=" * 40)
    for record in DataStreamFramer(response):
        print(record, end="")


if __name__ == "__main__":
    main()
