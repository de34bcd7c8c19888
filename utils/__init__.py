"""
Helpers for the object-detection chat endpoint.

Contains:
- `stream`    : data-stream record framing for chat replies
- `visualize` : ASCII / Mermaid rendering of the pipeline graph
"""
