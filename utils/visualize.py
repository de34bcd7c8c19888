from __future__ import annotations

from pipeline.graph import pipeline


def render_ascii() -> str:
    """ASCII diagram of the chat pipeline graph."""
    return pipeline.get_graph().draw_ascii()


def render_mermaid() -> str:
    """Raw Mermaid diagram code (for mermaid.live etc.)."""
    return pipeline.get_graph().draw_mermaid()


if __name__ == "__main__":
    print(render_ascii())
    print(render_mermaid())
