"""
Pipeline package for the object-detection chat endpoint.

Contains:
- `state`  : Typed `ChatState`, detection outcomes and `PipelineContext`
- `tools`  : LangChain tools wrapping the image fetch and detection calls
- `nodes`  : LangGraph node callables operating over `ChatState`
- `graph`  : StateGraph builder, compiled `pipeline` and `run_pipeline`
"""
