"""
FastAPI API package for the object-detection chat endpoint.

Exposes:
- `main` : FastAPI application with `/api/chat` and graph/health endpoints.
"""
