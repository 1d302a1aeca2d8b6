# Middleware package init
"""
Noteful Backend — Middleware Package
=====================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Access Log] → [CORS] → Route Handler

    1. Request ID first: every log line of the request can carry it
    2. Access log: records method, path, status and duration with the ID
    3. CORS: FastAPI's CORSMiddleware (handles browser preflight)
"""
