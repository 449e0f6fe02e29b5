"""
Product Catalog Backend — Middleware Package
==============================================

Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID first: every later log line can carry the correlation ID
    2. Logging: records method, URL, status and duration of the response
    3. CORS: FastAPI's CORSMiddleware (handles preflight)
"""
