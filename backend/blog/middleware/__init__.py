# Middleware package init
"""
Blog API — Middleware Package
===============================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: generate the correlation ID first
    2. Logging: log method, path, status, duration with that ID
    3. CORS: FastAPI's CORSMiddleware (handles preflight, all origins by default)

Responses unwind in reverse, so the X-Request-ID header is set last.
"""
