# Middleware package init
"""
Portfolio Backend: Middleware Package
======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first: every later log line can be correlated
    2. Logging: one access line per request, tagged with the request ID
    3. GZip / CORS: FastAPI's built-in middleware

"""
