# Middleware package init
"""
FileRelay: Middleware Package
===============================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    - Request ID: correlation ID in a ContextVar + X-Request-ID header
    - Logging: one access line per request with status and duration
"""
