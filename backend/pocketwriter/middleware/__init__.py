# Middleware package init
"""
Pocket Writer Backend — Middleware Package
===========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Request ID wraps Logging so every access line carries the correlation
    id, and the id is echoed back in the X-Request-ID response header.
"""
