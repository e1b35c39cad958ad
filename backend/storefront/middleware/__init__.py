"""
Storefront Backend — Middleware Package
=========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [GZip] → [Scoped CORS] → Router

    1. Request ID first: every later log line carries the correlation ID
    2. Logging: measures the full duration including compression
    3. GZip: compresses responses of 500 bytes and more
    4. Scoped CORS: /store and /admin each answer with their own allowed
       origins; preflight requests are handled here and never reach routes

    Responses travel the chain in reverse, so X-Request-ID is attached last.
"""
