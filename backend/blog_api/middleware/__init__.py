"""
Blog Backend — Middleware Package
==================================

What:  Cross-cutting concerns applied to every request.

Chain (outermost first):
    Request → [Request ID] → [Access Log] → [GZip] → [CORS] → Route Handler

The request id is assigned before the access log line is written, so every
line for a request carries the same id.
"""
