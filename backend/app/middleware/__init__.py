"""
StrayLink Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters):
    Request → [Rate Limit] → [Request ID] → [Logging] → [GZip] → [CORS] → Route

    1. Rate Limit first: reject floods before any database work
    2. Request ID: correlation ID for logs and error bodies
    3. Logging: one access line per request with status and duration

Responses travel back through the same chain in reverse.
"""
