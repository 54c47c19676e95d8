"""
ProFast Backend - Middleware
=============================

Middleware Chain (request direction):
    Request → [Rate Limit] → [Request ID] → [Logging] → [GZip] → [CORS] → Route

Rate limiting runs first so rejected requests cost nothing further; the
request id is assigned before logging so every access line carries it.
"""
