"""
Nice List Backend — Middleware Package
========================================

Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: assign a correlation ID before anything logs
    2. Logging: log method, path, status and duration with that ID
"""
