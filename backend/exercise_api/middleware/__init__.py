# Middleware package init
"""
Exercise API Backend: Middleware Package
=========================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    Request ID runs first so the access log line and any error log emitted
    while handling the request carry the same correlation id.
"""
