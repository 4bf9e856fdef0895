# Middleware package init
"""
SocialAPI Backend: Middleware Package
=====================================

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

The request id is set before the logging middleware runs, so every access
line and every error envelope carries the same id.
"""
