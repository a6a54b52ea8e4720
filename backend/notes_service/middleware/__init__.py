# Middleware package init
"""
Notes Service: Middleware Package
==================================

Middleware Chain:
    Request → [CORS] → [Request ID] → [Logging] → Route Handler

    CORS is outermost so preflight OPTIONS requests are answered before
    anything else runs. The request ID is set before the logging middleware
    reads it.
"""
