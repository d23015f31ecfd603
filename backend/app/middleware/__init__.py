# Middleware package init
"""
Bloggy Backend — Middleware Package
=====================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: Generate correlation ID for logging and error envelopes
    2. Logging: Log request details with the generated request ID
    3. GZip / CORS: FastAPI's built-in middleware
"""
