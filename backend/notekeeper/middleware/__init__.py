# Middleware package init
"""
NoteKeeper — Middleware Package
=================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → Route Handler

    1. Request ID first: the logger and exception handlers read it
    2. Logging: records status and duration once the response exists
"""
