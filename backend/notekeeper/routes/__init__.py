# Routes package init
"""
NoteKeeper — API Routes Package
=================================

Route Inventory:
    - notes.py:   POST|GET|PUT|DELETE /note   (one path, method-routed)
    - health.py:  GET /health                 (service health check)

Routes stay THIN: they read the method, query string and body, call
NoteService, and encode the response. Business logic lives in services.
"""
