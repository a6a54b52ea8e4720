# Routes package init
"""
Notes Service: API Routes Package
==================================

Route Inventory:
    - notes.py:   GET  /api/notes   (newest 100 notes)
                  POST /api/notes   (create a note)
    - health.py:  GET  /health      (liveness)
                  GET  /ready       (readiness, SELECT 1)

Routes stay thin: read the request, call NoteService, return the result.
"""
