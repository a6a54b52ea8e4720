# Services package init
"""
Notes Service: Services Layer
==============================

Business logic between routes (HTTP) and the database (persistence).

Service Inventory:
    - NoteService: create/list notes and the readiness probe
"""
