# Routes package init
"""
Noteful Backend — API Routes Package
======================================

What:  HTTP route handlers, one module per resource.
How:   Each module exposes a `create_*_router(...)` factory that receives its
       dependency (a store or the Database) and returns an APIRouter.

Route Inventory:
    - notes.py:    GET/POST       /notes
                   GET/PATCH/DELETE /notes/{id}
    - folders.py:  GET/POST       /folders
                   GET/PATCH/DELETE /folders/{id}
                   GET            /folders/{id}/notes
    - health.py:   GET            /health

Design Principle:
    Routes handle HTTP concerns only: parse the body, run the validation
    layer, call the store, pick the status code and headers. Errors are
    raised, never formatted here; main.py's exception handlers shape them.
"""
