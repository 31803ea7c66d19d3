"""
Nice List Backend — API Routes Package
========================================

Route Inventory:
    - people.py:      GET/POST         /api/people
                      GET/PATCH/DELETE /api/people/{id}
    - infractions.py: GET/POST         /api/people/{id}/infractions
    - appeals.py:     POST             /api/appeals
                      GET              /api/appeals/pending
                      PATCH            /api/appeals/{id}/review
    - health.py:      GET              /health

Routes are thin: FastAPI parses path ids and bodies against the schemas,
the handler calls one repository operation and wraps the result. Errors are
raised, never returned, and formatted by the global handlers in main.py.
"""
