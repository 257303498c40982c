# Routes package init
"""
Notes API — API Routes Package
===============================

Route Inventory:
    - notes.py:   POST   /api/notes          (create)
                  GET    /api/notes          (filtered, sorted, paginated list)
                  GET    /api/notes/{id}     (single note)
                  PUT    /api/notes/{id}     (replace title/content)
                  DELETE /api/notes/{id}     (hard delete)
    - health.py:  GET    /health             (service health check)

Routes stay thin: extract request data, call the service, set status code
and headers. Note rules belong in services.
"""
