"""
Notes API: a small service for short text notes.

Layers, top to bottom:
    routes/    HTTP mapping only (status codes, headers, error bodies)
    services/  validation, the listing query engine, note lifecycle
    models/    SQLAlchemy table; schemas/ the Pydantic wire shapes
    database   engine and per-request sessions
"""

__version__ = "1.0.0"
