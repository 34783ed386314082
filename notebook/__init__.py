"""
Notebook API.

- api/: HTTP endpoints (notes, tags, add-note integration, system, frontend)
- core/: Configuration, logging, database, middleware, text helpers
- models/: SQLAlchemy models (notes, tags, note_tags)
- repositories/: Data access
- schemas/: Pydantic request/response schemas
- services/: Business logic
"""
