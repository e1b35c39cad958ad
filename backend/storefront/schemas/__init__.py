"""
Pydantic request/response schemas.

Schemas are separate from the SQLAlchemy models: they define exactly what the
API accepts and exposes (password hashes never leave the service layer) and
FastAPI generates the OpenAPI document from them.
"""
