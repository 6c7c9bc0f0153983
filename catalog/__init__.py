"""
Local Library Catalog Package

Server-rendered catalog of authors, genres, books and book copies.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: Async SQLAlchemy engine and session factory
- exceptions.py: Domain exceptions mapped to HTTP responses
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions
- templating.py: Jinja2 template rendering
- models/: SQLAlchemy ORM models with derived display fields
- schemas/: Pydantic form schemas (validation/sanitization rules)
- services/: Entity store, form validation and view aggregation
- routers/: HTML route handlers
"""

__version__ = "0.1.0"
