"""
Library API Application Package

A CRUD REST API for authors and their books.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy engine, session management and Base
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection (session, pagination, filters, services)
- errors.py: Error normalization into the uniform error envelope
- exceptions.py: Typed application errors
- middleware.py: Request logging and security headers
- models/: SQLAlchemy ORM models
- schemas/: Pydantic request/response schemas
- routers/: API route handlers
- services/: Business logic and rate limiting
- utils/: Pagination and time helpers
"""

__version__ = "1.0.0"
