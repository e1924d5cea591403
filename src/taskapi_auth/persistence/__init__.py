"""Persistence implementations for taskapi_auth.

This package contains database-specific implementations of the
repository interfaces defined in taskapi_auth.repositories.

Structure:
    persistence/
    └── sqlalchemy/     # SQLAlchemy/SQL database implementation
"""
