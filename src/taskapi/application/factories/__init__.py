"""Application factories for repository access."""

from taskapi.application.factories.repository_factory import RepositoryFactory

__all__ = ["RepositoryFactory"]
