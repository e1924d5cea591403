"""Application layer - use cases orchestrating the domain.

Import from the subpackages (commands, queries, services, validation)
directly.
"""
