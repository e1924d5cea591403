"""REST API built with FastAPI."""
