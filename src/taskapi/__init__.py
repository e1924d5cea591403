"""taskapi - task management backend with bearer-token authentication."""
