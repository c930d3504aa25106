"""Content management and discovery API for video programs."""
