"""Infrastructure for reaching the completion service."""
