"""Process-wide collaborators: configuration and database."""
