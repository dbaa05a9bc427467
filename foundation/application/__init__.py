"""Application layer: use cases orchestrating collaborators."""
