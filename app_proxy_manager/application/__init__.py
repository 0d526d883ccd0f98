"""Application layer - use cases orchestrating the directory ports."""
