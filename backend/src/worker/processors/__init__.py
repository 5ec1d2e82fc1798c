"""Job processors: dispatch a job message to its handler."""
