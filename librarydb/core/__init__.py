"""Core utilities: paths, configuration, logging and exceptions."""
