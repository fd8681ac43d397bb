"""Core domain models, configuration and diagnostics."""
