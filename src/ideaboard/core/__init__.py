"""Core configuration, errors, validation and security helpers."""
