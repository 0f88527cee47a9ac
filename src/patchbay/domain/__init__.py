"""Domain layer — discriminators, error taxonomy, and records.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
