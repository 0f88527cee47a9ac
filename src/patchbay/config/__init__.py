"""Configuration — TOML models, settings sources, and logging."""
