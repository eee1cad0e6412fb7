"""Domain layer: auction lifecycle, records, and validation rules.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, api, commands, or config.
"""
