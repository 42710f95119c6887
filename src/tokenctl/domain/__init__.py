"""Domain layer — token types, collaborators, and the resolution engine.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
