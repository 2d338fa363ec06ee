"""Domain layer: constraint variants, descriptor maps, translation contracts.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
