"""Domain layer — value objects, Result, status lifecycle and permission policies.

This layer depends only on stdlib and pydantic.
It must never import from services, config, output, or commands.
"""
