"""Domain layer: the soft-ASCII char, view and owned string types.

This layer depends only on stdlib and pydantic.
It must never import from config.
"""
