"""Domain layer: outcomes, rules, strategies, and policies.

This layer depends only on stdlib and pydantic.
It must never import from engine or config.
"""
