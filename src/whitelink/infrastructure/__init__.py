"""Infrastructure layer: link table file, per-member locks, RCON command executor.

This layer depends on stdlib, pydantic models from the domain layer, and
the config models. It must never import from services, commands, or output.
"""
