"""Domain layer: addresses, dates, and ranks.

This layer depends only on stdlib and pydantic and performs no I/O.
It must never import from services, commands, output, or config.
"""
