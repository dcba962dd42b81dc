"""Service layer: user-facing operations returning ServiceResult.

Services import from domain and config only. They must never import
from commands or output.
"""
