"""Capability verification for oracle access control"""

from .verify import verify_owner, verify_validator

__all__ = ["verify_owner", "verify_validator"]
