"""Marketplace user roles carried in access token role claims."""

from enum import Enum


class UserRole(str, Enum):
    """Roles a marketplace account can hold.

    String enum so values serialize directly into the ``roles`` claim.
    """

    CUSTOMER = "customer"
    VENDOR = "vendor"
    ADMIN = "admin"

    @classmethod
    def values(cls) -> list[str]:
        """Get all role values as strings."""
        return [role.value for role in cls]
