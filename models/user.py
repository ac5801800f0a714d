"""
models/user.py
--------------
Domain model for platform users.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    """
    A registered user; the root of every authorship reference.

    Attributes:
        id: Generated identifier (empty for records not yet stored).
        name: Display name. Not unique.
    """
    name: str
    id: str = ""

    def __str__(self) -> str:
        return f"user:{self.id} ({self.name})"
