"""
models/vote.py
--------------
Domain model for question votes.
"""

from dataclasses import dataclass
from enum import Enum


class VoteType(str, Enum):
    """Direction of a vote."""
    UP = "UP"
    DOWN = "DOWN"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Vote:
    """
    A single user's vote on a question. At most one exists per
    (user_id, question_id) pair.
    """
    user_id: str
    question_id: str
    type: VoteType
