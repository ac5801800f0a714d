"""
models/answer.py
----------------
Domain model for answers to questions.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Answer:
    """
    Represents a single answer.

    Attributes:
        question_id: ID of the question being answered.
        author_id: ID of the user who wrote the answer.
        content: The answer text.
        id: Generated identifier, from a sequence independent of questions.
        accepted: Set by the question's author; several answers may be accepted.
    """
    question_id: str
    author_id: str
    content: str = ""
    id: str = ""
    accepted: bool = False
