"""
repositories/errors.py
----------------------
Typed failures raised by every repository implementation.
Callers map these onto their own protocol (e.g. HTTP 404/403/409).
"""

from models.vote import VoteType


class DAOError(Exception):
    """Base class for all data-access failures."""


# ── Not found ─────────────────────────────────────────────

class NotFoundError(DAOError):
    """A referenced record does not exist."""

    kind = "record"

    def __init__(self, record_id: str):
        self.id = record_id
        super().__init__(self._message())

    def _message(self) -> str:
        return f"{self.kind}:{self.id} not found"


class UserNotFound(NotFoundError):
    kind = "user"

    def _message(self) -> str:
        return f"{self.kind}:'{self.id}' not found"


class QuestionNotFound(NotFoundError):
    kind = "question"


class AnswerNotFound(NotFoundError):
    kind = "answer"


# ── Authorization ─────────────────────────────────────────

class Unauthorized(DAOError):
    """The actor may not perform the mutation on the target record."""

    def __init__(self, actor_id: str, target_id: str, action: str = "delete", kind: str = "question"):
        self.actor_id = actor_id
        self.target_id = target_id
        self.action = action
        self.kind = kind
        super().__init__(self._message())

    def _message(self) -> str:
        return f"user:{self.actor_id} is not authorized to {self.action} {self.kind}:{self.target_id}"


class NotQuestionAuthor(Unauthorized):
    """Only the author of a question may accept its answers."""

    def __init__(self, actor_id: str, question_id: str):
        super().__init__(actor_id, question_id, action="accept answers of", kind="question")

    def _message(self) -> str:
        return f"user:{self.actor_id} is not the author of question:{self.target_id}"


# ── Votes ─────────────────────────────────────────────────

class DuplicateVote(DAOError):
    """The user already holds a vote of the same type on the question."""

    def __init__(self, user_id: str, vote_type: VoteType, question_id: str):
        self.user_id = user_id
        self.vote_type = VoteType(vote_type)
        self.question_id = question_id
        super().__init__(
            f"user:{user_id} has voted {self.vote_type.value} for question:{question_id}"
        )
