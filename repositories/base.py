"""
repositories/base.py
--------------------
Abstract contracts for the four capability groups exposed to callers.
Every backend (memory, postgres) implements all four.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from models.answer import Answer
from models.question import Question, QuestionUpdate, Tag, TagSet
from models.user import User
from models.vote import Vote, VoteType


class UserDAO(ABC):
    """User records and per-user aggregate counts."""

    @abstractmethod
    def create_user(self, name: str) -> User:
        """Store a new user under the next identifier. Names need not be unique."""

    @abstractmethod
    def user_by_id(self, user_id: str) -> User:
        """Raises UserNotFound if absent."""

    @abstractmethod
    def question_count(self, user_id: str) -> int:
        """Number of live questions authored by the user. Raises UserNotFound."""

    @abstractmethod
    def answer_count(self, user_id: str) -> int:
        """Number of live answers authored by the user. Raises UserNotFound."""

    @abstractmethod
    def questions_by_user(self, user_id: str) -> list[Question]:
        """Live questions authored by the user, in id order. Raises UserNotFound."""

    @abstractmethod
    def answers_by_user(self, user_id: str) -> list[Answer]:
        """Live answers authored by the user, in id order. Raises UserNotFound."""


class QuestionDAO(ABC):
    """Questions, their tags and their votes."""

    @abstractmethod
    def questions(self, search: Optional[str] = None) -> list[Question]:
        """All live questions in id order, optionally filtered by title/content."""

    @abstractmethod
    def question_by_id(self, question_id: str) -> Question:
        """Raises QuestionNotFound if absent."""

    @abstractmethod
    def create_question(self, question: Question, tags: Optional[Sequence[Tag]] = None) -> Question:
        """
        Store a question for an existing author.

        Args:
            question: Template record; its ``id`` is ignored.
            tags: Optional initial tag set.

        Raises:
            UserNotFound: If ``question.author_id`` does not exist.
        """

    @abstractmethod
    def update_question(self, update: QuestionUpdate) -> Question:
        """Apply a partial update; a given tag list replaces the tag set. Raises QuestionNotFound."""

    @abstractmethod
    def delete_question(self, user_id: str, question_id: str) -> Question:
        """
        Delete a question together with its answers, votes and tag memberships.

        Returns:
            The question as it was before deletion.

        Raises:
            UserNotFound, QuestionNotFound, Unauthorized (caller is not the author).
        """

    @abstractmethod
    def answers(self, question_id: str) -> list[Answer]:
        """Answers of the question in id order; empty for unknown questions."""

    @abstractmethod
    def tags(self, question_id: str) -> TagSet:
        """Current tag set of the question; empty when it has none."""

    @abstractmethod
    def vote_question(self, user_id: str, question_id: str, vote_type: VoteType) -> Vote:
        """
        Record or flip the user's vote on a question.

        Raises:
            UserNotFound, QuestionNotFound,
            DuplicateVote: If the user already holds a vote of the same type.
        """

    @abstractmethod
    def vote_count(self, question_id: str) -> tuple[int, int]:
        """(up, down) tally of live votes. Raises QuestionNotFound."""


class AnswerDAO(ABC):
    """Answers to questions."""

    @abstractmethod
    def answer_by_id(self, answer_id: str) -> Answer:
        """Raises AnswerNotFound if absent."""

    @abstractmethod
    def create_answer(self, question_id: str, content: str, author_id: str) -> Answer:
        """Raises QuestionNotFound or UserNotFound for dangling references."""

    @abstractmethod
    def accept_answer(self, answer_id: str, user_id: str) -> Answer:
        """Mark an answer accepted. Raises AnswerNotFound, NotQuestionAuthor."""

    @abstractmethod
    def delete_answer(self, answer_id: str, user_id: str) -> Answer:
        """Delete an answer by its author. Raises AnswerNotFound, Unauthorized."""


class TagDAO(ABC):
    """Reverse lookups over the tag index."""

    @abstractmethod
    def questions(self, tag: Tag) -> set[Question]:
        """Live questions carrying the tag; empty for unknown tags."""

    @abstractmethod
    def tags(self) -> TagSet:
        """Every tag attached to at least one live question."""
