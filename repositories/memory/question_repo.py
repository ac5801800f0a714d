"""
repositories/memory/question_repo.py
------------------------------------
Questions held in a MemoryDatabase.

Owns the cascade on delete: answers, votes and tag memberships of a
question are removed inside the same locked operation as the question.
"""

from dataclasses import replace
from typing import Optional, Sequence

from db.memory import MemoryDatabase
from models.answer import Answer
from models.question import Question, QuestionUpdate, Tag, TagSet, check_tags, sort_by_id
from models.vote import Vote, VoteType
from repositories.base import QuestionDAO
from repositories.errors import Unauthorized
from repositories.memory.answer_repo import MemoryAnswerRepository
from repositories.memory.tag_repo import MemoryTagRepository
from repositories.memory.vote_ledger import VoteLedger
from utils.logger import get_logger

logger = get_logger(__name__)


class MemoryQuestionRepository(QuestionDAO):
    """Repository for questions, delegating to the answer, tag and vote stores."""

    def __init__(
        self,
        db: MemoryDatabase,
        answers: MemoryAnswerRepository,
        tags: MemoryTagRepository,
        votes: VoteLedger,
    ):
        self._db = db
        self._answers = answers
        self._tags = tags
        self._votes = votes

    # ── CREATE ────────────────────────────────────────────

    def create_question(self, question: Question, tags: Optional[Sequence[Tag]] = None) -> Question:
        """
        Store a new question under the next question identifier.

        Args:
            question: Template record; only author_id, title and content are used.
            tags: Optional initial tag set, indexed in the same step.

        Returns:
            The stored Question with its id populated.

        Raises:
            UserNotFound: If the author does not exist.
            TypeError: If ``tags`` is a bare string.
        """
        check_tags(tags)
        with self._db.transaction() as db:
            db.get_user(question.author_id)
            stored = replace(question, id=db.question_ids.next())
            db.questions[stored.id] = stored
            if tags:
                self._tags.replace(stored.id, tags)
        logger.info(f"Created question #{stored.id} for user {stored.author_id}")
        return stored

    # ── READ ──────────────────────────────────────────────

    def questions(self, search: Optional[str] = None) -> list[Question]:
        with self._db.transaction() as db:
            found = db.questions.values()
            if search:
                found = [q for q in found if q.matches(search)]
            return sort_by_id(found)

    def question_by_id(self, question_id: str) -> Question:
        with self._db.transaction() as db:
            return db.get_question(question_id)

    def answers(self, question_id: str) -> list[Answer]:
        return self._answers.answers_of(question_id)

    def tags(self, question_id: str) -> TagSet:
        return self._tags.question_tags(question_id)

    # ── UPDATE ────────────────────────────────────────────

    def update_question(self, update: QuestionUpdate) -> Question:
        """
        Apply a partial update to a question.

        Args:
            update: Fields left as None are kept; a tags sequence replaces the tag set.

        Returns:
            The updated Question.

        Raises:
            QuestionNotFound: If the question does not exist.
        """
        check_tags(update.tags)
        with self._db.transaction() as db:
            question = db.get_question(update.id)
            changes = {}
            if update.title is not None:
                changes["title"] = update.title
            if update.content is not None:
                changes["content"] = update.content
            if changes:
                question = replace(question, **changes)
                db.questions[question.id] = question
            if update.tags is not None:
                self._tags.replace(question.id, update.tags)
        logger.info(f"Updated question #{question.id}")
        return question

    # ── DELETE ────────────────────────────────────────────

    def delete_question(self, user_id: str, question_id: str) -> Question:
        """
        Delete a question together with its answers, votes and tag memberships.
        Every check runs before the first removal.

        Args:
            user_id: The caller; must be the question's author.
            question_id: The question to delete.

        Returns:
            The question as it was before deletion.

        Raises:
            UserNotFound, QuestionNotFound, Unauthorized.
        """
        with self._db.transaction() as db:
            db.get_user(user_id)
            question = db.get_question(question_id)
            if question.author_id != user_id:
                logger.warning(f"User {user_id} tried to delete question #{question_id}")
                raise Unauthorized(user_id, question_id)

            answers = self._answers.delete_for_question(question_id)
            votes = self._votes.remove_question(question_id)
            self._tags.remove_question(question_id)
            del db.questions[question_id]
        logger.info(f"Deleted question #{question_id} with {answers} answers and {votes} votes")
        return question

    # ── VOTES ─────────────────────────────────────────────

    def vote_question(self, user_id: str, question_id: str, vote_type: VoteType) -> Vote:
        with self._db.transaction() as db:
            db.get_user(user_id)
            db.get_question(question_id)
            vote = self._votes.cast(user_id, question_id, vote_type)
        logger.info(f"User {user_id} voted {vote.type} on question #{question_id}")
        return vote

    def vote_count(self, question_id: str) -> tuple[int, int]:
        with self._db.transaction() as db:
            db.get_question(question_id)
            return self._votes.count(question_id)
