"""
repositories/memory/answer_repo.py
----------------------------------
Answers held in a MemoryDatabase.
"""

from dataclasses import replace

from db.memory import MemoryDatabase
from models.answer import Answer
from models.question import sort_by_id
from repositories.base import AnswerDAO
from repositories.errors import NotQuestionAuthor, Unauthorized
from utils.logger import get_logger

logger = get_logger(__name__)


class MemoryAnswerRepository(AnswerDAO):
    """Repository for answers; question and author references are checked on create."""

    def __init__(self, db: MemoryDatabase):
        self._db = db

    # ── CREATE ────────────────────────────────────────────

    def create_answer(self, question_id: str, content: str, author_id: str) -> Answer:
        """
        Store a new answer under the next answer identifier.

        Args:
            question_id: The question being answered; must exist.
            content: The answer text.
            author_id: The writer; must exist.

        Returns:
            The stored Answer, not yet accepted.

        Raises:
            QuestionNotFound, UserNotFound.
        """
        with self._db.transaction() as db:
            db.get_question(question_id)
            db.get_user(author_id)
            answer = Answer(
                id=db.answer_ids.next(),
                question_id=question_id,
                author_id=author_id,
                content=content,
            )
            db.answers[answer.id] = answer
        logger.info(f"Created answer #{answer.id} on question {question_id} by user {author_id}")
        return answer

    # ── READ ──────────────────────────────────────────────

    def answer_by_id(self, answer_id: str) -> Answer:
        with self._db.transaction() as db:
            return db.get_answer(answer_id)

    def answers_of(self, question_id: str) -> list[Answer]:
        """Answers of a question in id order; empty if there are none."""
        with self._db.transaction() as db:
            return sort_by_id(a for a in db.answers.values() if a.question_id == question_id)

    # ── UPDATE ────────────────────────────────────────────

    def accept_answer(self, answer_id: str, user_id: str) -> Answer:
        """
        Mark an answer as accepted.

        Only the author of the answered question may accept. Other answers
        of the same question keep their accepted flag.
        """
        with self._db.transaction() as db:
            answer = db.get_answer(answer_id)
            question = db.get_question(answer.question_id)
            if question.author_id != user_id:
                logger.warning(f"User {user_id} tried to accept answer #{answer_id} on question {question.id}")
                raise NotQuestionAuthor(user_id, question.id)
            answer = replace(answer, accepted=True)
            db.answers[answer.id] = answer
        logger.info(f"Accepted answer #{answer.id} on question {answer.question_id}")
        return answer

    # ── DELETE ────────────────────────────────────────────

    def delete_answer(self, answer_id: str, user_id: str) -> Answer:
        """
        Delete an answer on behalf of its author.

        Returns:
            The answer as it was before deletion.

        Raises:
            AnswerNotFound, Unauthorized: If the caller did not write the answer.
        """
        with self._db.transaction() as db:
            answer = db.get_answer(answer_id)
            if answer.author_id != user_id:
                logger.warning(f"User {user_id} tried to delete answer #{answer_id}")
                raise Unauthorized(user_id, answer_id, kind="answer")
            del db.answers[answer_id]
        logger.info(f"Deleted answer #{answer_id} for user {user_id}")
        return answer

    def delete_for_question(self, question_id: str) -> int:
        """Cascade helper: remove every answer of a question. Returns the number removed."""
        with self._db.transaction() as db:
            doomed = [aid for aid, a in db.answers.items() if a.question_id == question_id]
            for answer_id in doomed:
                del db.answers[answer_id]
        return len(doomed)
