"""
repositories/postgres/answer_repo.py
------------------------------------
Data access layer for answers.
"""

from db.connection import transaction
from models.answer import Answer
from repositories.base import AnswerDAO
from repositories.errors import NotQuestionAuthor, Unauthorized
from repositories.postgres.common import (
    ANSWER_COLUMNS,
    fetch_answer,
    fetch_question,
    require_user,
    row_to_answer,
)
from utils.logger import get_logger

logger = get_logger(__name__)


class PostgresAnswerRepository(AnswerDAO):
    """Repository for CRUD operations on the answers table."""

    # ── CREATE ────────────────────────────────────────────

    def create_answer(self, question_id: str, content: str, author_id: str) -> Answer:
        sql = f"""
            INSERT INTO answers (question_id, author_id, content)
            VALUES (%s, %s, %s)
            RETURNING {ANSWER_COLUMNS};
        """
        with transaction() as cur:
            # FOR SHARE keeps the question from being deleted underneath us
            question = fetch_question(cur, question_id, lock="SHARE")
            author_key = require_user(cur, author_id)
            cur.execute(sql, (int(question.id), author_key, content))
            answer = row_to_answer(cur.fetchone())
        logger.info(f"Created answer #{answer.id} on question {answer.question_id} by user {answer.author_id}")
        return answer

    # ── READ ──────────────────────────────────────────────

    def answer_by_id(self, answer_id: str) -> Answer:
        with transaction() as cur:
            return fetch_answer(cur, answer_id)

    # ── UPDATE ────────────────────────────────────────────

    def accept_answer(self, answer_id: str, user_id: str) -> Answer:
        """
        Mark an answer as accepted. Only the question's author may do so;
        previously accepted answers are left as they are.
        """
        sql = f"UPDATE answers SET accepted = TRUE WHERE id = %s RETURNING {ANSWER_COLUMNS};"
        with transaction() as cur:
            answer = fetch_answer(cur, answer_id, lock="UPDATE")
            question = fetch_question(cur, answer.question_id)
            if question.author_id != str(user_id):
                logger.warning(f"User {user_id} tried to accept answer #{answer.id} on question {question.id}")
                raise NotQuestionAuthor(user_id, question.id)
            cur.execute(sql, (int(answer.id),))
            answer = row_to_answer(cur.fetchone())
        logger.info(f"Accepted answer #{answer.id} on question {answer.question_id}")
        return answer

    # ── DELETE ────────────────────────────────────────────

    def delete_answer(self, answer_id: str, user_id: str) -> Answer:
        with transaction() as cur:
            answer = fetch_answer(cur, answer_id, lock="UPDATE")
            if answer.author_id != str(user_id):
                logger.warning(f"User {user_id} tried to delete answer #{answer.id}")
                raise Unauthorized(user_id, answer.id, kind="answer")
            cur.execute("DELETE FROM answers WHERE id = %s;", (int(answer.id),))
        logger.info(f"Deleted answer #{answer.id} for user {user_id}")
        return answer
