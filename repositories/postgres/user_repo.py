"""
repositories/postgres/user_repo.py
----------------------------------
Data access layer for user records.
"""

from db.connection import transaction
from models.answer import Answer
from models.question import Question
from models.user import User
from repositories.base import UserDAO
from repositories.errors import UserNotFound
from repositories.postgres.common import (
    ANSWER_COLUMNS,
    QUESTION_COLUMNS,
    parse_id,
    require_user,
    row_to_answer,
    row_to_question,
)
from utils.logger import get_logger

logger = get_logger(__name__)


class PostgresUserRepository(UserDAO):
    """Repository for CRUD operations on the users table."""

    def create_user(self, name: str) -> User:
        sql = "INSERT INTO users (name) VALUES (%s) RETURNING id, name;"
        with transaction() as cur:
            cur.execute(sql, (name,))
            row = cur.fetchone()
        user = User(id=str(row[0]), name=row[1])
        logger.info(f"Created user #{user.id}")
        return user

    def user_by_id(self, user_id: str) -> User:
        key = parse_id(user_id)
        if key is not None:
            with transaction() as cur:
                cur.execute("SELECT id, name FROM users WHERE id = %s;", (key,))
                row = cur.fetchone()
            if row:
                return User(id=str(row[0]), name=row[1])
        raise UserNotFound(user_id)

    # ── Aggregates ────────────────────────────────────────

    def question_count(self, user_id: str) -> int:
        with transaction() as cur:
            key = require_user(cur, user_id)
            cur.execute("SELECT COUNT(*) FROM questions WHERE author_id = %s;", (key,))
            return cur.fetchone()[0]

    def answer_count(self, user_id: str) -> int:
        with transaction() as cur:
            key = require_user(cur, user_id)
            cur.execute("SELECT COUNT(*) FROM answers WHERE author_id = %s;", (key,))
            return cur.fetchone()[0]

    def questions_by_user(self, user_id: str) -> list[Question]:
        with transaction() as cur:
            key = require_user(cur, user_id)
            cur.execute(
                f"SELECT {QUESTION_COLUMNS} FROM questions WHERE author_id = %s ORDER BY id;",
                (key,),
            )
            return [row_to_question(r) for r in cur.fetchall()]

    def answers_by_user(self, user_id: str) -> list[Answer]:
        with transaction() as cur:
            key = require_user(cur, user_id)
            cur.execute(
                f"SELECT {ANSWER_COLUMNS} FROM answers WHERE author_id = %s ORDER BY id;",
                (key,),
            )
            return [row_to_answer(r) for r in cur.fetchall()]
