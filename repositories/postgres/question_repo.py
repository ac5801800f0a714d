"""
repositories/postgres/question_repo.py
--------------------------------------
Data access layer for questions, their tags and their votes.
Deleting a question relies on ON DELETE CASCADE for answers, votes and tags.
"""

from typing import Optional, Sequence

from db.connection import transaction
from models.answer import Answer
from models.question import Question, QuestionUpdate, Tag, TagSet, check_tags
from models.vote import Vote, VoteType
from repositories.base import QuestionDAO
from repositories.errors import DuplicateVote, Unauthorized
from repositories.postgres.common import (
    ANSWER_COLUMNS,
    QUESTION_COLUMNS,
    fetch_question,
    parse_id,
    require_user,
    row_to_answer,
    row_to_question,
)
from repositories.postgres.tag_repo import replace_tags
from utils.logger import get_logger

logger = get_logger(__name__)


class PostgresQuestionRepository(QuestionDAO):
    """Repository for CRUD operations on the questions table."""

    # ── CREATE ────────────────────────────────────────────

    def create_question(self, question: Question, tags: Optional[Sequence[Tag]] = None) -> Question:
        check_tags(tags)
        sql = f"""
            INSERT INTO questions (author_id, title, content)
            VALUES (%s, %s, %s)
            RETURNING {QUESTION_COLUMNS};
        """
        with transaction() as cur:
            author_key = require_user(cur, question.author_id)
            cur.execute(sql, (author_key, question.title, question.content))
            stored = row_to_question(cur.fetchone())
            if tags:
                replace_tags(cur, int(stored.id), tags)
        logger.info(f"Created question #{stored.id} for user {stored.author_id}")
        return stored

    # ── READ ──────────────────────────────────────────────

    def questions(self, search: Optional[str] = None) -> list[Question]:
        sql = f"SELECT {QUESTION_COLUMNS} FROM questions"
        params: list = []
        if search:
            sql += " WHERE title ILIKE %s OR content ILIKE %s"
            pattern = "%" + search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_") + "%"
            params = [pattern, pattern]
        sql += " ORDER BY id;"
        with transaction() as cur:
            cur.execute(sql, params)
            return [row_to_question(r) for r in cur.fetchall()]

    def question_by_id(self, question_id: str) -> Question:
        with transaction() as cur:
            return fetch_question(cur, question_id)

    def answers(self, question_id: str) -> list[Answer]:
        key = parse_id(question_id)
        if key is None:
            return []
        with transaction() as cur:
            cur.execute(
                f"SELECT {ANSWER_COLUMNS} FROM answers WHERE question_id = %s ORDER BY id;",
                (key,),
            )
            return [row_to_answer(r) for r in cur.fetchall()]

    def tags(self, question_id: str) -> TagSet:
        key = parse_id(question_id)
        if key is None:
            return set()
        with transaction() as cur:
            cur.execute("SELECT tag FROM question_tags WHERE question_id = %s;", (key,))
            return {r[0] for r in cur.fetchall()}

    # ── UPDATE ────────────────────────────────────────────

    def update_question(self, update: QuestionUpdate) -> Question:
        check_tags(update.tags)
        sql = f"""
            UPDATE questions
            SET title = COALESCE(%s, title), content = COALESCE(%s, content)
            WHERE id = %s
            RETURNING {QUESTION_COLUMNS};
        """
        with transaction() as cur:
            question = fetch_question(cur, update.id, lock="UPDATE")
            key = int(question.id)
            cur.execute(sql, (update.title, update.content, key))
            question = row_to_question(cur.fetchone())
            if update.tags is not None:
                replace_tags(cur, key, update.tags)
        logger.info(f"Updated question #{question.id}")
        return question

    # ── DELETE ────────────────────────────────────────────

    def delete_question(self, user_id: str, question_id: str) -> Question:
        with transaction() as cur:
            require_user(cur, user_id)
            question = fetch_question(cur, question_id, lock="UPDATE")
            if question.author_id != str(user_id):
                logger.warning(f"User {user_id} tried to delete question #{question.id}")
                raise Unauthorized(user_id, question_id)
            cur.execute("DELETE FROM questions WHERE id = %s;", (int(question.id),))
        logger.info(f"Deleted question #{question.id} for user {user_id}")
        return question

    # ── VOTES ─────────────────────────────────────────────

    def vote_question(self, user_id: str, question_id: str, vote_type: VoteType) -> Vote:
        vote_type = VoteType(vote_type)
        # The WHERE on the conflict branch turns a same-type resubmission into
        # a no-op, which we detect by the missing RETURNING row.
        sql = """
            INSERT INTO votes (user_id, question_id, type)
            VALUES (%s, %s, %s)
            ON CONFLICT (user_id, question_id)
            DO UPDATE SET type = EXCLUDED.type WHERE votes.type <> EXCLUDED.type
            RETURNING type;
        """
        with transaction() as cur:
            user_key = require_user(cur, user_id)
            question = fetch_question(cur, question_id, lock="SHARE")
            cur.execute(sql, (user_key, int(question.id), vote_type.value))
            if cur.fetchone() is None:
                logger.warning(f"Duplicate {vote_type} vote by user {user_id} on question {question_id}")
                raise DuplicateVote(user_id, vote_type, question_id)
        logger.info(f"User {user_id} voted {vote_type} on question #{question_id}")
        return Vote(user_id=user_id, question_id=question_id, type=vote_type)

    def vote_count(self, question_id: str) -> tuple[int, int]:
        sql = """
            SELECT
                COUNT(*) FILTER (WHERE type = 'UP'),
                COUNT(*) FILTER (WHERE type = 'DOWN')
            FROM votes WHERE question_id = %s;
        """
        with transaction() as cur:
            question = fetch_question(cur, question_id)
            cur.execute(sql, (int(question.id),))
            up, down = cur.fetchone()
        return up, down
