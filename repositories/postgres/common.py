"""
repositories/postgres/common.py
-------------------------------
Row conversion and reference checks shared by the PostgreSQL repositories.

Identifiers cross the boundary as strings and are stored as BIGINT; a
string that is not a valid key simply matches no row.
"""

from typing import Optional

from models.answer import Answer
from models.question import Question
from repositories.errors import AnswerNotFound, QuestionNotFound, UserNotFound

QUESTION_COLUMNS = "id, author_id, title, content"
ANSWER_COLUMNS = "id, question_id, author_id, content, accepted"

_BIGINT_MAX = 2 ** 63 - 1


def parse_id(value) -> Optional[int]:
    """
    Convert an external identifier to a row key, or None if it cannot be one.

    Only the canonical spelling is accepted ("1", "-1"), so "01", " 1" and
    "+1" name no record, exactly as in the memory backend.
    """
    try:
        key = int(str(value))
    except (TypeError, ValueError):
        return None
    if str(key) != str(value):
        return None
    if abs(key) > _BIGINT_MAX:
        return None
    return key


def _lock_clause(lock: Optional[str]) -> str:
    if lock is None:
        return ""
    if lock not in ("UPDATE", "SHARE"):
        raise ValueError(f"Unsupported row lock: {lock}")
    return f" FOR {lock}"


def require_user(cur, user_id: str) -> int:
    """Return the user's row key, raising UserNotFound if it does not exist."""
    key = parse_id(user_id)
    if key is not None:
        cur.execute("SELECT id FROM users WHERE id = %s;", (key,))
        if cur.fetchone():
            return key
    raise UserNotFound(user_id)


def fetch_question(cur, question_id: str, lock: Optional[str] = None) -> Question:
    """Load a question, optionally row-locking it. Raises QuestionNotFound."""
    key = parse_id(question_id)
    if key is not None:
        cur.execute(
            f"SELECT {QUESTION_COLUMNS} FROM questions WHERE id = %s{_lock_clause(lock)};",
            (key,),
        )
        row = cur.fetchone()
        if row:
            return row_to_question(row)
    raise QuestionNotFound(question_id)


def fetch_answer(cur, answer_id: str, lock: Optional[str] = None) -> Answer:
    """Load an answer, optionally row-locking it. Raises AnswerNotFound."""
    key = parse_id(answer_id)
    if key is not None:
        cur.execute(
            f"SELECT {ANSWER_COLUMNS} FROM answers WHERE id = %s{_lock_clause(lock)};",
            (key,),
        )
        row = cur.fetchone()
        if row:
            return row_to_answer(row)
    raise AnswerNotFound(answer_id)


def row_to_question(row: tuple) -> Question:
    """Convert a database row tuple to a Question domain object."""
    return Question(
        id=str(row[0]),
        author_id=str(row[1]),
        title=row[2],
        content=row[3],
    )


def row_to_answer(row: tuple) -> Answer:
    """Convert a database row tuple to an Answer domain object."""
    return Answer(
        id=str(row[0]),
        question_id=str(row[1]),
        author_id=str(row[2]),
        content=row[3],
        accepted=row[4],
    )
