"""
repositories/memory/user_repo.py
--------------------------------
User records and their live aggregate counts.
"""

from db.memory import MemoryDatabase
from models.answer import Answer
from models.question import Question, sort_by_id
from models.user import User
from repositories.base import UserDAO
from utils.logger import get_logger

logger = get_logger(__name__)


class MemoryUserRepository(UserDAO):
    """Repository for users held in a MemoryDatabase."""

    def __init__(self, db: MemoryDatabase):
        self._db = db

    def create_user(self, name: str) -> User:
        with self._db.transaction() as db:
            user = User(name=name, id=db.user_ids.next())
            db.users[user.id] = user
        logger.info(f"Created user #{user.id}")
        return user

    def user_by_id(self, user_id: str) -> User:
        with self._db.transaction() as db:
            return db.get_user(user_id)

    # ── Aggregates ────────────────────────────────────────
    # Counts are recomputed from the live tables on every read, so they
    # stay correct across cascading deletes without extra bookkeeping.

    def question_count(self, user_id: str) -> int:
        return len(self.questions_by_user(user_id))

    def answer_count(self, user_id: str) -> int:
        return len(self.answers_by_user(user_id))

    def questions_by_user(self, user_id: str) -> list[Question]:
        with self._db.transaction() as db:
            db.get_user(user_id)
            return sort_by_id(q for q in db.questions.values() if q.author_id == user_id)

    def answers_by_user(self, user_id: str) -> list[Answer]:
        with self._db.transaction() as db:
            db.get_user(user_id)
            return sort_by_id(a for a in db.answers.values() if a.author_id == user_id)
