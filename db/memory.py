"""
db/memory.py
------------
In-process dataset backing the memory repositories.

Holds every table, the tag reverse index and the vote ledger in plain
dicts, guarded by one reentrant lock. Repositories take the lock for the
whole of each public operation, so a cascade is never observed half-done.
"""

import threading
from contextlib import contextmanager
from typing import Iterator

from models.answer import Answer
from models.question import Question, Tag
from models.user import User
from models.vote import Vote
from repositories.errors import AnswerNotFound, QuestionNotFound, UserNotFound


class IdSequence:
    """Monotonic string identifiers; values are never handed out twice."""

    def __init__(self, start: int = 1):
        self._next = start
        self._lock = threading.Lock()

    def next(self) -> str:
        with self._lock:
            value = self._next
            self._next += 1
        return str(value)


class MemoryDatabase:
    """All records of one store, plus its identifier sequences."""

    def __init__(self):
        self.lock = threading.RLock()

        self.users: dict[str, User] = {}
        self.questions: dict[str, Question] = {}
        self.answers: dict[str, Answer] = {}

        # question_id -> tags, and its exact inverse tag -> question_ids
        self.question_tags: dict[str, set[Tag]] = {}
        self.tag_index: dict[Tag, set[str]] = {}

        # (user_id, question_id) -> vote
        self.votes: dict[tuple[str, str], Vote] = {}

        self.user_ids = IdSequence()
        self.question_ids = IdSequence()
        self.answer_ids = IdSequence()

    @contextmanager
    def transaction(self) -> Iterator["MemoryDatabase"]:
        """Hold the dataset lock for the duration of one operation."""
        with self.lock:
            yield self

    # ── Lookups used for call-through validation ──────────

    def get_user(self, user_id: str) -> User:
        user = self.users.get(user_id)
        if user is None:
            raise UserNotFound(user_id)
        return user

    def get_question(self, question_id: str) -> Question:
        question = self.questions.get(question_id)
        if question is None:
            raise QuestionNotFound(question_id)
        return question

    def get_answer(self, answer_id: str) -> Answer:
        answer = self.answers.get(answer_id)
        if answer is None:
            raise AnswerNotFound(answer_id)
        return answer
