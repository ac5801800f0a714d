"""
repositories/factory.py
-----------------------
Wires the four repositories to one shared backend.
"""

from dataclasses import dataclass
from typing import Optional

from config import STORE_BACKEND
from repositories.base import AnswerDAO, QuestionDAO, TagDAO, UserDAO
from utils.logger import get_logger

logger = get_logger(__name__)

BACKENDS = ("memory", "postgres")


@dataclass(frozen=True)
class Repositories:
    """The capability groups handed to the API layer."""
    questions: QuestionDAO
    answers: AnswerDAO
    users: UserDAO
    tags: TagDAO


def create_memory_repositories() -> Repositories:
    """Fresh, empty in-process store."""
    from db.memory import MemoryDatabase
    from repositories.memory.answer_repo import MemoryAnswerRepository
    from repositories.memory.question_repo import MemoryQuestionRepository
    from repositories.memory.tag_repo import MemoryTagRepository
    from repositories.memory.user_repo import MemoryUserRepository
    from repositories.memory.vote_ledger import VoteLedger

    db = MemoryDatabase()
    answers = MemoryAnswerRepository(db)
    tags = MemoryTagRepository(db)
    questions = MemoryQuestionRepository(db, answers, tags, VoteLedger(db))
    return Repositories(
        questions=questions,
        answers=answers,
        users=MemoryUserRepository(db),
        tags=tags,
    )


def create_postgres_repositories(dsn: Optional[str] = None) -> Repositories:
    """Repositories over the shared connection pool; creates the schema if missing."""
    from db.connection import init_pool
    from db.init_db import create_tables
    from repositories.postgres.answer_repo import PostgresAnswerRepository
    from repositories.postgres.question_repo import PostgresQuestionRepository
    from repositories.postgres.tag_repo import PostgresTagRepository
    from repositories.postgres.user_repo import PostgresUserRepository

    init_pool(dsn)
    create_tables()
    return Repositories(
        questions=PostgresQuestionRepository(),
        answers=PostgresAnswerRepository(),
        users=PostgresUserRepository(),
        tags=PostgresTagRepository(),
    )


def create_repositories(backend: Optional[str] = None, dsn: Optional[str] = None) -> Repositories:
    """
    Build the repositories for a backend.

    Args:
        backend: 'memory' or 'postgres'; defaults to STORE_BACKEND from config.
        dsn: PostgreSQL connection string, ignored by the memory backend.

    Raises:
        ValueError: For an unknown backend name.
    """
    backend = (backend or STORE_BACKEND).strip().lower()
    if backend == "memory":
        repos = create_memory_repositories()
    elif backend == "postgres":
        repos = create_postgres_repositories(dsn)
    else:
        raise ValueError(f"Unknown store backend '{backend}', expected one of {BACKENDS}")
    logger.info(f"Repositories ready on the {backend} backend")
    return repos
