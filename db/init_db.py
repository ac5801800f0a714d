"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import transaction
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Users table: root of every authorship reference
CREATE TABLE IF NOT EXISTS users (
    id              BIGSERIAL PRIMARY KEY,
    name            TEXT NOT NULL,
    created_at      TIMESTAMPTZ DEFAULT NOW()
);

-- Questions table: deleting a question cascades to everything below
CREATE TABLE IF NOT EXISTS questions (
    id              BIGSERIAL PRIMARY KEY,
    author_id       BIGINT NOT NULL REFERENCES users(id),
    title           TEXT NOT NULL DEFAULT '',
    content         TEXT NOT NULL DEFAULT '',
    created_at      TIMESTAMPTZ DEFAULT NOW()
);

-- Answers table: independent id sequence from questions
CREATE TABLE IF NOT EXISTS answers (
    id              BIGSERIAL PRIMARY KEY,
    question_id     BIGINT NOT NULL REFERENCES questions(id) ON DELETE CASCADE,
    author_id       BIGINT NOT NULL REFERENCES users(id),
    content         TEXT NOT NULL DEFAULT '',
    accepted        BOOLEAN NOT NULL DEFAULT FALSE,
    created_at      TIMESTAMPTZ DEFAULT NOW()
);

-- Tag index: one row per (question, tag)
CREATE TABLE IF NOT EXISTS question_tags (
    question_id     BIGINT NOT NULL REFERENCES questions(id) ON DELETE CASCADE,
    tag             TEXT NOT NULL,
    PRIMARY KEY (question_id, tag)
);

-- Vote ledger: at most one vote per user per question
CREATE TABLE IF NOT EXISTS votes (
    user_id         BIGINT NOT NULL REFERENCES users(id),
    question_id     BIGINT NOT NULL REFERENCES questions(id) ON DELETE CASCADE,
    type            VARCHAR(4) NOT NULL CHECK (type IN ('UP', 'DOWN')),
    PRIMARY KEY (user_id, question_id)
);

-- Indexes for faster queries
CREATE INDEX IF NOT EXISTS idx_questions_author ON questions(author_id);
CREATE INDEX IF NOT EXISTS idx_answers_question ON answers(question_id);
CREATE INDEX IF NOT EXISTS idx_answers_author ON answers(author_id);
CREATE INDEX IF NOT EXISTS idx_question_tags_tag ON question_tags(tag);
CREATE INDEX IF NOT EXISTS idx_votes_question ON votes(question_id);
"""

RESET_SQL = """
TRUNCATE votes, question_tags, answers, questions, users RESTART IDENTITY CASCADE;
"""


def create_tables() -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    with transaction() as cur:
        cur.execute(SCHEMA_SQL)
    logger.info("Database schema initialized successfully.")


def reset_tables() -> None:
    """
    Remove every row and restart all id sequences.
    Intended for test fixtures; never called by the repositories.
    """
    with transaction() as cur:
        cur.execute(RESET_SQL)
    logger.info("Database tables truncated.")


if __name__ == "__main__":
    from db.connection import init_pool
    init_pool()
    create_tables()
    print("Database schema created successfully.")
