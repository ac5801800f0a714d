"""
repositories/postgres/tag_repo.py
---------------------------------
Data access layer for the question_tags index.
"""

from typing import Iterable

from psycopg2 import extras

from db.connection import transaction
from models.question import Question, Tag, TagSet
from repositories.base import TagDAO
from repositories.postgres.common import row_to_question


def replace_tags(cur, question_key: int, tags: Iterable[Tag]) -> None:
    """Replace a question's tag rows inside the caller's transaction."""
    cur.execute("DELETE FROM question_tags WHERE question_id = %s;", (question_key,))
    rows = [(question_key, tag) for tag in set(tags)]
    if rows:
        extras.execute_values(
            cur, "INSERT INTO question_tags (question_id, tag) VALUES %s;", rows
        )


class PostgresTagRepository(TagDAO):
    """Reverse lookups over the question_tags table."""

    def questions(self, tag: Tag) -> set[Question]:
        sql = """
            SELECT q.id, q.author_id, q.title, q.content
            FROM questions q
            JOIN question_tags t ON t.question_id = q.id
            WHERE t.tag = %s;
        """
        with transaction() as cur:
            cur.execute(sql, (tag,))
            return {row_to_question(r) for r in cur.fetchall()}

    def tags(self) -> TagSet:
        with transaction() as cur:
            cur.execute("SELECT DISTINCT tag FROM question_tags;")
            return {r[0] for r in cur.fetchall()}
