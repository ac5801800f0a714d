"""
repositories/memory/tag_repo.py
-------------------------------
Bidirectional question <-> tag index.

The forward map (question -> tags) and the reverse map (tag -> questions)
are always rewritten together under the dataset lock.
"""

from typing import Iterable

from db.memory import MemoryDatabase
from models.question import Question, Tag, TagSet
from repositories.base import TagDAO


class MemoryTagRepository(TagDAO):
    """Repository for the tag index held in a MemoryDatabase."""

    def __init__(self, db: MemoryDatabase):
        self._db = db

    def questions(self, tag: Tag) -> set[Question]:
        with self._db.transaction() as db:
            return {db.questions[qid] for qid in db.tag_index.get(tag, ())}

    def tags(self) -> TagSet:
        with self._db.transaction() as db:
            return set(db.tag_index)

    def question_tags(self, question_id: str) -> TagSet:
        """Copy of the question's tag set; empty if it has none."""
        with self._db.transaction() as db:
            return set(db.question_tags.get(question_id, ()))

    def replace(self, question_id: str, tags: Iterable[Tag]) -> None:
        """Replace the question's tag set wholesale and re-point the reverse index."""
        new_tags = set(tags)
        with self._db.transaction() as db:
            old_tags = db.question_tags.get(question_id, set())
            for tag in old_tags - new_tags:
                self._unlink(db, tag, question_id)
            for tag in new_tags - old_tags:
                db.tag_index.setdefault(tag, set()).add(question_id)
            if new_tags:
                db.question_tags[question_id] = new_tags
            else:
                db.question_tags.pop(question_id, None)

    def remove_question(self, question_id: str) -> None:
        """Drop every tag membership of a question."""
        self.replace(question_id, ())

    @staticmethod
    def _unlink(db: MemoryDatabase, tag: Tag, question_id: str) -> None:
        members = db.tag_index.get(tag)
        if members is None:
            return
        members.discard(question_id)
        if not members:
            del db.tag_index[tag]
