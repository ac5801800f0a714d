"""
models/question.py
------------------
Domain models for questions, question updates and tags.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

Tag = str
TagSet = set[Tag]


def new_tag_set(*tags: Tag) -> TagSet:
    """Build a tag set from individual tags."""
    return set(tags)


def check_tags(tags) -> None:
    """
    Reject a bare string given where a collection of tags is expected.

    Raises:
        TypeError: If ``tags`` is a ``str``, which would otherwise be split
            into one tag per character.
    """
    if isinstance(tags, str):
        raise TypeError(f"tags must be a collection of tags, not a string: {tags!r}")


@dataclass(frozen=True)
class Question:
    """
    A question asked by a user.

    Tags are not part of the record; they live in the tag index and are
    read through ``QuestionDAO.tags``.

    Attributes:
        author_id: ID of the user who asked the question.
        id: Generated identifier (empty for records not yet stored).
        title: Optional short title.
        content: Optional body text.
    """
    author_id: str
    id: str = ""
    title: str = ""
    content: str = ""

    def matches(self, search: str) -> bool:
        """Case-insensitive substring match over title and content."""
        needle = search.lower()
        return needle in self.title.lower() or needle in self.content.lower()


@dataclass(frozen=True)
class QuestionUpdate:
    """
    A partial update of a question.

    ``None`` leaves a field unchanged. A ``tags`` sequence, even an empty
    one, replaces the whole tag set.
    """
    id: str
    title: Optional[str] = None
    content: Optional[str] = None
    tags: Optional[Sequence[Tag]] = None


def new_question_set(*questions: Question) -> set[Question]:
    """Build a set of questions, mirroring ``new_tag_set``."""
    return set(questions)


def sort_by_id(records: Iterable) -> list:
    """Order records by their numeric identifier."""
    return sorted(records, key=lambda r: int(r.id))
