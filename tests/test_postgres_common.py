"""Helpers of the PostgreSQL backend that need no live database."""

import pytest

from models.answer import Answer
from models.question import Question
from repositories.errors import AnswerNotFound, QuestionNotFound, UserNotFound
from repositories.postgres.common import (
    fetch_answer,
    fetch_question,
    parse_id,
    require_user,
    row_to_answer,
    row_to_question,
)


class FakeCursor:
    """Records executed SQL and replays a canned row."""

    def __init__(self, row=None):
        self.row = row
        self.executed = []

    def execute(self, sql, params=None):
        self.executed.append((sql, params))

    def fetchone(self):
        return self.row


@pytest.mark.parametrize(
    "value, expected",
    [
        ("1", 1), ("-1", -1), (7, 7), ("42", 42),
        ("01", None), (" 42 ", None), ("+1", None), ("-0", None),
        ("x", None), ("", None), (None, None), ("9" * 30, None),
    ],
)
def test_parse_id(value, expected):
    assert parse_id(value) == expected


def test_row_converters_stringify_keys():
    assert row_to_question((3, 1, "t", "c")) == Question(id="3", author_id="1", title="t", content="c")
    assert row_to_answer((4, 3, 2, "a", True)) == Answer(
        id="4", question_id="3", author_id="2", content="a", accepted=True
    )


def test_unparseable_ids_never_hit_the_database():
    cur = FakeCursor()
    with pytest.raises(UserNotFound):
        require_user(cur, "x")
    with pytest.raises(QuestionNotFound):
        fetch_question(cur, "x")
    with pytest.raises(AnswerNotFound):
        fetch_answer(cur, "x")
    assert cur.executed == []


def test_fetch_question_with_row_lock():
    cur = FakeCursor(row=(1, 2, "", ""))
    question = fetch_question(cur, "1", lock="UPDATE")
    assert question == Question(id="1", author_id="2")
    sql, params = cur.executed[0]
    assert sql.rstrip(";").endswith("FOR UPDATE")
    assert params == (1,)


def test_missing_rows_raise_not_found():
    cur = FakeCursor(row=None)
    with pytest.raises(UserNotFound):
        require_user(cur, "5")
    with pytest.raises(AnswerNotFound):
        fetch_answer(cur, "5", lock="SHARE")


def test_unknown_row_lock_is_rejected():
    with pytest.raises(ValueError):
        fetch_question(FakeCursor(), "1", lock="NOWAIT")
