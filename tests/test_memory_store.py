"""In-process backend: identifier sequences, index consistency, locking."""

import threading
from dataclasses import FrozenInstanceError

import pytest

from db.memory import IdSequence, MemoryDatabase
from models.question import Question, QuestionUpdate
from models.vote import VoteType
from repositories.errors import DuplicateVote, QuestionNotFound
from repositories.memory.tag_repo import MemoryTagRepository
from repositories.memory.vote_ledger import VoteLedger


def _assert_tag_index_consistent(db: MemoryDatabase):
    inverse = {}
    for qid, tags in db.question_tags.items():
        assert qid in db.questions
        for tag in tags:
            inverse.setdefault(tag, set()).add(qid)
    assert inverse == db.tag_index


def test_id_sequence_counts_up_from_one():
    seq = IdSequence()
    assert [seq.next() for _ in range(3)] == ["1", "2", "3"]


def test_id_sequence_is_safe_across_threads():
    seq = IdSequence()
    seen = []
    lock = threading.Lock()

    def worker():
        ids = [seq.next() for _ in range(200)]
        with lock:
            seen.extend(ids)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(seen) == 1600
    assert len(set(seen)) == 1600


def test_returned_records_are_snapshots(memory_repos):
    user = memory_repos.users.create_user("u")
    q = memory_repos.questions.create_question(Question(author_id=user.id))
    with pytest.raises(FrozenInstanceError):
        q.author_id = "2"

    tags = memory_repos.questions.tags(q.id)
    tags.add("Injected")
    assert memory_repos.questions.tags(q.id) == set()
    assert memory_repos.tags.questions("Injected") == set()


def test_tag_index_stays_inverse():
    db = MemoryDatabase()
    tags = MemoryTagRepository(db)
    db.questions["1"] = Question(author_id="1", id="1")
    db.questions["2"] = Question(author_id="1", id="2")

    tags.replace("1", ["Go", "Python"])
    tags.replace("2", ["Python", "Rust"])
    _assert_tag_index_consistent(db)

    tags.replace("1", ["Rust"])
    _assert_tag_index_consistent(db)
    assert "Go" not in db.tag_index

    tags.remove_question("2")
    _assert_tag_index_consistent(db)
    assert db.tag_index == {"Rust": {"1"}}


def test_vote_ledger_state_machine():
    ledger = VoteLedger(MemoryDatabase())
    assert ledger.cast("1", "9", VoteType.UP).type is VoteType.UP
    assert ledger.cast("1", "9", VoteType.DOWN).type is VoteType.DOWN
    assert ledger.cast("1", "9", VoteType.UP).type is VoteType.UP
    with pytest.raises(DuplicateVote):
        ledger.cast("1", "9", VoteType.UP)
    assert ledger.count("9") == (1, 0)

    ledger.cast("2", "9", VoteType.DOWN)
    assert ledger.remove_question("9") == 2
    assert ledger.count("9") == (0, 0)


def test_concurrent_creates_get_unique_ids(memory_repos):
    user = memory_repos.users.create_user("busy")
    created = []
    lock = threading.Lock()

    def worker(n):
        for i in range(50):
            q = memory_repos.questions.create_question(
                Question(author_id=user.id), [f"tag{n}", f"tag{i % 5}"]
            )
            with lock:
                created.append(q.id)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(6)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(set(created)) == 300
    assert memory_repos.users.question_count(user.id) == 300


def test_cascade_is_atomic_under_concurrent_answers(memory_repos):
    asker = memory_repos.users.create_user("asker")
    helper = memory_repos.users.create_user("helper")
    questions = [
        memory_repos.questions.create_question(Question(author_id=asker.id), ["Go"])
        for _ in range(20)
    ]

    def answer_all():
        for q in questions:
            for _ in range(5):
                try:
                    memory_repos.answers.create_answer(q.id, "maybe", helper.id)
                    memory_repos.questions.vote_question(helper.id, q.id, VoteType.UP)
                except (QuestionNotFound, DuplicateVote):
                    pass

    def delete_all():
        for q in questions:
            memory_repos.questions.delete_question(asker.id, q.id)

    threads = [threading.Thread(target=answer_all) for _ in range(3)]
    threads.append(threading.Thread(target=delete_all))
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    db = memory_repos.questions._db
    assert db.questions == {}
    assert db.answers == {}
    assert db.votes == {}
    assert db.tag_index == {}
    assert memory_repos.users.answer_count(helper.id) == 0


def test_failed_update_leaves_tags_untouched(memory_repos):
    user = memory_repos.users.create_user("u")
    q = memory_repos.questions.create_question(Question(author_id=user.id), ["Go"])
    with pytest.raises(QuestionNotFound):
        memory_repos.questions.update_question(QuestionUpdate(id="404", tags=["Go"]))
    assert memory_repos.tags.questions("Go") == {q}
