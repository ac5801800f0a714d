"""
repositories/memory/vote_ledger.py
----------------------------------
At most one vote per (user, question).

    NO_VOTE -> UP | DOWN     first vote is recorded
    UP <-> DOWN              a vote of the other type replaces it
    UP -> UP, DOWN -> DOWN   rejected with DuplicateVote

Entries only disappear when their question is deleted.
"""

from db.memory import MemoryDatabase
from models.vote import Vote, VoteType
from repositories.errors import DuplicateVote
from utils.logger import get_logger

logger = get_logger(__name__)


class VoteLedger:
    """Vote records held in a MemoryDatabase. Callers validate references first."""

    def __init__(self, db: MemoryDatabase):
        self._db = db

    def cast(self, user_id: str, question_id: str, vote_type: VoteType) -> Vote:
        vote_type = VoteType(vote_type)
        with self._db.transaction() as db:
            key = (user_id, question_id)
            current = db.votes.get(key)
            if current is not None and current.type == vote_type:
                logger.warning(f"Duplicate {vote_type} vote by user {user_id} on question {question_id}")
                raise DuplicateVote(user_id, vote_type, question_id)
            vote = Vote(user_id=user_id, question_id=question_id, type=vote_type)
            db.votes[key] = vote
        return vote

    def count(self, question_id: str) -> tuple[int, int]:
        up = down = 0
        with self._db.transaction() as db:
            for vote in db.votes.values():
                if vote.question_id != question_id:
                    continue
                if vote.type is VoteType.UP:
                    up += 1
                else:
                    down += 1
        return up, down

    def remove_question(self, question_id: str) -> int:
        """Delete every vote on the question. Returns how many were removed."""
        with self._db.transaction() as db:
            keys = [k for k in db.votes if k[1] == question_id]
            for key in keys:
                del db.votes[key]
        return len(keys)
