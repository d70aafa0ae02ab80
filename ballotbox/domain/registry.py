import copy
import logging
from typing import Callable, Iterable, List, Optional

from ballotbox.domain.clock import Clock
from ballotbox.domain.election import CandidateRoster, Election, VoterRoll
from ballotbox.domain.errors import (
    AUTHORITY_AS_VOTER,
    ELECTION_NOT_FOUND,
    END_IN_PAST,
    INVALID_SCHEDULE,
    TOO_FEW_CANDIDATES,
    TOO_FEW_VOTERS,
    UNAUTHORIZED,
    AuthorizationError,
    RangeError,
    ValidationError,
)
from ballotbox.domain.events import ElectionCreated

logger = logging.getLogger(__name__)


class InMemoryElectionStore:
    """Dense arena of elections; election ``n`` lives at index ``n - 1``.

    Readers get copies, so like the SQL store a vote only lands through
    ``save_vote``, which re-checks the stored voter before writing.
    """

    def __init__(self):
        self._elections: List[Election] = []

    def count(self) -> int:
        return len(self._elections)

    def add(self, election: Election):
        if election.id != len(self._elections) + 1:
            raise ValueError(f"Election id {election.id} breaks the dense id sequence")
        self._elections.append(copy.deepcopy(election))

    def get(self, election_id: int) -> Optional[Election]:
        if 1 <= election_id <= len(self._elections):
            return copy.deepcopy(self._elections[election_id - 1])
        return None

    def all(self) -> List[Election]:
        return copy.deepcopy(self._elections)

    def save_vote(self, election: Election, voter: str, candidate_id: int):
        stored = self._elections[election.id - 1]
        stored.voter_roll.record_vote(voter, candidate_id)
        stored.candidate_roster.record_vote(candidate_id)


class ElectionRegistry:
    """Owns every election and gates creation behind the authority identity.

    Mutations either finish completely or raise before touching the store.
    Committing the store is the caller's job, so one registry call maps onto
    one transaction of whatever substrate backs ``store``.
    """

    def __init__(self, authority: str, clock: Clock, store=None,
                 publish: Callable[[object], None] = None):
        self.authority = authority
        self.clock = clock
        self.store = store if store is not None else InMemoryElectionStore()
        self.publish = publish or (lambda event: None)

    def require_authority(self, caller: str, action: str):
        if caller != self.authority:
            raise AuthorizationError(UNAUTHORIZED, f"Only the election authority may {action}")

    @property
    def election_count(self) -> int:
        return self.store.count()

    def create_election(self, caller: str, name: str, start_time: int, end_time: int,
                        voters: Iterable[str], candidates: Iterable[str]) -> int:
        voters = list(voters)
        candidates = list(candidates)

        self.require_authority(caller, "create elections")
        if start_time >= end_time:
            raise ValidationError(INVALID_SCHEDULE, "Start time must be before end time")
        if end_time <= self.clock.now():
            raise ValidationError(END_IN_PAST, "End time must be in the future")
        if len(voters) <= 1:
            raise ValidationError(TOO_FEW_VOTERS, "An election needs more than one voter")
        if len(candidates) <= 1:
            raise ValidationError(TOO_FEW_CANDIDATES, "An election needs more than one candidate")
        if self.authority in voters:
            raise ValidationError(AUTHORITY_AS_VOTER, "The election authority cannot be a voter")

        election = Election(
            election_id=self.election_count + 1,
            name=name,
            start_time=start_time,
            end_time=end_time,
            voter_roll=VoterRoll.from_identities(voters),
            candidate_roster=CandidateRoster.from_names(candidates),
        )
        self.store.add(election)
        self.publish(ElectionCreated(
            election_id=election.id, name=name, start_time=start_time, end_time=end_time,
        ))
        logger.info("Created election %s (%r) with %d voters and %d candidates",
                    election.id, name, len(election.voter_roll), len(election.candidate_roster))
        return election.id

    def get_election(self, election_id: int) -> Election:
        election = None
        if 1 <= election_id <= self.election_count:
            election = self.store.get(election_id)
        if election is None:
            raise RangeError(ELECTION_NOT_FOUND, f"Election {election_id} not found")
        return election

    def elections(self) -> List[Election]:
        return sorted(self.store.all(), key=lambda election: election.id)

    def vote(self, caller: str, election_id: int, candidate_id: int):
        election = self.get_election(election_id)
        event = election.vote(caller, candidate_id, self.clock.now())
        self.store.save_vote(election, caller, candidate_id)
        self.publish(event)
        logger.info("Recorded vote by %s in election %s", caller, election_id)
