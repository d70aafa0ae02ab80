import enum
from dataclasses import dataclass
from typing import Iterable, List

from ballotbox.domain.errors import (
    ALREADY_VOTED,
    ENDED,
    INVALID_CANDIDATE,
    NOT_REGISTERED,
    NOT_STARTED,
    EligibilityError,
    RangeError,
    TemporalError,
)
from ballotbox.domain.events import VoteCasted

NO_VOTE = 0


@dataclass
class Candidate:
    id: int
    name: str
    vote_count: int = 0


class CandidateRoster:
    """Fixed list of candidates; ids are dense in ``1..len(roster)``."""

    def __init__(self, candidates: List[Candidate]):
        for position, candidate in enumerate(candidates, start=1):
            if candidate.id != position:
                raise ValueError(f"Candidate ids must be dense, got {candidate.id} at {position}")
        self._candidates = list(candidates)

    @classmethod
    def from_names(cls, names: Iterable[str]):
        return cls([Candidate(id=index, name=name) for index, name in enumerate(names, start=1)])

    def __len__(self):
        return len(self._candidates)

    def __iter__(self):
        return iter(self._candidates)

    def __contains__(self, candidate_id):
        return 1 <= candidate_id <= len(self._candidates)

    def get(self, candidate_id: int) -> Candidate:
        if candidate_id not in self:
            raise RangeError(INVALID_CANDIDATE, f"Candidate {candidate_id} does not exist")
        return self._candidates[candidate_id - 1]

    def record_vote(self, candidate_id: int):
        self.get(candidate_id).vote_count += 1

    def tallies(self) -> List[int]:
        return [candidate.vote_count for candidate in self._candidates]


@dataclass
class Voter:
    identity: str
    vote_choice: int = NO_VOTE

    @property
    def has_voted(self) -> bool:
        return self.vote_choice != NO_VOTE


class VoterRoll:
    """Registered voters of one election, in registration order.

    Presence in the roll is registration; there is no unregistered entry.
    """

    def __init__(self, voters: List[Voter]):
        self._voters = {voter.identity: voter for voter in voters}

    @classmethod
    def from_identities(cls, identities: Iterable[str]):
        # Duplicates collapse onto their first position.
        return cls([Voter(identity=identity) for identity in dict.fromkeys(identities)])

    def __len__(self):
        return len(self._voters)

    def __iter__(self):
        return iter(self._voters.values())

    def __contains__(self, identity):
        return identity in self._voters

    def get(self, identity: str) -> Voter:
        voter = self._voters.get(identity)
        if voter is None:
            raise EligibilityError(NOT_REGISTERED, f"{identity} is not registered for this election")
        return voter

    def choice_of(self, identity: str) -> int:
        voter = self._voters.get(identity)
        return voter.vote_choice if voter else NO_VOTE

    def record_vote(self, identity: str, candidate_id: int):
        voter = self.get(identity)
        if voter.has_voted:
            raise EligibilityError(ALREADY_VOTED, f"{identity} has already voted")
        voter.vote_choice = candidate_id

    def identities(self) -> List[str]:
        return list(self._voters)

    def choices(self) -> List[int]:
        return [voter.vote_choice for voter in self._voters.values()]


class ElectionState(str, enum.Enum):
    SCHEDULED = "scheduled"
    OPEN = "open"
    CLOSED = "closed"


class Election:
    """One election: a voting window over a fixed roll and roster.

    The lifecycle state is never stored. It is derived from ``now`` on every
    call, so an election closes the moment its end time passes.
    """

    def __init__(self, election_id: int, name: str, start_time: int, end_time: int,
                 voter_roll: VoterRoll, candidate_roster: CandidateRoster):
        self.id = election_id
        self.name = name
        self.start_time = start_time
        self.end_time = end_time
        self.voter_roll = voter_roll
        self.candidate_roster = candidate_roster

    def state(self, now: int) -> ElectionState:
        if now < self.start_time:
            return ElectionState.SCHEDULED
        if now < self.end_time:
            return ElectionState.OPEN
        return ElectionState.CLOSED

    def has_ended(self, now: int) -> bool:
        return self.state(now) is ElectionState.CLOSED

    def is_registered(self, identity: str) -> bool:
        return identity in self.voter_roll

    def vote(self, caller: str, candidate_id: int, now: int) -> VoteCasted:
        state = self.state(now)
        if state is ElectionState.SCHEDULED:
            raise TemporalError(NOT_STARTED, f"Election {self.id} has not started yet")
        if state is ElectionState.CLOSED:
            raise TemporalError(ENDED, f"Election {self.id} has ended")

        voter = self.voter_roll.get(caller)
        if voter.has_voted:
            raise EligibilityError(ALREADY_VOTED, f"{caller} has already voted")
        if candidate_id not in self.candidate_roster:
            raise RangeError(INVALID_CANDIDATE, f"Candidate {candidate_id} does not exist")

        self.voter_roll.record_vote(caller, candidate_id)
        self.candidate_roster.record_vote(candidate_id)
        return VoteCasted(election_id=self.id, voter=caller, candidate_id=candidate_id)

    def __repr__(self):
        return f"<Election id={self.id} name={self.name!r} window=[{self.start_time}, {self.end_time})>"
