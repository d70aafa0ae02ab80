"""Read-only views of elections, filtered by who is asking and when.

Tallies, the voter list and per-voter choices stay hidden until an election
closes. Before that the corresponding lists are returned empty, which means
"not yet available" rather than "nobody voted".
"""
from dataclasses import dataclass, field, replace
from typing import List

from ballotbox.domain.election import Election
from ballotbox.domain.events import VoteCasted


@dataclass(frozen=True)
class CandidateView:
    id: int
    name: str


@dataclass(frozen=True)
class ElectionView:
    election_id: int
    name: str
    start_time: int
    end_time: int
    state: str
    has_ended: bool
    candidates: List[CandidateView]
    caller_has_voted: bool
    caller_choice: int
    results: List[int] = field(default_factory=list)
    voters: List[str] = field(default_factory=list)
    voter_choices: List[int] = field(default_factory=list)


@dataclass(frozen=True)
class ElectionSummary:
    election_id: int
    name: str
    start_time: int
    end_time: int
    state: str
    caller_has_voted: bool


def election_details(election: Election, caller: str, now: int) -> ElectionView:
    state = election.state(now)
    has_ended = election.has_ended(now)
    caller_choice = election.voter_roll.choice_of(caller)

    view = ElectionView(
        election_id=election.id,
        name=election.name,
        start_time=election.start_time,
        end_time=election.end_time,
        state=state.value,
        has_ended=has_ended,
        candidates=[CandidateView(id=candidate.id, name=candidate.name)
                    for candidate in election.candidate_roster],
        caller_has_voted=caller_choice != 0,
        caller_choice=caller_choice,
    )
    if not has_ended:
        return view

    return replace(
        view,
        results=election.candidate_roster.tallies(),
        voters=election.voter_roll.identities(),
        voter_choices=election.voter_roll.choices(),
    )


def election_summaries(elections: List[Election], caller: str, authority: str, now: int) -> List[ElectionSummary]:
    """Summaries of the elections ``caller`` is related to, ascending by id.

    The authority sees every election; a voter sees the ones they are
    registered in; anyone else gets an empty list.
    """
    summaries = []
    for election in sorted(elections, key=lambda item: item.id):
        if caller != authority and not election.is_registered(caller):
            continue
        summaries.append(ElectionSummary(
            election_id=election.id,
            name=election.name,
            start_time=election.start_time,
            end_time=election.end_time,
            state=election.state(now).value,
            caller_has_voted=election.voter_roll.choice_of(caller) != 0,
        ))
    return summaries


def visible_event_payload(kind: str, payload: dict, election: Election, now: int) -> dict:
    """Payload of a logged event as it may be shown at ``now``.

    The candidate a vote went to stays hidden until its election closes.
    """
    if kind == VoteCasted.kind and not election.has_ended(now):
        return {**payload, "candidate_id": None}
    return dict(payload)
