import pytest

from ballotbox.domain.clock import FixedClock
from ballotbox.domain.projections import CandidateView, election_details, election_summaries, visible_event_payload
from ballotbox.domain.registry import ElectionRegistry

AUTHORITY = "authority"
T = 1_700_000_000


@pytest.fixture
def clock():
    return FixedClock(T - 1)


@pytest.fixture
def registry(clock):
    registry = ElectionRegistry(authority=AUTHORITY, clock=clock)
    registry.create_election(AUTHORITY, "Council", T, T + 100, ["v1", "v2", "v3"], ["Alice", "Bob"])
    registry.create_election(AUTHORITY, "Budget", T, T + 50, ["v2", "v4"], ["Yes", "No"])
    return registry


def details(registry, clock, caller, election_id=1):
    return election_details(registry.get_election(election_id), caller, clock.now())


def test_results_hidden_while_open(registry, clock):
    clock.set(T + 1)
    registry.vote("v1", 1, 1)

    view = details(registry, clock, "v1")

    assert view.state == "open"
    assert not view.has_ended
    assert view.candidates == [CandidateView(id=1, name="Alice"), CandidateView(id=2, name="Bob")]
    assert view.results == []
    assert view.voters == []
    assert view.voter_choices == []
    assert view.caller_has_voted
    assert view.caller_choice == 1


def test_results_revealed_at_end_time(registry, clock):
    clock.set(T + 1)
    registry.vote("v1", 1, 1)

    clock.set(T + 100)
    view = details(registry, clock, "v2")

    assert view.state == "closed"
    assert view.has_ended
    assert view.results == [1, 0]
    assert view.voters == ["v1", "v2", "v3"]
    assert view.voter_choices == [1, 0, 0]
    assert not view.caller_has_voted
    assert view.caller_choice == 0


def test_details_are_stable_across_calls(registry, clock):
    clock.set(T + 101)
    assert details(registry, clock, "v3") == details(registry, clock, "v3")


def test_scenario_full_election(registry, clock):
    clock.set(T + 1)
    registry.vote("v1", 1, 1)
    assert details(registry, clock, "v1").voters == []

    clock.set(T + 101)
    view = details(registry, clock, AUTHORITY)
    assert view.results == [1, 0]
    assert view.voter_choices[view.voters.index("v1")] == 1
    assert view.voter_choices[view.voters.index("v2")] == 0
    assert view.voter_choices[view.voters.index("v3")] == 0


def test_authority_sees_every_election(registry, clock):
    summaries = election_summaries(registry.elections(), AUTHORITY, AUTHORITY, clock.now())

    assert [summary.election_id for summary in summaries] == [1, 2]
    assert not any(summary.caller_has_voted for summary in summaries)


def test_voter_sees_only_own_elections(registry, clock):
    clock.set(T + 1)
    registry.vote("v2", 2, 1)

    summaries = election_summaries(registry.elections(), "v2", AUTHORITY, clock.now())
    assert [(s.election_id, s.caller_has_voted) for s in summaries] == [(1, False), (2, True)]

    summaries = election_summaries(registry.elections(), "v4", AUTHORITY, clock.now())
    assert [s.name for s in summaries] == ["Budget"]


def test_stranger_sees_nothing(registry, clock):
    assert election_summaries(registry.elections(), "nobody", AUTHORITY, clock.now()) == []


def test_summary_state_follows_clock(registry, clock):
    clock.set(T + 60)
    summaries = election_summaries(registry.elections(), AUTHORITY, AUTHORITY, clock.now())

    assert [summary.state for summary in summaries] == ["open", "closed"]


def test_vote_event_hides_candidate_until_close(registry, clock):
    election = registry.get_election(1)
    payload = {"election_id": 1, "voter": "v1", "candidate_id": 2}

    clock.set(T + 1)
    assert visible_event_payload("VoteCasted", payload, election, clock.now()) == {
        "election_id": 1, "voter": "v1", "candidate_id": None,
    }

    clock.set(T + 100)
    assert visible_event_payload("VoteCasted", payload, election, clock.now()) == payload


def test_creation_event_is_always_visible(registry, clock):
    payload = {"election_id": 1, "name": "Council", "start_time": T, "end_time": T + 100}

    assert visible_event_payload("ElectionCreated", payload, registry.get_election(1), clock.now()) == payload
