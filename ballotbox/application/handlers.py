import logging
from dataclasses import asdict

from ballotbox.application.commands import CastVoteCommand, CreateElectionCommand
from ballotbox.application.queries import GetElectionDetailsQuery, GetElectionEventsQuery, GetElectionsQuery
from ballotbox.application.bus import command_bus, query_bus
from ballotbox.config import ELECTION_AUTHORITY
from ballotbox.domain.clock import SystemClock
from ballotbox.domain.errors import ElectionError
from ballotbox.domain.projections import election_details, election_summaries, visible_event_payload
from ballotbox.domain.registry import ElectionRegistry
from ballotbox.infrastructure.database import SessionLocal
from ballotbox.infrastructure.election_repo import ElectionRepository
from ballotbox.infrastructure.event_repo import EventRepository

logger = logging.getLogger(__name__)


def build_registry(db, clock):
    return ElectionRegistry(
        authority=ELECTION_AUTHORITY,
        clock=clock,
        store=ElectionRepository(db),
        publish=EventRepository(db).append,
    )


class ClockedHandler:
    def __init__(self, clock):
        self.clock = clock


class CreateElectionHandler(ClockedHandler):
    def handle(self, command: CreateElectionCommand):
        with SessionLocal() as db:
            registry = build_registry(db, self.clock)
            try:
                election_id = registry.create_election(
                    command.caller,
                    command.name,
                    command.start_time,
                    command.end_time,
                    command.voters,
                    command.candidates,
                )
            except ElectionError as e:
                logger.warning("Election creation by %s rejected: %s/%s", command.caller, e.kind, e.reason)
                raise
            db.commit()
        return {"election_id": election_id}


class CastVoteHandler(ClockedHandler):
    def handle(self, command: CastVoteCommand):
        with SessionLocal() as db:
            registry = build_registry(db, self.clock)
            try:
                registry.vote(command.caller, command.election_id, command.candidate_id)
            except ElectionError as e:
                logger.warning("Vote by %s in election %s rejected: %s/%s",
                               command.caller, command.election_id, e.kind, e.reason)
                raise
            db.commit()


class GetElectionDetailsHandler(ClockedHandler):
    def handle(self, query: GetElectionDetailsQuery):
        with SessionLocal() as db:
            registry = build_registry(db, self.clock)
            election = registry.get_election(query.election_id)
            return asdict(election_details(election, query.caller, self.clock.now()))


class GetElectionsHandler(ClockedHandler):
    def handle(self, query: GetElectionsQuery):
        with SessionLocal() as db:
            registry = build_registry(db, self.clock)
            summaries = election_summaries(
                registry.elections(), query.caller, registry.authority, self.clock.now()
            )
            return [asdict(summary) for summary in summaries]


class GetElectionEventsHandler(ClockedHandler):
    def handle(self, query: GetElectionEventsQuery):
        with SessionLocal() as db:
            registry = build_registry(db, self.clock)
            registry.require_authority(query.caller, "read the event log")
            now = self.clock.now()
            elections = {}
            results = []
            for event in EventRepository(db).list_events(after=query.after, limit=query.limit):
                if event.election_id not in elections:
                    elections[event.election_id] = registry.get_election(event.election_id)
                results.append({
                    "id": event.id,
                    "kind": event.kind,
                    "election_id": event.election_id,
                    "payload": visible_event_payload(event.kind, event.payload, elections[event.election_id], now),
                    "created_at": event.created_at.isoformat(),
                })
            return results


def configure_clock(clock):
    """Point every time-sensitive handler at ``clock``."""
    for bus in (command_bus, query_bus):
        for handler in bus.handlers.values():
            if isinstance(handler, ClockedHandler):
                handler.clock = clock


clock = SystemClock()

command_bus.register_handler(CreateElectionCommand, CreateElectionHandler(clock))
command_bus.register_handler(CastVoteCommand, CastVoteHandler(clock))

query_bus.register_handler(GetElectionDetailsQuery, GetElectionDetailsHandler(clock))
query_bus.register_handler(GetElectionsQuery, GetElectionsHandler(clock))
query_bus.register_handler(GetElectionEventsQuery, GetElectionEventsHandler(clock))
