from sqlalchemy.orm import Session

from ballotbox.infrastructure.models import ElectionEvent


class EventRepository:
    """Append-only log of ElectionCreated / VoteCasted records."""

    def __init__(self, db: Session):
        self.db = db

    def append(self, event):
        record = ElectionEvent(kind=event.kind, election_id=event.election_id, payload=event.payload())
        self.db.add(record)
        self.db.flush()
        return record

    def list_events(self, after: int = 0, limit: int = 100):
        return (
            self.db.query(ElectionEvent)
            .filter(ElectionEvent.id > after)
            .order_by(ElectionEvent.id)
            .limit(limit)
            .all()
        )
