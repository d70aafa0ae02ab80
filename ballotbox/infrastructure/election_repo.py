from sqlalchemy import func, update
from sqlalchemy.orm import Session, selectinload

from ballotbox.domain import election as domain
from ballotbox.domain.errors import ALREADY_VOTED, EligibilityError
from ballotbox.infrastructure.models import Election, ElectionCandidate, ElectionVoter


class ElectionRepository:
    """SQL-backed election store.

    Nothing here commits; the handler that owns the session decides whether
    the whole operation is kept or thrown away.
    """

    def __init__(self, db: Session):
        self.db = db

    def count(self) -> int:
        return self.db.query(func.count(Election.id)).scalar()

    def add(self, election: domain.Election):
        record = Election(
            id=election.id,
            name=election.name,
            start_time=election.start_time,
            end_time=election.end_time,
            voters=[
                ElectionVoter(identity=voter.identity, position=position, vote_choice=voter.vote_choice)
                for position, voter in enumerate(election.voter_roll)
            ],
            candidates=[
                ElectionCandidate(candidate_id=candidate.id, name=candidate.name, vote_count=candidate.vote_count)
                for candidate in election.candidate_roster
            ],
        )
        self.db.add(record)
        self.db.flush()

    def get(self, election_id: int):
        record = (
            self.db.query(Election)
            .options(selectinload(Election.voters), selectinload(Election.candidates))
            .filter(Election.id == election_id)
            .first()
        )
        return self._to_domain(record) if record else None

    def all(self):
        records = (
            self.db.query(Election)
            .options(selectinload(Election.voters), selectinload(Election.candidates))
            .order_by(Election.id)
            .all()
        )
        return [self._to_domain(record) for record in records]

    def save_vote(self, election: domain.Election, voter: str, candidate_id: int):
        # Only a voter still at 0 may be written, so a concurrent vote that
        # committed first turns this one into AlreadyVoted.
        result = self.db.execute(
            update(ElectionVoter)
            .where(
                ElectionVoter.election_id == election.id,
                ElectionVoter.identity == voter,
                ElectionVoter.vote_choice == domain.NO_VOTE,
            )
            .values(vote_choice=candidate_id)
        )
        if result.rowcount != 1:
            raise EligibilityError(ALREADY_VOTED, f"{voter} has already voted")

        self.db.execute(
            update(ElectionCandidate)
            .where(
                ElectionCandidate.election_id == election.id,
                ElectionCandidate.candidate_id == candidate_id,
            )
            .values(vote_count=ElectionCandidate.vote_count + 1)
        )

    @staticmethod
    def _to_domain(record: Election) -> domain.Election:
        return domain.Election(
            election_id=record.id,
            name=record.name,
            start_time=record.start_time,
            end_time=record.end_time,
            voter_roll=domain.VoterRoll([
                domain.Voter(identity=row.identity, vote_choice=row.vote_choice) for row in record.voters
            ]),
            candidate_roster=domain.CandidateRoster([
                domain.Candidate(id=row.candidate_id, name=row.name, vote_count=row.vote_count)
                for row in record.candidates
            ]),
        )
