from datetime import datetime, timezone
from typing import Any, Dict, List

from pydantic import BaseModel, Field
from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from ballotbox.infrastructure.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class Election(Base):
    __tablename__ = "elections"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String, nullable=False)
    start_time = Column(Integer, nullable=False)
    end_time = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    voters = relationship("ElectionVoter", back_populates="election",
                          order_by="ElectionVoter.position", cascade="all, delete-orphan")
    candidates = relationship("ElectionCandidate", back_populates="election",
                              order_by="ElectionCandidate.candidate_id", cascade="all, delete-orphan")


class ElectionVoter(Base):
    __tablename__ = "election_voters"
    __table_args__ = (UniqueConstraint("election_id", "identity"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    election_id = Column(Integer, ForeignKey("elections.id"), nullable=False, index=True)
    identity = Column(String, nullable=False, index=True)
    position = Column(Integer, nullable=False)
    vote_choice = Column(Integer, default=0, nullable=False)  # 0 until the voter votes

    election = relationship("Election", back_populates="voters")


class ElectionCandidate(Base):
    __tablename__ = "election_candidates"
    __table_args__ = (UniqueConstraint("election_id", "candidate_id"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    election_id = Column(Integer, ForeignKey("elections.id"), nullable=False, index=True)
    candidate_id = Column(Integer, nullable=False)
    name = Column(String, nullable=False)
    vote_count = Column(Integer, default=0, nullable=False)

    election = relationship("Election", back_populates="candidates")


class ElectionEvent(Base):
    __tablename__ = "election_events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    kind = Column(String, nullable=False)  # "ElectionCreated" or "VoteCasted"
    election_id = Column(Integer, ForeignKey("elections.id"), nullable=False, index=True)
    payload = Column(JSON, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)


class CreateElectionRequest(BaseModel):
    name: str
    start_time: int
    end_time: int
    voters: List[str]
    candidates: List[str]


class CastVoteRequest(BaseModel):
    candidate_id: int


class ElectionCreatedResponse(BaseModel):
    election_id: int


class CandidateResponse(BaseModel):
    id: int
    name: str


class ElectionDetailsResponse(BaseModel):
    election_id: int
    name: str
    start_time: int
    end_time: int
    state: str
    has_ended: bool
    candidates: List[CandidateResponse]
    results: List[int] = Field(default_factory=list)
    caller_has_voted: bool
    caller_choice: int
    voters: List[str] = Field(default_factory=list)
    voter_choices: List[int] = Field(default_factory=list)


class ElectionSummaryResponse(BaseModel):
    election_id: int
    name: str
    start_time: int
    end_time: int
    state: str
    caller_has_voted: bool


class EventResponse(BaseModel):
    id: int
    kind: str
    election_id: int
    payload: Dict[str, Any]
    created_at: str  # ISO formatted datetime
