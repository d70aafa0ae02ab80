from typing import List

from pydantic import BaseModel


class CreateElectionCommand(BaseModel):
    caller: str
    name: str
    start_time: int
    end_time: int
    voters: List[str]
    candidates: List[str]


class CastVoteCommand(BaseModel):
    caller: str
    election_id: int
    candidate_id: int
