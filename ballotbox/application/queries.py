from pydantic import BaseModel


class GetElectionDetailsQuery(BaseModel):
    caller: str
    election_id: int


class GetElectionsQuery(BaseModel):
    caller: str


class GetElectionEventsQuery(BaseModel):
    caller: str
    after: int = 0
    limit: int = 100
