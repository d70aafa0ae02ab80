from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class ElectionCreated:
    election_id: int
    name: str
    start_time: int
    end_time: int

    kind = "ElectionCreated"

    def payload(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class VoteCasted:
    election_id: int
    voter: str
    candidate_id: int

    kind = "VoteCasted"

    def payload(self) -> dict:
        return asdict(self)
