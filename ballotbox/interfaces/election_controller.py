import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from ballotbox.application.commands import CastVoteCommand, CreateElectionCommand
from ballotbox.application.handlers import command_bus, query_bus
from ballotbox.application.queries import GetElectionDetailsQuery, GetElectionsQuery
from ballotbox.domain.errors import (
    AuthorizationError,
    ElectionError,
    EligibilityError,
    RangeError,
    TemporalError,
    ValidationError,
)
from ballotbox.infrastructure.models import (
    CastVoteRequest,
    CreateElectionRequest,
    ElectionCreatedResponse,
    ElectionDetailsResponse,
    ElectionSummaryResponse,
)
from ballotbox.security import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/elections", tags=["Elections"])

STATUS_CODES = {
    AuthorizationError: 403,
    ValidationError: 400,
    TemporalError: 409,
    EligibilityError: 403,
    RangeError: 404,
}


def to_http_error(error: ElectionError) -> HTTPException:
    return HTTPException(status_code=STATUS_CODES.get(type(error), 400), detail=error.to_dict())


def dispatch(bus, message):
    try:
        return bus.handle(message)
    except ElectionError as e:
        raise to_http_error(e)
    except Exception:
        logger.exception("Unhandled error while handling %s", type(message).__name__)
        raise HTTPException(status_code=500, detail="An unexpected error occurred")


@router.post("/", response_model=ElectionCreatedResponse, status_code=201)
def create_election(request: CreateElectionRequest, current_user: str = Depends(get_current_user)):
    command = CreateElectionCommand(caller=current_user, **request.model_dump())
    return dispatch(command_bus, command)


@router.get("/", response_model=list[ElectionSummaryResponse])
def list_elections(current_user: str = Depends(get_current_user)):
    return dispatch(query_bus, GetElectionsQuery(caller=current_user))


@router.get("/{election_id}", response_model=ElectionDetailsResponse)
def get_election_details(election_id: int, current_user: str = Depends(get_current_user)):
    query = GetElectionDetailsQuery(caller=current_user, election_id=election_id)
    return dispatch(query_bus, query)


@router.post("/{election_id}/votes", status_code=204)
def cast_vote(election_id: int, request: CastVoteRequest, current_user: str = Depends(get_current_user)):
    command = CastVoteCommand(caller=current_user, election_id=election_id, candidate_id=request.candidate_id)
    dispatch(command_bus, command)
    return Response(status_code=204)
