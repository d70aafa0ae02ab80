from fastapi import APIRouter, Depends, Query

from ballotbox.application.handlers import query_bus
from ballotbox.application.queries import GetElectionEventsQuery
from ballotbox.infrastructure.models import EventResponse
from ballotbox.interfaces.election_controller import dispatch
from ballotbox.security import get_current_user

router = APIRouter(prefix="/events", tags=["Events"])


@router.get("/", response_model=list[EventResponse])
def list_events(
    after: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    current_user: str = Depends(get_current_user),
):
    """Tail the notification log. Authority only; vote choices appear once their election closes."""
    query = GetElectionEventsQuery(caller=current_user, after=after, limit=limit)
    return dispatch(query_bus, query)
