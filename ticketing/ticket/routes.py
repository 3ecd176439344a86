# ticketing/ticket/routes.py
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ticketing.core.logging_config import get_logger
from ticketing.core.security import Identity, get_identity
from ticketing.ticket import repository as ticket_repository
from ticketing.ticket.schemas import TicketCreate, TicketOut

logger = get_logger(__name__)

router = APIRouter(tags=["Tickets"])


def get_db(request: Request):
    yield from request.app.state.storage.session()


@router.post("/", response_model=TicketOut, status_code=201)
def create(
    ticket: TicketCreate,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    created = ticket_repository.create_ticket(db, ticket, owner=identity.username)
    logger.info("ticket created", extra={"ticket_id": created.id, "owner": created.owner})
    return created


@router.get("/", response_model=list[TicketOut])
def list_all(
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    return ticket_repository.get_all_tickets(db)
