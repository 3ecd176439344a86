# ticketing/ticket/repository.py
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ticketing.core.errors import StorageError
from ticketing.ticket.models import Ticket
from ticketing.ticket.schemas import TicketCreate, TicketOut


def get_all_tickets(db: Session) -> list[TicketOut]:
    try:
        rows = db.scalars(select(Ticket).order_by(Ticket.id)).all()
    except SQLAlchemyError as exc:
        raise StorageError() from exc
    return [TicketOut.model_validate(row) for row in rows]


def create_ticket(db: Session, payload: TicketCreate, owner: str) -> TicketOut:
    db_ticket = Ticket(title=payload.title, body=payload.body, owner=owner)
    try:
        db.add(db_ticket)
        db.commit()
        db.refresh(db_ticket)
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageError() from exc
    return TicketOut.model_validate(db_ticket)
