import uuid
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.models.user import User
from app.schemas.booking import BookingCreate, BookingStatusUpdate, BookingStatus, BookingType, booking_out, booking_summary
from app.schemas.common import Pagination, success
from app.core.errors import Conflict, NotFound, ServerError, ValidationError
from app.api.deps import get_current_user, require_roles
from app.services import booking_service

router = APIRouter(prefix="/bookings", tags=["bookings"])

@router.get("")
def list_bookings(
    type: Optional[BookingType] = None,
    status: Optional[BookingStatus] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    items, total = booking_service.list_user_bookings(db, me, type, status, page, limit)
    return success(
        {"bookings": [booking_out(b) for b in items]},
        pagination=Pagination.build(page, limit, total),
    )

@router.post("", status_code=201)
def create_booking(body: BookingCreate, db: Session = Depends(get_db), me: User = Depends(get_current_user)):
    try:
        booking = booking_service.create_booking(
            db, me, body.type, body.totalAmount, body.currency, body.bookingDetails, body.bookingReference,
        )
    except booking_service.DuplicateReference as e:
        raise Conflict(str(e))
    except ValueError as e:
        raise ValidationError(str(e))
    except RuntimeError as e:
        raise ServerError(str(e))
    return success({"booking": booking_out(booking)}, "Booking created successfully")

@router.get("/stats/summary")
def stats_summary(db: Session = Depends(get_db), me: User = Depends(get_current_user)):
    summary = booking_service.booking_stats(db, me)
    summary["recentBookings"] = [booking_summary(b) for b in summary["recentBookings"]]
    return success({"summary": summary})

@router.get("/reference/{reference}")
def get_by_reference(reference: str, db: Session = Depends(get_db), me: User = Depends(get_current_user)):
    try:
        booking = booking_service.get_user_booking_by_reference(db, me, reference)
    except LookupError as e:
        raise NotFound(str(e))
    return success({"booking": booking_out(booking)})

@router.get("/{booking_id}")
def get_booking(booking_id: uuid.UUID, db: Session = Depends(get_db), me: User = Depends(get_current_user)):
    try:
        booking = booking_service.get_user_booking(db, me, str(booking_id))
    except LookupError as e:
        raise NotFound(str(e))
    return success({"booking": booking_out(booking)})

@router.delete("/{booking_id}")
def cancel_booking(booking_id: uuid.UUID, db: Session = Depends(get_db), me: User = Depends(get_current_user)):
    try:
        booking = booking_service.get_user_booking(db, me, str(booking_id))
        booking = booking_service.cancel_booking(db, booking)
    except LookupError as e:
        raise NotFound(str(e))
    except ValueError as e:
        raise ValidationError(str(e))
    return success({"booking": booking_out(booking)}, "Booking cancelled successfully")

@router.patch("/{booking_id}/status")
def update_status(booking_id: uuid.UUID, body: BookingStatusUpdate,
                  db: Session = Depends(get_db),
                  me: User = Depends(require_roles("admin"))):
    try:
        booking = booking_service.get_booking(db, str(booking_id))
        booking = booking_service.transition_booking(db, booking, body.status)
    except LookupError as e:
        raise NotFound(str(e))
    except ValueError as e:
        raise ValidationError(str(e))
    return success({"booking": booking_out(booking)}, f"Booking {booking.status}")
