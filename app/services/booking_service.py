import logging
import random
import string
import time
import uuid
from datetime import date, datetime, timezone
from sqlalchemy.orm import Session
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from app.models.user import User
from app.models.booking import Booking, BOOKING_TYPES, ACTIVE_STATUSES

logger = logging.getLogger(__name__)

REF_ATTEMPTS = 10
_B36 = string.digits + string.ascii_lowercase

# Forward-only lifecycle; cancelled and completed are terminal.
TRANSITIONS = {
    "pending": {"confirmed", "cancelled"},
    "confirmed": {"completed", "cancelled"},
    "cancelled": set(),
    "completed": set(),
}


class DuplicateReference(ValueError):
    pass


def _base36(n: int) -> str:
    if n == 0:
        return "0"
    out = []
    while n:
        n, r = divmod(n, 36)
        out.append(_B36[r])
    return "".join(reversed(out))


def make_booking_ref(booking_type: str, now_ms: int | None = None) -> str:
    """TYPE-<base36 millis>-<5 random base36 chars>, upper-cased."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    suffix = "".join(random.choices(_B36, k=5))
    return f"{booking_type}-{_base36(now_ms)}-{suffix}".upper()


def allocate_booking_ref(db: Session, booking_type: str) -> str:
    # booking_reference must be unique; the unique index stays the final guard
    for _ in range(REF_ATTEMPTS):
        ref = make_booking_ref(booking_type)
        exists = db.query(Booking.id).filter(Booking.booking_reference == ref).first()
        if not exists:
            return ref
    raise RuntimeError("could not allocate booking reference")


def create_booking(db: Session, user: User, booking_type: str, total_amount: float, currency: str,
                   details: dict, reference: str | None = None) -> Booking:
    if booking_type not in BOOKING_TYPES:
        raise ValueError(f"invalid booking type: {booking_type}")
    if total_amount < 0:
        raise ValueError("Amount cannot be negative")
    if not details:
        raise ValueError("Booking details are required")

    if reference:
        reference = reference.upper()
        if db.query(Booking.id).filter(Booking.booking_reference == reference).first():
            raise DuplicateReference("Booking reference already exists")
    else:
        reference = allocate_booking_ref(db, booking_type)

    booking = Booking(
        id=str(uuid.uuid4()),
        user_id=user.id,
        type=booking_type,
        booking_reference=reference,
        status="pending",
        total_amount=float(total_amount),
        currency=(currency or "USD").upper(),
        booking_details=details,
    )
    db.add(booking)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateReference("Booking reference already exists")
    db.refresh(booking)
    logger.info("booking %s created for user %s", booking.booking_reference, user.id)
    return booking


def get_user_booking(db: Session, user: User, booking_id: str) -> Booking:
    b = db.query(Booking).filter(Booking.id == booking_id, Booking.user_id == user.id).first()
    if not b:
        raise LookupError("Booking not found")
    return b


def get_booking(db: Session, booking_id: str) -> Booking:
    b = db.get(Booking, booking_id)
    if not b:
        raise LookupError("Booking not found")
    return b


def get_user_booking_by_reference(db: Session, user: User, reference: str) -> Booking:
    b = (
        db.query(Booking)
        .filter(Booking.booking_reference == reference.strip().upper(), Booking.user_id == user.id)
        .first()
    )
    if not b:
        raise LookupError("Booking not found with this reference number")
    return b


def list_user_bookings(db: Session, user: User, booking_type: str | None = None, status: str | None = None,
                       page: int = 1, limit: int = 20) -> tuple[list[Booking], int]:
    q = db.query(Booking).filter(Booking.user_id == user.id)
    if booking_type:
        q = q.filter(Booking.type == booking_type)
    if status:
        q = q.filter(Booking.status == status)
    total = q.count()
    if (page - 1) * limit >= total:
        return [], total
    items = q.order_by(Booking.created_at.desc()).offset((page - 1) * limit).limit(limit).all()
    return items, total


def cancel_booking(db: Session, booking: Booking) -> Booking:
    if booking.status == "cancelled":
        raise ValueError("Booking is already cancelled")
    if booking.status == "completed":
        raise ValueError("Cannot cancel a completed booking")
    booking.status = "cancelled"
    db.commit()
    db.refresh(booking)
    # Refunds, provider notifications and confirmation emails are not wired; status change only.
    logger.info("booking %s cancelled", booking.booking_reference)
    return booking


def transition_booking(db: Session, booking: Booking, new_status: str) -> Booking:
    if new_status == "cancelled":
        return cancel_booking(db, booking)
    if new_status not in TRANSITIONS.get(booking.status, set()):
        raise ValueError(f"Cannot change booking status from {booking.status} to {new_status}")
    booking.status = new_status
    db.commit()
    db.refresh(booking)
    logger.info("booking %s moved to %s", booking.booking_reference, new_status)
    return booking


def count_active_bookings(db: Session, user_id: str) -> int:
    return db.query(Booking).filter(Booking.user_id == user_id, Booking.status.in_(ACTIVE_STATUSES)).count()


def recent_bookings(db: Session, user_id: str, limit: int = 5) -> list[Booking]:
    return (
        db.query(Booking)
        .filter(Booking.user_id == user_id)
        .order_by(Booking.created_at.desc())
        .limit(limit)
        .all()
    )


def booking_stats(db: Session, user: User) -> dict:
    total = db.query(Booking).filter(Booking.user_id == user.id).count()
    by_type = (
        db.query(Booking.type, func.count(Booking.id), func.coalesce(func.sum(Booking.total_amount), 0))
        .filter(Booking.user_id == user.id)
        .group_by(Booking.type)
        .all()
    )
    by_status = (
        db.query(Booking.status, func.count(Booking.id))
        .filter(Booking.user_id == user.id)
        .group_by(Booking.status)
        .all()
    )
    return {
        "totalBookings": int(total),
        "bookingsByType": [{"type": t, "count": int(c), "totalAmount": float(s or 0)} for t, c, s in by_type],
        "bookingsByStatus": [{"status": st, "count": int(c)} for st, c in by_status],
        "recentBookings": recent_bookings(db, user.id),
    }


def _trip_date(details: dict) -> date | None:
    """Start date of a trip from flight departure or hotel/car check-in details."""
    raw = None
    departure = details.get("departure")
    if isinstance(departure, dict):
        raw = departure.get("date")
    raw = raw or details.get("checkIn") or details.get("pickupDate")
    if not isinstance(raw, str):
        return None
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def upcoming_trips(db: Session, user_id: str, today: date | None = None, limit: int = 3) -> list[Booking]:
    today = today or utc_today()
    confirmed = db.query(Booking).filter(Booking.user_id == user_id, Booking.status == "confirmed").all()
    dated = []
    for b in confirmed:
        d = _trip_date(b.booking_details or {})
        if d and d >= today:
            dated.append((d, b))
    dated.sort(key=lambda pair: pair[0])
    return [b for _, b in dated[:limit]]
