import logging
import uuid
from datetime import date
from sqlalchemy.orm import Session
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from app.core.security import hash_password, verify_password
from app.models.user import User, CURRENCIES, LANGUAGES
from app.models.booking import Booking
from app.services.booking_service import count_active_bookings, recent_bookings, upcoming_trips, utc_today

logger = logging.getLogger(__name__)

PROFILE_FIELDS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "phone": "phone",
    "dateOfBirth": "date_of_birth",
}


class EmailTaken(ValueError):
    pass


def get_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email.strip().lower()).first()


def register_account(db: Session, first_name: str, last_name: str, email: str, password: str,
                     phone: str | None = None, date_of_birth: date | None = None, role: str = "user") -> User:
    email_l = email.strip().lower()
    if get_by_email(db, email_l):
        raise EmailTaken("User with this email already exists")
    u = User(
        id=str(uuid.uuid4()),
        first_name=first_name.strip(),
        last_name=last_name.strip(),
        email=email_l,
        password_hash=hash_password(password),
        phone=phone.strip() if phone else None,
        date_of_birth=date_of_birth,
        role=role,
    )
    db.add(u)
    try:
        db.commit()
    except IntegrityError:
        # a concurrent registration won the unique index
        db.rollback()
        raise EmailTaken("User with this email already exists")
    db.refresh(u)
    logger.info("registered user %s", u.id)
    return u


def authenticate(db: Session, email: str, password: str) -> User | None:
    """Return the account for valid credentials, None otherwise (unknown email or bad password alike)."""
    u = get_by_email(db, email)
    if not u or not verify_password(password, u.password_hash):
        return None
    return u


def update_profile(db: Session, user: User, changes: dict) -> User:
    updates = {PROFILE_FIELDS[k]: v for k, v in changes.items() if k in PROFILE_FIELDS}
    prefs = changes.get("preferences")
    if not updates and not prefs:
        raise ValueError("No valid fields provided for update")
    for attr, value in updates.items():
        setattr(user, attr, value)
    if prefs:
        _apply_preferences(user, prefs)
    db.commit()
    db.refresh(user)
    return user


def _apply_preferences(user: User, prefs: dict) -> None:
    currency = prefs.get("currency")
    language = prefs.get("language")
    if currency is not None:
        if currency not in CURRENCIES:
            raise ValueError(f"unsupported currency: {currency}")
        user.pref_currency = currency
    if language is not None:
        if language not in LANGUAGES:
            raise ValueError(f"unsupported language: {language}")
        user.pref_language = language
    if prefs.get("notifications") is not None:
        user.pref_notifications = bool(prefs["notifications"])


def update_preferences(db: Session, user: User, prefs: dict) -> User:
    prefs = {k: v for k, v in prefs.items() if v is not None}
    if not prefs:
        raise ValueError("No preferences provided for update")
    _apply_preferences(user, prefs)
    db.commit()
    db.refresh(user)
    return user


def update_passport(db: Session, user: User, number: str, expiry_date: date, country: str,
                    today: date | None = None) -> User:
    today = today or utc_today()
    if expiry_date <= today:
        raise ValueError("Passport expiry date must be in the future")
    user.passport_number = number
    user.passport_expiry = expiry_date
    user.passport_country = country
    db.commit()
    db.refresh(user)
    return user


def change_password(db: Session, user: User, old_password: str, new_password: str) -> None:
    if not verify_password(old_password, user.password_hash):
        raise PermissionError("Old password incorrect")
    user.password_hash = hash_password(new_password)
    db.commit()


def delete_account(db: Session, user: User, password: str) -> None:
    if not verify_password(password, user.password_hash):
        raise PermissionError("Invalid password")
    if count_active_bookings(db, user.id) > 0:
        raise ValueError("Cannot delete account with active bookings. Please cancel or complete all bookings first.")
    user_id = user.id
    db.query(Booking).filter(Booking.user_id == user_id).delete(synchronize_session=False)
    db.delete(user)
    db.commit()
    logger.info("deleted account %s", user_id)


def list_users(db: Session, page: int = 1, limit: int = 20) -> tuple[list[User], int]:
    q = db.query(User)
    total = q.count()
    if (page - 1) * limit >= total:
        return [], total
    users = q.order_by(User.created_at.desc()).offset((page - 1) * limit).limit(limit).all()
    return users, total


def dashboard(db: Session, user: User) -> dict:
    total = db.query(Booking).filter(Booking.user_id == user.id).count()
    total_spent = (
        db.query(func.coalesce(func.sum(Booking.total_amount), 0))
        .filter(Booking.user_id == user.id, Booking.status != "cancelled")
        .scalar()
    )
    by_status = (
        db.query(Booking.status, func.count(Booking.id), func.coalesce(func.sum(Booking.total_amount), 0))
        .filter(Booking.user_id == user.id)
        .group_by(Booking.status)
        .all()
    )
    return {
        "stats": {
            "totalBookings": int(total),
            "totalSpent": float(total_spent or 0),
            "bookingsByStatus": [{"status": st, "count": int(c), "totalSpent": float(s or 0)} for st, c, s in by_status],
        },
        "recentBookings": recent_bookings(db, user.id),
        "upcomingTrips": upcoming_trips(db, user.id),
    }
