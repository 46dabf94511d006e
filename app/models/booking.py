from sqlalchemy import String, Float, DateTime, JSON, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from datetime import datetime, timezone
from app.db.session import Base
from app.models.user import User

BOOKING_TYPES = ("flight", "hotel", "car", "restaurant")
ACTIVE_STATUSES = ("pending", "confirmed")

def _now() -> datetime:
    return datetime.now(timezone.utc)

class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        Index("ix_bookings_user_created", "user_id", "created_at"),
        Index("ix_bookings_type_status", "type", "status"),
        CheckConstraint("total_amount >= 0", name="ck_bookings_total_amount_nonneg"),
        CheckConstraint("status IN ('pending','confirmed','cancelled','completed')", name="ck_bookings_status"),
        CheckConstraint("type IN ('flight','hotel','car','restaurant')", name="ck_bookings_type"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True)
    type: Mapped[str] = mapped_column(String(12))  # flight, hotel, car, restaurant
    booking_reference: Mapped[str] = mapped_column(String(40), unique=True, index=True)

    status: Mapped[str] = mapped_column(String(12), default="pending")  # pending, confirmed, cancelled, completed
    total_amount: Mapped[float] = mapped_column(Float, default=0)
    currency: Mapped[str] = mapped_column(String(3), default="USD")
    booking_details: Mapped[dict] = mapped_column(JSON, default=dict)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now, onupdate=_now)

    user: Mapped[User] = relationship(User, lazy="joined")
