from sqlalchemy import String, DateTime, Date, Boolean, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, date, timezone
from app.db.session import Base

CURRENCIES = ("USD", "EUR", "GBP", "JPY", "CAD", "AUD")
LANGUAGES = ("en", "es", "fr", "de", "it", "pt", "zh", "ja")

def _now() -> datetime:
    return datetime.now(timezone.utc)

class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('user','admin')", name="ck_users_role"),
        CheckConstraint("pref_currency IN ('USD','EUR','GBP','JPY','CAD','AUD')", name="ck_users_pref_currency"),
        CheckConstraint("pref_language IN ('en','es','fr','de','it','pt','zh','ja')", name="ck_users_pref_language"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    first_name: Mapped[str] = mapped_column(String(50))
    last_name: Mapped[str] = mapped_column(String(50))
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255))
    phone: Mapped[str] = mapped_column(String(40), nullable=True)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=True)

    passport_number: Mapped[str] = mapped_column(String(40), nullable=True)
    passport_expiry: Mapped[date] = mapped_column(Date, nullable=True)
    passport_country: Mapped[str] = mapped_column(String(80), nullable=True)

    pref_currency: Mapped[str] = mapped_column(String(3), default="USD")       # USD|EUR|GBP|JPY|CAD|AUD
    pref_language: Mapped[str] = mapped_column(String(2), default="en")        # en|es|fr|de|it|pt|zh|ja
    pref_notifications: Mapped[bool] = mapped_column(Boolean, default=True)

    is_email_verified: Mapped[bool] = mapped_column(Boolean, default=False)
    role: Mapped[str] = mapped_column(String(12), default="user", index=True)  # user, admin

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now, onupdate=_now)

    @property
    def has_passport(self) -> bool:
        return bool(self.passport_number)
