from sqlalchemy.orm import Session
from sqlalchemy import text
from sqlalchemy.exc import OperationalError, ProgrammingError

from app.db.session import SessionLocal
from app.core.config import settings
from app.models.user import User
from app.services.account_service import register_account


def ensure_admin(db: Session, email: str, password: str) -> User:
    u = db.query(User).filter(User.email == email.lower()).first()
    if u:
        if u.role != "admin":
            u.role = "admin"
            db.commit()
        return u
    return register_account(db, "Admin", "User", email, password, role="admin")


def run(db=None):
    if not settings.SEED_ADMIN_EMAIL or not settings.SEED_ADMIN_PASSWORD:
        print("[seed] SEED_ADMIN_EMAIL/SEED_ADMIN_PASSWORD not set. Nothing to seed.")
        return
    own_session = db is None
    if own_session:
        db = SessionLocal()
    try:
        # tolerate an unmigrated database
        try:
            db.execute(text("SELECT 1 FROM users LIMIT 1"))
        except (ProgrammingError, OperationalError):
            db.rollback()
            print("[seed] users table not found yet. Skipping seeding (run alembic upgrade head).")
            return
        u = ensure_admin(db, settings.SEED_ADMIN_EMAIL, settings.SEED_ADMIN_PASSWORD)
        print(f"[seed] admin account ready: {u.email}")
    finally:
        if own_session:
            db.close()


if __name__ == "__main__":
    run()
