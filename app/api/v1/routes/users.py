from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.models.user import User
from app.schemas.user import (
    UserProfileUpdate, PreferencesUpdate, PassportUpdate, AccountDeleteRequest,
    user_out, preferences_out, passport_out,
)
from app.schemas.booking import booking_out, booking_summary
from app.schemas.common import Pagination, success
from app.core.errors import Unauthorized, ValidationError
from app.api.deps import get_current_user, require_roles
from app.services import account_service

router = APIRouter(prefix="/users", tags=["users"])

@router.put("/profile")
def update_profile(body: UserProfileUpdate, db: Session = Depends(get_db), me: User = Depends(get_current_user)):
    try:
        user = account_service.update_profile(db, me, body.model_dump(exclude_unset=True, exclude_none=True))
    except ValueError as e:
        raise ValidationError(str(e))
    return success({"user": user_out(user)}, "Profile updated successfully")

@router.put("/preferences")
def update_preferences(body: PreferencesUpdate, db: Session = Depends(get_db), me: User = Depends(get_current_user)):
    try:
        user = account_service.update_preferences(db, me, body.model_dump())
    except ValueError as e:
        raise ValidationError(str(e))
    return success({"preferences": preferences_out(user)}, "Preferences updated successfully")

@router.put("/passport")
def update_passport(body: PassportUpdate, db: Session = Depends(get_db), me: User = Depends(get_current_user)):
    try:
        user = account_service.update_passport(db, me, body.number, body.expiryDate, body.countryOfIssue)
    except ValueError as e:
        raise ValidationError(str(e))
    return success({"passport": passport_out(user)}, "Passport information updated successfully")

@router.delete("/account")
def delete_account(body: AccountDeleteRequest, db: Session = Depends(get_db), me: User = Depends(get_current_user)):
    try:
        account_service.delete_account(db, me, body.password)
    except PermissionError as e:
        raise Unauthorized(str(e))
    except ValueError as e:
        raise ValidationError(str(e))
    return success(message="Account deleted successfully")

@router.get("/dashboard")
def dashboard(db: Session = Depends(get_db), me: User = Depends(get_current_user)):
    data = account_service.dashboard(db, me)
    return success({
        "dashboard": {
            "user": user_out(me),
            "stats": data["stats"],
            "recentBookings": [booking_summary(b) for b in data["recentBookings"]],
            "upcomingTrips": [booking_out(b, with_user=False) for b in data["upcomingTrips"]],
        }
    })

@router.get("")
def list_users(page: int = Query(1, ge=1), limit: int = Query(20, ge=1, le=100),
               db: Session = Depends(get_db),
               me: User = Depends(require_roles("admin"))):
    users, total = account_service.list_users(db, page, limit)
    return success({"users": [user_out(u) for u in users]}, pagination=Pagination.build(page, limit, total))
