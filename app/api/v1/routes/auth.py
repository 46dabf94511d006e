import logging
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.schemas.auth import RegisterRequest, LoginRequest, AuthProfileUpdate, ChangePasswordRequest
from app.schemas.common import success
from app.schemas.user import user_out
from app.models.user import User
from app.core.errors import Conflict, Unauthorized, ValidationError
from app.core.security import create_access_token
from app.api.deps import get_current_user, TOKEN_COOKIE
from app.services import account_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

def _token_for(u: User) -> str:
    return create_access_token(u.id, u.email, u.role)

@router.post("/register", status_code=201)
def register(body: RegisterRequest, db: Session = Depends(get_db)):
    try:
        user = account_service.register_account(
            db,
            first_name=body.firstName,
            last_name=body.lastName,
            email=body.email,
            password=body.password,
            phone=body.phone,
            date_of_birth=body.dateOfBirth,
        )
    except account_service.EmailTaken as e:
        raise Conflict(str(e))
    return success({"user": user_out(user), "token": _token_for(user)}, "User registered successfully")

@router.post("/login")
def login(body: LoginRequest, db: Session = Depends(get_db)):
    user = account_service.authenticate(db, body.email, body.password)
    if not user:
        logger.info("failed login for %s", body.email)
        raise Unauthorized("Invalid email or password")
    return success({"user": user_out(user), "token": _token_for(user)}, "Login successful")

@router.get("/me")
def me(me: User = Depends(get_current_user)):
    return success({"user": user_out(me)})

@router.put("/profile")
def update_profile(body: AuthProfileUpdate, db: Session = Depends(get_db), me: User = Depends(get_current_user)):
    try:
        user = account_service.update_profile(db, me, body.model_dump(exclude_unset=True, exclude_none=True))
    except ValueError as e:
        raise ValidationError(str(e))
    return success({"user": user_out(user)}, "Profile updated successfully")

@router.post("/change-password")
def change_password(body: ChangePasswordRequest, db: Session = Depends(get_db), me: User = Depends(get_current_user)):
    try:
        account_service.change_password(db, me, body.oldPassword, body.newPassword)
    except PermissionError as e:
        raise ValidationError(str(e))
    return success(message="Password changed successfully")

@router.post("/logout")
def logout(response: Response, me: User = Depends(get_current_user)):
    # Tokens are stateless; the client discards its copy.
    response.delete_cookie(TOKEN_COOKIE)
    return success(message="Logout successful")
