"""Authentication routes."""
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from catalog_admin.core.config import settings
from catalog_admin.core.database import commit_or_raise, get_db
from catalog_admin.core.deps import get_current_user, get_optional_user
from catalog_admin.core.roles import ActionType, build_capabilities
from catalog_admin.core.security import create_access_token, get_password_hash, verify_password
from catalog_admin.models.user import User
from catalog_admin.schemas.common import MessageResponse
from catalog_admin.schemas.user import ChangePasswordRequest, LoginRequest, MeResponse, Token
from catalog_admin.services.audit import RequestContext, get_request_context, record_audit

router = APIRouter()


@router.post("/login", response_model=Token)
def login(
    login_data: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    """Login endpoint. Returns a bearer token and sets the session cookie."""
    user = db.query(User).filter(User.email == login_data.email).first()

    if not user or not verify_password(login_data.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials"
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is deactivated"
        )

    access_token = create_access_token(
        data={"sub": user.id, "email": user.email, "role": user.role})
    response.set_cookie(
        key=settings.COOKIE_NAME,
        value=access_token,
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )

    record_audit(
        db,
        user_id=user.id,
        action=ActionType.LOGIN,
        resource_type="user",
        resource_id=user.id,
        context=context,
    )

    return {
        "access_token": access_token,
        "token_type": "bearer",
        "user": {"id": user.id, "email": user.email, "role": user.role},
    }


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
    context: RequestContext = Depends(get_request_context),
):
    """Clear the session cookie. Logout of an authenticated user is audited."""
    response.delete_cookie(settings.COOKIE_NAME)
    if current_user is not None:
        record_audit(
            db,
            user_id=current_user.id,
            action=ActionType.LOGOUT,
            resource_type="user",
            resource_id=current_user.id,
            context=context,
        )
    return {"message": "Logout successful"}


@router.get("/me", response_model=MeResponse)
def get_me(current_user: User = Depends(get_current_user)):
    """Get current user."""
    return {
        "id": current_user.id,
        "email": current_user.email,
        "role": current_user.role,
        "capabilities": build_capabilities(current_user.role),
    }


@router.post("/change-password", response_model=MessageResponse)
def change_password(
    password_data: ChangePasswordRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not verify_password(password_data.current_password, current_user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Current password is incorrect"
        )

    current_user.password_hash = get_password_hash(password_data.new_password)
    commit_or_raise(db, "password change")
    return {"message": "Password changed successfully"}
