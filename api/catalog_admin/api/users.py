"""User management routes (admin only)."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from catalog_admin.core.database import commit_or_raise, get_db
from catalog_admin.core.deps import require_admin
from catalog_admin.core.exceptions import InvalidState, NotFound, ValidationError
from catalog_admin.core.roles import ActionType, ensure_user_is_mutable
from catalog_admin.core.security import get_password_hash
from catalog_admin.models.audit_log import AuditLog
from catalog_admin.models.pending_change import PendingChange
from catalog_admin.models.user import User
from catalog_admin.schemas.common import DataResponse, ListResponse, MessageResponse
from catalog_admin.schemas.user import UserActiveUpdate, UserCreate, UserResponse, UserRoleUpdate
from catalog_admin.services.audit import RequestContext, get_request_context, record_audit

router = APIRouter()


def _get_user_or_404(db: Session, user_id: str) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFound("User not found")
    return user


@router.get("/", response_model=ListResponse[UserResponse])
def list_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """List all users."""
    users = db.query(User).order_by(User.created_at.desc()).all()
    return {"data": users, "total": len(users)}


@router.post("/", response_model=DataResponse[UserResponse], status_code=status.HTTP_201_CREATED)
def create_user(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    context: RequestContext = Depends(get_request_context),
):
    """Create an editor account."""
    existing_user = db.query(User).filter(User.email == user_data.email).first()
    if existing_user:
        raise ValidationError("User with this email already exists")

    user = User(
        email=user_data.email,
        password_hash=get_password_hash(user_data.password),
        role=user_data.role,
    )
    db.add(user)
    commit_or_raise(db, "user create")
    db.refresh(user)

    record_audit(
        db,
        user_id=current_user.id,
        action=ActionType.CREATE,
        resource_type="user",
        resource_id=user.id,
        details={"email": user.email, "role": user.role},
        context=context,
    )
    return {"message": "User created successfully", "data": user}


@router.patch("/{user_id}/role", response_model=MessageResponse)
def update_user_role(
    user_id: str,
    role_data: UserRoleUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    context: RequestContext = Depends(get_request_context),
):
    user = _get_user_or_404(db, user_id)
    ensure_user_is_mutable(user, current_user, "change role of")

    old_role = user.role
    user.role = role_data.role
    commit_or_raise(db, "user role update")

    record_audit(
        db,
        user_id=current_user.id,
        action=ActionType.UPDATE,
        resource_type="user",
        resource_id=user_id,
        details={"old_role": old_role, "new_role": role_data.role},
        context=context,
    )
    return {"message": "User role updated successfully"}


@router.patch("/{user_id}/active", response_model=MessageResponse)
def set_user_active(
    user_id: str,
    active_data: UserActiveUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    context: RequestContext = Depends(get_request_context),
):
    """Activate or deactivate a user account."""
    user = _get_user_or_404(db, user_id)
    operation = "activate" if active_data.is_active else "deactivate"
    ensure_user_is_mutable(user, current_user, operation)

    user.is_active = active_data.is_active
    commit_or_raise(db, "user activation update")

    verb = "activated" if active_data.is_active else "deactivated"
    record_audit(
        db,
        user_id=current_user.id,
        action=ActionType.UPDATE,
        resource_type="user",
        resource_id=user_id,
        details={"action": verb},
        context=context,
    )
    return {"message": f"User {verb} successfully"}


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    context: RequestContext = Depends(get_request_context),
):
    user = _get_user_or_404(db, user_id)
    ensure_user_is_mutable(user, current_user, "delete")

    # Audit entries and pending changes keep a foreign key to their user
    has_activity = (
        db.query(AuditLog.id).filter(AuditLog.user_id == user_id).first() is not None
        or db.query(PendingChange.id).filter(PendingChange.user_id == user_id).first() is not None
    )
    if has_activity:
        raise InvalidState("Cannot delete a user with recorded activity; deactivate the account instead")

    details = {"email": user.email, "role": user.role}
    db.delete(user)
    commit_or_raise(db, "user delete")

    record_audit(
        db,
        user_id=current_user.id,
        action=ActionType.DELETE,
        resource_type="user",
        resource_id=user_id,
        details=details,
        context=context,
    )
    return {"message": "User deleted successfully"}
