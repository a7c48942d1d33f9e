"""Seed the default admin and editor accounts."""
from sqlalchemy.orm import Session
from catalog_admin.core.config import settings
from catalog_admin.core.database import SessionLocal
from catalog_admin.core.roles import RoleCode
from catalog_admin.core.security import get_password_hash
from catalog_admin.models import User


def ensure_user(db: Session, email: str, password: str, role: RoleCode) -> tuple[User, bool]:
    """Create the user if missing. Returns (user, created)."""
    user = db.query(User).filter(User.email == email).first()
    if user:
        return user, False
    user = User(
        email=email,
        password_hash=get_password_hash(password),
        role=role.value,
    )
    db.add(user)
    db.flush()
    return user, True


def seed_database(db: Session) -> list[User]:
    """Create the default accounts. Safe to run repeatedly."""
    created = []
    for email, password, role in (
        (settings.SEED_ADMIN_EMAIL, settings.SEED_ADMIN_PASSWORD, RoleCode.ADMIN),
        (settings.SEED_EDITOR_EMAIL, settings.SEED_EDITOR_PASSWORD, RoleCode.EDITOR),
    ):
        user, was_created = ensure_user(db, email, password, role)
        if was_created:
            created.append(user)
    db.commit()
    return created


def main():
    db = SessionLocal()
    try:
        created = seed_database(db)
        print("Seeding database...")
        for user in created:
            print(f"  ✓ Created {user.role}: {user.email}")
        if not created:
            print("  Default users already exist")
    except Exception as e:
        db.rollback()
        print(f"✗ Error seeding database: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
