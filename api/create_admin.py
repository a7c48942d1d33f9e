"""
Create an admin account.

Usage: python create_admin.py admin@example.com 's3cret-pass'
"""
import argparse

from catalog_admin.core.database import SessionLocal
from catalog_admin.core.roles import RoleCode
from catalog_admin.models.user import User
from catalog_admin.seed import ensure_user


def create_admin(email: str, password: str):
    db = SessionLocal()

    try:
        existing = db.query(User).filter(User.email == email).first()
        if existing:
            print(f"ERROR: User with email {email} already exists!")
            return

        user, _ = ensure_user(db, email, password, RoleCode.ADMIN)
        db.commit()

        print("✓ Admin user created successfully!")
        print(f"  User ID: {user.id}")
        print(f"  Email: {user.email}")

    except Exception as e:
        db.rollback()
        print(f"✗ Error creating admin: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create an admin account")
    parser.add_argument("email")
    parser.add_argument("password")
    args = parser.parse_args()
    if len(args.password) < 6:
        parser.error("password must be at least 6 characters")
    create_admin(args.email, args.password)
