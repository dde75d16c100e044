"""
Create a recruiter account for a company, or move an existing recruiter to it.
Run: python -m scripts.create_recruiter EMAIL COMPANY [--name NAME] [--password PASSWORD]
"""
import argparse
import logging
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.db.init_db import init_db
from app.db.session import SessionLocal
from app.db.models.user import User, UserRole
from app.core.security import hash_password

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_recruiter(email: str, company: str, name: str = None, password: str = None) -> bool:
    """Create or update a recruiter bound to company. Returns True on success."""
    email = email.strip().lower()
    company = company.strip()
    if not company:
        logger.error("Company must not be empty")
        return False

    db = SessionLocal()
    try:
        user = db.query(User).filter(User.email == email).first()

        if not user:
            if not password:
                logger.error(f"User {email} not found and no password provided. Cannot create user.")
                return False
            user = User(
                email=email,
                name=name or "Recruiter",
                password_hash=hash_password(password),
                role=UserRole.RECRUITER.value,
                recruiter_company=company,
            )
            db.add(user)
            logger.info(f"Creating recruiter {email} for company '{company}'")
        else:
            if user.role != UserRole.RECRUITER.value:
                logger.error(f"User {email} is a {user.role}; roles are not changed after signup")
                return False
            logger.info(f"Moving recruiter {email} from '{user.recruiter_company}' to '{company}'")
            user.recruiter_company = company
            if password:
                user.password_hash = hash_password(password)

        db.commit()
        db.refresh(user)
        logger.info(f"Recruiter ready: user_id={user.id}, company='{user.recruiter_company}'")
        return True

    except Exception as e:
        db.rollback()
        logger.error(f"Error creating recruiter: {e}", exc_info=True)
        return False
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("email")
    parser.add_argument("company")
    parser.add_argument("--name")
    parser.add_argument("--password")
    args = parser.parse_args()

    init_db()
    if create_recruiter(args.email, args.company, args.name, args.password):
        print(f"\n[SUCCESS] {args.email} is a recruiter for {args.company}")
    else:
        print(f"\n[ERROR] Failed to set up recruiter {args.email}")
        sys.exit(1)
