import logging
from datetime import datetime, timezone
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.users import User, UserRole
from utils.exceptions import DuplicateEmail, EmailTaken, InvalidCredentials, InvalidInput, NotFound
from utils.hashing import get_password_hash, verify_password
from utils.tokenJWT import create_user_token

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72


def register(
    db: Session,
    *,
    email: str,
    password: str,
    name: str,
    role: UserRole,
    phone: Optional[str] = None,
    address: Optional[str] = None,
) -> Tuple[User, str]:
    """Create a buyer or seller account and issue its first token."""
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise InvalidInput(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")

    # Exact match, emails are stored as given
    if db.query(User).filter(User.email == email).first():
        raise DuplicateEmail()

    user = User(
        email=email,
        password_hash=get_password_hash(password),
        name=name,
        role=UserRole(role),
        phone=phone or "",
        address=address or "",
    )
    db.add(user)
    try:
        db.flush()
        user.avatar = f"/images/avatar{user.id}.png"
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent registration with the same email
        db.rollback()
        raise DuplicateEmail()
    db.refresh(user)

    logger.info("Registered %s user %s", user.role.value, user.id)
    return user, create_user_token(user)


def login(db: Session, *, email: str, password: str) -> Tuple[User, str]:
    user = db.query(User).filter(User.email == email).first()
    if not user or not verify_password(password, user.password_hash):
        raise InvalidCredentials()
    return user, create_user_token(user)


def update_profile(db: Session, user_id: int, changes: dict) -> User:
    """Apply a partial profile update; keys absent from ``changes`` are left alone."""
    user = db.get(User, user_id)
    if user is None:
        raise NotFound("User not found")

    email = changes.get("email")
    if email is not None:
        taken = db.query(User).filter(User.email == email, User.id != user_id).first()
        if taken:
            raise EmailTaken()

    for field in ("name", "email", "phone", "address"):
        if field in changes and changes[field] is not None:
            setattr(user, field, changes[field])
    user.updated_at = datetime.now(timezone.utc)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise EmailTaken()
    db.refresh(user)
    return user
