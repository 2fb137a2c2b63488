"""
Auth service: password hashing, JWT creation/verification, registration and login.
Uses bcrypt directly (no passlib) to avoid passlib/bcrypt version conflicts.
New accounts get role USER; ADMIN comes only from the bootstrap account in settings.
"""
import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID
import bcrypt
from jose import JWTError, jwt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from forum.config import settings
from forum.models.user import User, ROLE_ADMIN, ROLE_USER
from forum.services.errors import ConflictError, UnauthorizedError

logger = logging.getLogger(__name__)

# Bcrypt limit is 72 bytes; use 71 so we never exceed
BCRYPT_MAX_BYTES = 71


def _truncate_to_bytes(s: str, max_bytes: int = BCRYPT_MAX_BYTES) -> bytes:
    """Truncate string to at most max_bytes UTF-8; return bytes for bcrypt."""
    if not s:
        return b""
    encoded = s.encode("utf-8")
    if len(encoded) <= max_bytes:
        return encoded
    return encoded[:max_bytes]


def hash_password(password: str) -> str:
    """Hash password for storage. Raises ValueError if password is None."""
    if password is None:
        raise ValueError("password is required")
    raw = _truncate_to_bytes(password)
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(raw, salt)
    return hashed.decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    raw = _truncate_to_bytes(plain)
    try:
        return bcrypt.checkpw(raw, hashed.encode("utf-8"))
    except ValueError:
        # malformed stored hash
        return False


def create_access_token(user_id: UUID, email: str, role: str) -> str:
    expire = datetime.now(timezone.utc) + timedelta(hours=settings.jwt_expire_hours)
    # JWT exp must be numeric (Unix timestamp), not datetime
    payload = {"sub": str(user_id), "email": email, "role": role, "exp": int(expire.timestamp())}
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict | None:
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def register_user(db: Session, name: str, email: str, password: str) -> User:
    """Create a USER account. Duplicate email -> ConflictError."""
    if get_user_by_email(db, email):
        raise ConflictError("Email already exists")
    user = User(name=name, email=email, password_hash=hash_password(password), role=ROLE_USER)
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # concurrent registration with the same email won the unique index
        db.rollback()
        logger.warning("Register IntegrityError: %s", e)
        raise ConflictError("Email already exists") from e
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """Return the user for a valid email/password pair, else UnauthorizedError."""
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        logger.debug("Login failed for %s", email)
        raise UnauthorizedError("Invalid email or password")
    return user


def ensure_admin(db: Session, name: str, email: str, password: str) -> User:
    """Idempotent admin bootstrap: create the account, or promote an existing user with that email."""
    user = get_user_by_email(db, email)
    if user is None:
        user = User(name=name, email=email, password_hash=hash_password(password), role=ROLE_ADMIN)
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info("Created admin account %s", email)
    elif user.role != ROLE_ADMIN:
        user.role = ROLE_ADMIN
        db.commit()
        logger.info("Promoted %s to admin", email)
    return user
