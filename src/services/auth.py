"""Authentication service for JWT and password handling."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.config import get_settings
from src.exceptions import Conflict
from src.models.enums import Role
from src.models.user import User

logger = logging.getLogger(__name__)

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

REQUIRED_CLAIMS = ("sub", "role", "iat", "exp")


class CredentialError(Exception):
    """Base class for access token verification failures."""


class MalformedToken(CredentialError):
    """The token cannot be parsed or lacks required claims."""


class BadSignature(CredentialError):
    """The token was not signed with the server secret."""


class TokenExpired(CredentialError):
    """The token is past its validity window."""


@dataclass(frozen=True)
class TokenClaims:
    """Identity asserted by a verified access token."""

    subject_id: int
    role: Role


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(user_id: int, role: Role | str, issued_at: datetime | None = None) -> str:
    """Create a JWT access token binding a user id and role."""
    issued_at = issued_at or datetime.now(UTC)
    expire = issued_at + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": str(user_id),
        "role": Role(role).value,
        "iat": issued_at,
        "exp": expire,
    }
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def decode_access_token(token: str) -> TokenClaims:
    """Decode and validate a JWT token.

    Raises:
        MalformedToken: The token is not a parseable JWT or its claims are incomplete.
        BadSignature: The signature does not match the server secret.
        TokenExpired: The ``exp`` claim has passed.
    """
    try:
        jwt.get_unverified_header(token)
    except JWTError as e:
        raise MalformedToken(str(e)) from e

    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require_iat": True, "require_exp": True, "require_sub": True},
        )
    except ExpiredSignatureError as e:
        raise TokenExpired(str(e)) from e
    except JWTError as e:
        if "signature" in str(e).lower():
            raise BadSignature(str(e)) from e
        raise MalformedToken(str(e)) from e

    missing = [claim for claim in REQUIRED_CLAIMS if claim not in payload]
    if missing:
        raise MalformedToken(f"Missing claims: {', '.join(missing)}")

    try:
        return TokenClaims(subject_id=int(payload["sub"]), role=Role(payload["role"]))
    except (TypeError, ValueError) as e:
        raise MalformedToken(str(e)) from e


def normalize_email(email: str) -> str:
    """Normalize an email address for storage and lookup."""
    return email.strip().lower()


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == normalize_email(email)).first()


def get_user_by_id(db: Session, user_id: int) -> User | None:
    """Get a user by id."""
    return db.query(User).filter(User.id == user_id).first()


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password."""
    user = get_user_by_email(db, email)
    if not user:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def create_user(
    db: Session, email: str, password: str, name: str, role: Role = Role.USER
) -> User:
    """Create a new user.

    Raises:
        Conflict: A user with this email already exists.
    """
    email = normalize_email(email)
    if get_user_by_email(db, email):
        raise Conflict("Email already registered")

    hashed_password = get_password_hash(password)
    user = User(email=email, password_hash=hashed_password, name=name.strip(), role=role)
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration for the same email
        db.rollback()
        raise Conflict("Email already registered") from e
    db.refresh(user)
    logger.info(f"Registered user {user.id}")
    return user
