# userboard/core/security.py
from datetime import datetime, timedelta, timezone

from jose import jwt, JWTError
from passlib.context import CryptContext

ALGORITHM = "HS256"

# Usa SOLO argon2 para nuevos hashes (evita líos de bcrypt en Windows)
pwd_context = CryptContext(
    schemes=["argon2"],
    default="argon2",
    deprecated="auto",
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    # un hash corrupto o de otro esquema no es un error del cliente: simplemente no coincide
    try:
        return pwd_context.verify(password, hashed)
    except (ValueError, TypeError):
        return False


def create_access_token(sub: str, *, secret: str, expires_minutes: int = 60) -> str:
    """
    Firma un JWT HS256 con sub / iat / exp (iat + expires_minutes).
    Un secreto vacío es un error de configuración, no de la petición.
    """
    if not secret:
        raise ValueError("JWT secret is not configured")
    issued = datetime.now(timezone.utc)
    payload = {
        "sub": sub,
        "iat": issued,
        "exp": issued + timedelta(minutes=expires_minutes),
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def decode_access_token(token: str, *, secret: str) -> str:
    # jose valida firma y exp (ExpiredSignatureError hereda de JWTError)
    payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
    sub = payload.get("sub")
    if not sub:
        raise JWTError("missing sub")
    return sub
