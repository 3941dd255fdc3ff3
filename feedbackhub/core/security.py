import hashlib
import hmac
import secrets
import time
import uuid
from datetime import timedelta
from typing import Optional

from passlib.context import CryptContext
from jose import JWTError, jwt

from feedbackhub.core.config import settings
from feedbackhub.core.database import utcnow

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

API_KEY_PREFIX_LENGTH = 8


def _now_ts() -> int:
    """Return current UTC timestamp as int."""
    return int(time.time())

def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


# API keys

def generate_api_key() -> str:
    return secrets.token_hex(32)

def hash_api_key(api_key: str) -> str:
    return hashlib.sha256(api_key.encode("utf-8")).hexdigest()

def api_key_matches(presented: str, stored_hash: str) -> bool:
    """Constant-time check of a presented key against its stored digest."""
    return hmac.compare_digest(hash_api_key(presented), stored_hash)

def secret_matches(presented: Optional[str], expected: Optional[str]) -> bool:
    if not presented or not expected:
        return False
    return hmac.compare_digest(presented.encode("utf-8"), expected.encode("utf-8"))


# Admin sessions

def create_session_token(admin_id: int, expires_delta: timedelta = None) -> tuple[str, str, int]:
    """Return (token, jti, ttl_seconds) for a new admin session."""
    jti = str(uuid.uuid4())
    ttl = expires_delta or timedelta(minutes=settings.SESSION_EXPIRE_MINUTES)
    payload = {
        "sub": str(admin_id),
        "jti": jti,
        "exp": utcnow() + ttl,
        "type": "admin_session",
    }
    token = jwt.encode(payload, settings.SESSION_SECRET_KEY, algorithm=settings.SESSION_ALGORITHM)
    return token, jti, int(ttl.total_seconds())

def decode_session_token(token: str) -> Optional[dict]:
    try:
        payload = jwt.decode(token, settings.SESSION_SECRET_KEY, algorithms=[settings.SESSION_ALGORITHM])
    except JWTError:
        return None
    if payload.get("type") != "admin_session" or not payload.get("sub") or not payload.get("jti"):
        return None
    return payload

async def store_admin_session(redis_client, admin_id: int, jti: str, ttl_seconds: int, meta: dict = None):
    """Store an admin session in Redis with TTL."""
    key = f"admin_session:{admin_id}:{jti}"
    value = {"created_at": str(_now_ts())}
    if meta:
        value.update(meta)

    await redis_client.hset(key, mapping=value)
    await redis_client.expire(key, ttl_seconds)

async def is_admin_session_valid(redis_client, admin_id: str, jti: str) -> bool:
    key = f"admin_session:{admin_id}:{jti}"
    exists = await redis_client.exists(key)
    return bool(exists)

async def revoke_admin_session(redis_client, admin_id: str, jti: str):
    await redis_client.delete(f"admin_session:{admin_id}:{jti}")
