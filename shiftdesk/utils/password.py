"""비밀번호 해싱 및 검증 유틸리티 모듈.

Password hashing and verification for staff accounts, using bcrypt.
The work factor comes from ``settings.BCRYPT_ROUNDS`` so tests can lower it.
"""

import bcrypt

from shiftdesk.config import settings


def hash_password(password: str) -> str:
    """평문 비밀번호를 bcrypt 해시로 변환합니다.

    Hash a plain text password with a fresh salt.

    Args:
        password: 평문 비밀번호 (Plain text password to hash)

    Returns:
        str: bcrypt 해시 문자열 (Bcrypt hash string, ~60 chars)
    """
    salt: bytes = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """평문 비밀번호와 저장된 해시를 비교합니다.

    Accounts created without a password (hash is None) never verify.
    """
    if not hashed_password:
        return False
    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
