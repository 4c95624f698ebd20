"""HS256 bearer tokens: issue and verify.

Plain functions over ``hmac``/``base64``; used by the auth dependency and by
operators minting tokens for the front-end.
"""

import base64
import hashlib
import hmac
import json
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

ISSUER = "petrohr"
_HEADER = {"alg": "HS256", "typ": "JWT"}


@dataclass(frozen=True)
class TokenPayload:
    """Verified token claims."""
    sub: str
    role: str
    exp: datetime


def create_token(
    subject: str,
    role: str,
    secret: str,
    algorithm: str = "HS256",
    expires_hours: int = 12,
) -> str:
    """Sign a token for *subject* with the given *role* claim."""
    if algorithm != "HS256":
        raise ValueError(f"Unsupported algorithm: {algorithm}")

    issued = int(time.time())
    claims = {
        "sub": subject,
        "role": role,
        "iat": issued,
        "exp": issued + expires_hours * 3600,
        "iss": ISSUER,
    }
    head = _encode_segment(_HEADER)
    body = _encode_segment(claims)
    return f"{head}.{body}.{_sign(head + '.' + body, secret)}"


def decode_token(token: str, secret: str, algorithm: str = "HS256") -> Optional[TokenPayload]:
    """Return the claims of a valid token, ``None`` for anything else.

    Bad signature, expiry, wrong algorithm and malformed input all yield
    ``None``; the caller decides how to report absence.
    """
    if algorithm != "HS256" or not token:
        return None
    try:
        head, body, signature = token.split(".")
        if not hmac.compare_digest(_sign(head + "." + body, secret), signature):
            return None

        claims = json.loads(_b64decode(body))
        exp = int(claims["exp"])
        if time.time() > exp:
            return None

        return TokenPayload(
            sub=str(claims.get("sub", "")),
            role=str(claims.get("role", "")),
            exp=datetime.fromtimestamp(exp, tz=timezone.utc),
        )
    except (json.JSONDecodeError, KeyError, ValueError, TypeError):
        return None


def _sign(signing_input: str, secret: str) -> str:
    digest = hmac.new(secret.encode(), signing_input.encode(), hashlib.sha256).digest()
    return _b64encode(digest)


def _encode_segment(data: dict) -> str:
    return _b64encode(json.dumps(data, separators=(",", ":")).encode())


def _b64encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode()


def _b64decode(data: str) -> bytes:
    return base64.urlsafe_b64decode(data + "=" * (-len(data) % 4))
