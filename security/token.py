from typing import Optional

from flask import current_app
from itsdangerous import BadSignature, URLSafeTimedSerializer

TOKEN_SALT = "appointments-auth-token"

def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(current_app.config["SECRET_KEY"], salt=TOKEN_SALT)

def issue_token(user_id: int, email: str) -> str:
    """
    Signed bearer token carrying the user id. Nothing is stored server side;
    validity is bounded by TOKEN_LIFETIME_SECONDS at verification time.
    """
    return _serializer().dumps({"id": user_id, "email": email})

def verify_token(raw_token: str) -> Optional[dict]:
    """
    Returns the token payload, or None when the signature is wrong,
    the token expired, or the payload has no integer id.
    """
    if not raw_token:
        return None

    max_age = current_app.config.get("TOKEN_LIFETIME_SECONDS", 24 * 60 * 60)
    try:
        # SignatureExpired is a BadSignature
        payload = _serializer().loads(raw_token, max_age=max_age)
    except BadSignature:
        return None

    if not isinstance(payload, dict) or not isinstance(payload.get("id"), int):
        return None
    return payload

def bearer_token_from_header(header_value: Optional[str]) -> Optional[str]:
    # "Authorization: Bearer <token>"
    if not header_value:
        return None
    parts = header_value.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]
