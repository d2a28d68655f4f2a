from functools import wraps
from flask import g, request
from sqlalchemy.exc import SQLAlchemyError

from models import db
from models.user import User
from scheduling.errors import Forbidden, Internal, Unauthenticated
from security.token import bearer_token_from_header, verify_token

def load_current_user():
    """
    Resolves the bearer token into g.user. g.auth_error remembers why there is
    no user so login_required can answer 401 (no credential) or 403 (bad one).
    """
    g.user = None
    g.auth_error = None

    raw_token = bearer_token_from_header(request.headers.get("Authorization"))
    if not raw_token:
        g.auth_error = Unauthenticated
        return

    payload = verify_token(raw_token)
    if payload is None:
        g.auth_error = Forbidden
        return

    try:
        user = db.session.get(User, payload["id"])
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise Internal() from exc
    if user is None:
        g.auth_error = Forbidden
        return
    g.user = user

def login_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        if getattr(g, "user", None) is None:
            error = getattr(g, "auth_error", None) or Unauthenticated
            raise error()
        return fn(*args, **kwargs)
    return wrapper
