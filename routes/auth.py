import re

from flask import Blueprint, jsonify, current_app
from sqlalchemy.exc import IntegrityError

from models import db
from models.db import begin_write
from models.user import User
from security.password import hash_password, verify_password
from security.password_policy import validate_password
from security.token import issue_token
from utils.audit import log_event
from utils.request_data import json_object, text_field


auth_bp = Blueprint("auth", __name__)

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _is_valid_email(email: str) -> bool:
    return isinstance(email, str) and len(email) <= 255 and bool(_EMAIL_RE.match(email))


def _is_valid_name(name: str) -> bool:
    min_len = current_app.config.get("NAME_MIN_LEN", 2)
    max_len = current_app.config.get("NAME_MAX_LEN", 50)
    return isinstance(name, str) and min_len <= len(name) <= max_len


@auth_bp.post("/register")
def register():
    data = json_object()
    email = text_field(data, "email").lower()
    password = text_field(data, "password", strip=False)
    name = text_field(data, "name")

    if not email or not password or not name:
        return jsonify(error="All fields are required"), 400

    if not _is_valid_email(email):
        return jsonify(error="Invalid email format"), 400
    valid, errors = validate_password(password)
    if not valid:
        return jsonify(error="Password does not meet policy", details=errors), 400
    if not _is_valid_name(name):
        min_len = current_app.config.get("NAME_MIN_LEN", 2)
        max_len = current_app.config.get("NAME_MAX_LEN", 50)
        return jsonify(error=f"Name must be between {min_len} and {max_len} characters"), 400

    if User.query.filter_by(email=email).first():
        log_event("REGISTER_FAIL_EMAIL_EXISTS", metadata={"email": email})
        return jsonify(error="Email already exists"), 400

    user = User(email=email, password_hash=hash_password(password), name=name)
    try:
        begin_write(db.session)
        db.session.add(user)
        db.session.commit()
    except IntegrityError:
        # lost a race with a concurrent registration of the same email
        db.session.rollback()
        log_event("REGISTER_FAIL_EMAIL_EXISTS", metadata={"email": email})
        return jsonify(error="Email already exists"), 400

    log_event("REGISTER_SUCCESS", user_id=user.id)
    return jsonify(message="User registered successfully"), 201


@auth_bp.post("/login")
def login():
    data = json_object()
    email = text_field(data, "email").lower()
    password = text_field(data, "password", strip=False)

    user = User.query.filter_by(email=email).first() if email else None
    if not user or not verify_password(password, user.password_hash):
        log_event("LOGIN_FAIL", user_id=user.id if user else None, metadata={"email": email})
        return jsonify(error="Invalid credentials"), 401

    token = issue_token(user.id, user.email)

    log_event("LOGIN_SUCCESS", user_id=user.id)
    return jsonify(token=token), 200
