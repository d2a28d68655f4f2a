import re
from typing import List, Tuple

from flask import current_app

_UPPER = re.compile(r"[A-Z]")
_LOWER = re.compile(r"[a-z]")
_DIGIT = re.compile(r"\d")
_SYMBOL = re.compile(r"[^A-Za-z0-9]")

_DEFAULTS = {
    "PASSWORD_MIN_LEN": 8,
    "PASSWORD_MAX_LEN": 128,
    "PASSWORD_REQUIRE_UPPER": True,
    "PASSWORD_REQUIRE_LOWER": True,
    "PASSWORD_REQUIRE_DIGIT": True,
    "PASSWORD_REQUIRE_SYMBOL": True,
}


def _cfg(name: str):
    try:
        return current_app.config.get(name, _DEFAULTS[name])
    except RuntimeError:
        # outside an app context (CLI helpers, unit tests)
        return _DEFAULTS[name]

def validate_password(pw: str) -> Tuple[bool, List[str]]:
    errors: List[str] = []

    if not isinstance(pw, str):
        return False, ["Password must be a string"]

    min_len = int(_cfg("PASSWORD_MIN_LEN"))
    max_len = int(_cfg("PASSWORD_MAX_LEN"))

    if len(pw) < min_len:
        errors.append(f"Password must be at least {min_len} characters long")
    if len(pw) > max_len:
        errors.append(f"Password must be at most {max_len} characters long")

    if bool(_cfg("PASSWORD_REQUIRE_UPPER")) and not _UPPER.search(pw):
        errors.append("Password must contain at least one uppercase letter")
    if bool(_cfg("PASSWORD_REQUIRE_LOWER")) and not _LOWER.search(pw):
        errors.append("Password must contain at least one lowercase letter")
    if bool(_cfg("PASSWORD_REQUIRE_DIGIT")) and not _DIGIT.search(pw):
        errors.append("Password must contain at least one number")
    if bool(_cfg("PASSWORD_REQUIRE_SYMBOL")) and not _SYMBOL.search(pw):
        errors.append("Password must contain at least one special character")

    return (len(errors) == 0), errors
