from flask import request


def json_object() -> dict:
    """The request's JSON body when it is an object, otherwise {}."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def text_field(data: dict, key: str, strip: bool = True) -> str:
    """A string field of the body, "" when missing or not a string."""
    value = data.get(key)
    if not isinstance(value, str):
        return ""
    return value.strip() if strip else value
