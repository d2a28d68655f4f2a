import json
from flask import request
from models import db
from models.audit_log import AuditLog
from models.db import begin_write

def client_ip() -> str:
    # first hop of X-Forwarded-For is the original client; column holds 64 chars
    forwarded = request.headers.get("X-Forwarded-For", "")
    ip = forwarded.split(",")[0].strip() if forwarded else request.remote_addr
    return (ip or "unknown")[:64]

def log_event(action: str, user_id=None, entity=None, entity_id=None, metadata=None):
    """Append an audit row for the current request in its own write transaction."""
    user_agent = request.headers.get("User-Agent", "")

    row = AuditLog(
        user_id=user_id,
        action=action,
        entity=entity,
        entity_id=str(entity_id)[:80] if entity_id is not None else None,
        ip=client_ip(),
        user_agent=user_agent[:255] if user_agent else None,
        metadata_json=json.dumps(metadata, default=str) if metadata else None
    )
    begin_write(db.session)
    db.session.add(row)
    db.session.commit()
