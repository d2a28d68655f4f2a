import json
from datetime import datetime
from models.db import db

class AuditLog(db.Model):
    """Append-only trail of auth and booking events; rows are never updated."""
    __tablename__ = "audit_logs"

    id = db.Column(db.Integer, primary_key=True)
    # None for events before a user is known (failed login, duplicate register)
    user_id = db.Column(db.Integer, nullable=True, index=True)
    action = db.Column(db.String(80), nullable=False)
    entity = db.Column(db.String(80), nullable=True)   # "reservation", "slot" or None
    entity_id = db.Column(db.String(80), nullable=True)

    ip = db.Column(db.String(64), nullable=True)
    user_agent = db.Column(db.String(255), nullable=True)
    metadata_json = db.Column(db.Text, nullable=True)

    timestamp = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    @property
    def details(self) -> dict:
        return json.loads(self.metadata_json) if self.metadata_json else {}

    def __repr__(self):
        return f"<AuditLog {self.action} user={self.user_id} {self.entity}:{self.entity_id}>"
