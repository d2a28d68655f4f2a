from datetime import datetime
from models.db import db

STATUS_BOOKED = "BOOKED"
STATUS_CANCELLED = "CANCELLED"

class Reservation(db.Model):
    __tablename__ = "reservations"

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    date = db.Column(db.Date, nullable=False)
    time = db.Column(db.Time, nullable=False)

    status = db.Column(db.String(20), nullable=False, default=STATUS_BOOKED)
    # status values: BOOKED, CANCELLED (one-way, rows are never deleted)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    cancelled_at = db.Column(db.DateTime, nullable=True)

    __table_args__ = (
        # At most one BOOKED row per slot; cancelled rows don't count, so a slot can be rebooked
        db.Index(
            "uq_reservations_active_slot",
            "date",
            "time",
            unique=True,
            sqlite_where=db.text("status = 'BOOKED'"),
            postgresql_where=db.text("status = 'BOOKED'"),
        ),
        db.CheckConstraint("status IN ('BOOKED', 'CANCELLED')", name="ck_reservations_status"),
        db.Index("ix_reservations_user_date_time", "user_id", "date", "time"),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "date": self.date.isoformat(),
            "time_slot": self.time.strftime("%H:%M:%S"),
            "status": self.status,
            "created_at": self.created_at.isoformat(),
            "cancelled_at": self.cancelled_at.isoformat() if self.cancelled_at else None,
        }

    def __repr__(self) -> str:
        return f"<Reservation(id={self.id}, user={self.user_id}, slot={self.date} {self.time}, status={self.status})>"
