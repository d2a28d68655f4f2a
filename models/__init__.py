from .db import db
from .user import User
from .reservation import Reservation, STATUS_BOOKED, STATUS_CANCELLED
from .audit_log import AuditLog
