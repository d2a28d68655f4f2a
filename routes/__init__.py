from .health import health_bp
from .auth import auth_bp
from .appointments import appointments_bp
