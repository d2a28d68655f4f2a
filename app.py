from flask import Flask, jsonify
from config import Config
from routes import health_bp, auth_bp, appointments_bp

from models import db
from models.db import configure_sqlite
from flask_migrate import Migrate
from flask_cors import CORS
from scheduling.calendar import SlotCalendar
from scheduling.errors import BookingError, Internal
from utils.auth_context import load_current_user


# Added to every response unless a view already set them; the API serves JSON only
API_RESPONSE_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Permissions-Policy": "geolocation=(), microphone=(), camera=()",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none';",
    "Cache-Control": "no-store",
}


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    # Business calendar; a bad open/close/granularity fails here, not per request
    app.extensions["slot_calendar"] = SlotCalendar(
        open_hour=app.config.get("BUSINESS_OPEN_HOUR", 9),
        close_hour=app.config.get("BUSINESS_CLOSE_HOUR", 17),
        granularity_minutes=app.config.get("SLOT_GRANULARITY_MINUTES", 60),
    )

    # Browser clients
    CORS(app, origins=app.config.get("CORS_ORIGINS", "*"))

    # Register routes
    app.register_blueprint(health_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(appointments_bp)

    # Database init
    db.init_app(app)
    with app.app_context():
        configure_sqlite(db.engine)

    # Migrations
    Migrate(app, db)

    @app.before_request
    def _load_user():
        load_current_user()

    @app.errorhandler(BookingError)
    def _booking_error(err):
        if isinstance(err, Internal):
            app.logger.exception("Internal error: %s", err.message)
        return jsonify(error=err.message), err.status_code

    @app.after_request
    def add_security_headers(resp):
        for name, value in API_RESPONSE_HEADERS.items():
            resp.headers.setdefault(name, value)
        return resp


    register_cli(app)


    return app

#-------------------------
import click
from scheduling import ReservationLedger, parse_date

def register_cli(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables (development; use `flask db upgrade` in production)."""
        db.create_all()
        click.echo("Database initialised")

    @app.cli.command("booked-slots")
    @click.argument("day")
    def booked_slots(day):
        """Print the booked times of DAY (YYYY-MM-DD)."""
        try:
            parsed = parse_date(day)
        except BookingError as err:
            raise click.BadParameter(err.message, param_hint="DAY")

        times = sorted(ReservationLedger(db.session).booked_slots_on(parsed))
        if not times:
            click.echo(f"No bookings on {parsed.isoformat()}")
            return
        for t in times:
            click.echo(t.strftime("%H:%M:%S"))

#-------------------------




if __name__ == "__main__":
    app = create_app()
    # Run locally
    app.run(host="127.0.0.1", port=3000, threaded=True)
