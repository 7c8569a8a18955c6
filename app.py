import logging

from flask import Flask, jsonify
from sqlalchemy import inspect
from werkzeug.exceptions import HTTPException

from config import Config
from routes import (
    health_bp, auth_bp, rooms_bp, bookings_bp, calendar_bp, settings_bp, admin_bp, audit_bp,
)

from models import db
from flask_migrate import Migrate
from security.tokens import jwt
from utils.booking_settings import seed_settings
from utils.errors import ApiError, InternalError, error_response


def create_app(config_overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    _configure_logging(app)

    # Register routes
    app.register_blueprint(health_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(rooms_bp)
    app.register_blueprint(bookings_bp)
    app.register_blueprint(calendar_bp)
    app.register_blueprint(settings_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(audit_bp)

    # Database init
    db.init_app(app)

    # Migrations
    Migrate(app, db)

    # Bearer tokens
    jwt.init_app(app)

    register_error_handlers(app)

    # Default booking settings at startup (safe & idempotent)
    with app.app_context():
        if app.config.get("DB_CREATE_ALL"):
            db.create_all()
        if inspect(db.engine).has_table("booking_settings"):
            seed_settings()
        else:
            app.logger.warning("booking_settings table missing; run `flask db upgrade`")

    @app.after_request
    def add_security_headers(resp):
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["Referrer-Policy"] = "no-referrer"
        # JSON API only; the single-page client is served by the proxy
        resp.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none';"
        return resp

    register_cli(app)

    return app


def _configure_logging(app):
    level = app.config.get("LOG_LEVEL", "INFO")
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    app.logger.setLevel(level)


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def _api_error(err):
        return error_response(err)

    @app.errorhandler(HTTPException)
    def _http_error(err):
        # routing errors (404/405/...) in the same JSON shape
        return jsonify(error=err.description, code=err.name.replace(" ", "")), err.code

    @app.errorhandler(Exception)
    def _unexpected(err):
        app.logger.exception("Unhandled error: %s", err)
        return error_response(InternalError())

#-------------------------
import click
from models.user import User, UserRole
from security.password import hash_password, verify_password
from utils.seed import DEMO_PASSWORD, seed_demo_data

def register_cli(app):
    @app.cli.command("make-admin")
    @click.argument("username")
    def make_admin(username):
        """Promote a user to admin by username (bootstrap)."""
        user = User.query.filter_by(username=username.strip()).first()
        if not user:
            click.echo("User not found")
            return

        if user.role != UserRole.ADMIN.value:
            user.role = UserRole.ADMIN.value
            db.session.commit()

        click.echo(f"{user.username} promoted to admin")

    @app.cli.command("seed")
    @click.option("--password", default=DEMO_PASSWORD, show_default=True,
                  help="Password given to the demo accounts.")
    def seed(password):
        """Create default settings, demo rooms and demo accounts."""
        added = seed_demo_data(password)
        click.echo(f"Seeded {added['users']} user(s) and {added['rooms']} room(s)")

    @app.cli.command("hash-password")
    @click.argument("password", default=DEMO_PASSWORD)
    def hash_password_command(password):
        """Print a bcrypt digest for PASSWORD and check it verifies."""
        digest = hash_password(password)
        click.echo(digest)
        click.echo("Verification: " + ("SUCCESS" if verify_password(password, digest) else "FAILED"))

#-------------------------




if __name__ == "__main__":
    app = create_app()
    # Run locally
    app.run(host="127.0.0.1", port=5002)
