from models.room import Room
from models.user import User
from security.password import verify_password


def test_seed_is_idempotent(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["seed"])
    assert result.exit_code == 0
    assert "Seeded 6 user(s) and 10 room(s)" in result.output

    result = runner.invoke(args=["seed"])
    assert "Seeded 0 user(s) and 0 room(s)" in result.output

    with app.app_context():
        admin = User.query.filter_by(username="admin").one()
        assert admin.role == "admin"
        assert verify_password("password123", admin.password_digest)
        assert Room.query.count() == 10


def test_seeded_admin_can_log_in(app, client):
    app.test_cli_runner().invoke(args=["seed"])
    resp = client.post("/auth/login", json={"username": "admin", "password": "password123"})
    assert resp.status_code == 200
    assert resp.get_json()["user"]["role"] == "admin"


def test_make_admin(app, seeded):
    result = app.test_cli_runner().invoke(args=["make-admin", "user1"])
    assert "user1 promoted to admin" in result.output
    with app.app_context():
        assert User.query.filter_by(username="user1").one().role == "admin"


def test_make_admin_unknown_user(app, seeded):
    result = app.test_cli_runner().invoke(args=["make-admin", "nobody"])
    assert "User not found" in result.output


def test_hash_password(app):
    result = app.test_cli_runner().invoke(args=["hash-password", "hunter2"])
    digest, verdict = result.output.strip().splitlines()
    assert verify_password("hunter2", digest)
    assert verdict == "Verification: SUCCESS"
