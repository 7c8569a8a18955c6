import pytest

from models import db
from models.booking_setting import BookingSetting


def test_public_settings_defaults(client, seeded, user_headers):
    resp = client.get("/settings", headers=user_headers)
    assert resp.status_code == 200
    assert resp.get_json() == {"min_booking_duration": 15, "max_booking_duration": 240}


def test_defaults_are_seeded_on_startup(app):
    with app.app_context():
        rows = {s.setting_key: s for s in BookingSetting.query.all()}
    assert rows["min_booking_duration"].setting_value == "15"
    assert rows["max_booking_duration"].description == "Maximum booking duration in minutes (4 hours)"


def test_admin_settings_have_descriptions(client, seeded, admin_headers):
    resp = client.get("/admin/settings", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.get_json() == {
        "max_booking_duration": {"value": 240, "description": "Maximum booking duration in minutes (4 hours)"},
        "min_booking_duration": {"value": 15, "description": "Minimum booking duration in minutes"},
    }


def test_update_both(client, seeded, admin_headers, user_headers):
    resp = client.put("/admin/settings", headers=admin_headers,
                      json={"min_booking_duration": 20, "max_booking_duration": 200})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["message"] == "Settings updated successfully."
    assert body["settings"]["min_booking_duration"]["value"] == 20
    assert body["settings"]["max_booking_duration"]["value"] == 200

    public = client.get("/settings", headers=user_headers).get_json()
    assert public == {"min_booking_duration": 20, "max_booking_duration": 200}


def test_partial_update_leaves_other_bound(client, seeded, admin_headers):
    resp = client.put("/admin/settings", headers=admin_headers, json={"max_booking_duration": 480})
    assert resp.status_code == 200
    settings = resp.get_json()["settings"]
    assert settings["min_booking_duration"]["value"] == 15
    assert settings["max_booking_duration"]["value"] == 480


@pytest.mark.parametrize("payload", [
    {"min_booking_duration": 4},
    {"min_booking_duration": 121},
    {"max_booking_duration": 29},
    {"max_booking_duration": 1441},
    {"min_booking_duration": 60, "max_booking_duration": 60},
    {"min_booking_duration": 90, "max_booking_duration": 45},
])
def test_rejected_updates_change_nothing(app, client, seeded, admin_headers, payload):
    resp = client.put("/admin/settings", headers=admin_headers, json=payload)
    assert resp.status_code == 400
    assert resp.get_json()["code"] == "InvalidSetting"

    current = client.get("/admin/settings", headers=admin_headers).get_json()
    assert current["min_booking_duration"]["value"] == 15
    assert current["max_booking_duration"]["value"] == 240


def test_non_numeric_setting(client, seeded, admin_headers):
    resp = client.put("/admin/settings", headers=admin_headers, json={"min_booking_duration": "ten"})
    assert resp.status_code == 400
    assert resp.get_json()["code"] == "MalformedInput"


def test_missing_rows_fall_back_to_defaults(app, client, seeded, user_headers):
    with app.app_context():
        BookingSetting.query.delete()
        db.session.commit()
    resp = client.get("/settings", headers=user_headers)
    assert resp.get_json() == {"min_booking_duration": 15, "max_booking_duration": 240}
