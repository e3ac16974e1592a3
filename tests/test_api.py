from datetime import date, timedelta

from training_log.core.constants import (
    MSG_EMAIL_TAKEN,
    MSG_INVALID_CREDENTIALS,
    MSG_INVALID_TOKEN,
    MSG_MENU_NOT_FOUND,
    MSG_NOT_AUTHENTICATED,
    MSG_WEIGHT_POSITIVE,
)
from training_log.core.security import create_access_token

EVERY_DAY = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


def create_menu(client, headers, name="Bench Press", days=EVERY_DAY, **extra):
    response = client.post("/api/menus", json={"name": name, "scheduledDays": days, **extra}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def create_record(client, headers, menu_id, day, sets=None, **extra):
    body = {"menuId": menu_id, "date": day, "sets": sets or [{"weight": 50, "reps": 10}], **extra}
    response = client.post("/api/records", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


# ── Health ───────────────────────────────────────────────────────────────


def test_root_and_health(client):
    assert client.get("/").json()["status"] == "ok"
    assert client.get("/api/health").json()["status"] == "ok"
    ready = client.get("/api/health/ready")
    assert ready.status_code == 200
    assert ready.json() == {"status": "ok", "storage": "memory", "database": "connected"}


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/nope")

    assert response.status_code == 404
    assert response.json()["success"] is False


# ── Auth ─────────────────────────────────────────────────────────────────


def test_register_login_me(client, register):
    response = register(email="Lifter@Example.com")

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["user"]["email"] == "lifter@example.com"
    assert "passwordHash" not in body["user"]
    assert body["token"]

    login = client.post("/api/auth/login", json={"email": "lifter@example.com", "password": "correct-horse"})
    assert login.status_code == 200
    token = login.json()["token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["user"]["id"] == body["user"]["id"]


def test_register_rejections(client, register):
    register()

    duplicate = register(email="LIFTER@example.com")
    assert duplicate.status_code == 409
    assert duplicate.json() == {"success": False, "error": MSG_EMAIL_TAKEN}

    assert register(email="short@example.com", password="short").status_code == 400
    assert register(email="not-an-email").status_code == 400
    assert client.post("/api/auth/register", json={"email": "x@example.com"}).status_code == 400


def test_login_rejections(client, register):
    register()

    wrong = client.post("/api/auth/login", json={"email": "lifter@example.com", "password": "wrong-horse"})
    assert wrong.status_code == 401
    assert wrong.json()["error"] == MSG_INVALID_CREDENTIALS

    unknown = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "correct-horse"})
    assert unknown.status_code == 401
    assert client.post("/api/auth/login", json={}).status_code == 400


def test_protected_routes_require_a_valid_token(client):
    missing = client.get("/api/menus")
    assert missing.status_code == 401
    assert missing.json() == {"success": False, "error": MSG_NOT_AUTHENTICATED}

    assert client.get("/api/menus", headers={"Authorization": "Bearer garbage"}).status_code == 401


def test_me_for_deleted_user(client, settings):
    token = create_access_token("no-such-user", settings.jwt_secret)

    assert client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"}).status_code == 404


def test_training_routes_reject_token_of_missing_user(client, settings):
    headers = {"Authorization": f"Bearer {create_access_token('no-such-user', settings.jwt_secret)}"}

    rejected = client.post("/api/menus", json={"name": "Squat", "scheduledDays": ["monday"]}, headers=headers)

    assert rejected.status_code == 401
    assert rejected.json() == {"success": False, "error": MSG_INVALID_TOKEN}
    assert client.get("/api/records", headers=headers).status_code == 401


# ── Menus ────────────────────────────────────────────────────────────────


def test_menu_crud(client, auth_headers):
    menu = create_menu(client, auth_headers, days=["thursday", "monday"], description="Flat bench")
    assert menu["scheduledDays"] == ["monday", "thursday"]
    assert menu["description"] == "Flat bench"
    assert {"id", "createdAt", "updatedAt"} <= menu.keys()

    listed = client.get("/api/menus", headers=auth_headers).json()
    assert listed["success"] is True
    assert [m["id"] for m in listed["data"]] == [menu["id"]]

    updated = client.put(f"/api/menus/{menu['id']}", json={"name": "Incline Bench"}, headers=auth_headers)
    assert updated.status_code == 200
    assert updated.json()["data"]["name"] == "Incline Bench"
    assert updated.json()["data"]["scheduledDays"] == ["monday", "thursday"]

    deleted = client.delete(f"/api/menus/{menu['id']}", headers=auth_headers)
    assert deleted.json()["success"] is True
    assert deleted.json()["message"] == "Menu deleted"

    gone = client.get(f"/api/menus/{menu['id']}", headers=auth_headers)
    assert gone.status_code == 404
    assert gone.json() == {"success": False, "error": MSG_MENU_NOT_FOUND}


def test_menu_validation(client, auth_headers):
    empty_name = client.post("/api/menus", json={"name": " ", "scheduledDays": ["monday"]}, headers=auth_headers)
    assert empty_name.status_code == 400
    assert empty_name.json()["success"] is False

    no_days = client.post("/api/menus", json={"name": "Squat", "scheduledDays": []}, headers=auth_headers)
    assert no_days.status_code == 400

    bad_day = client.post("/api/menus", json={"name": "Squat", "scheduledDays": ["funday"]}, headers=auth_headers)
    assert bad_day.status_code == 400
    assert client.get("/api/menus", headers=auth_headers).json()["data"] == []


def test_users_cannot_see_each_other(client, auth_headers, register):
    menu = create_menu(client, auth_headers)
    other_token = register(email="other@example.com").json()["token"]
    other = {"Authorization": f"Bearer {other_token}"}

    assert client.get("/api/menus", headers=other).json()["data"] == []
    assert client.get(f"/api/menus/{menu['id']}", headers=other).status_code == 404
    assert client.delete(f"/api/menus/{menu['id']}", headers=other).status_code == 404
    assert client.get(f"/api/menus/{menu['id']}", headers=auth_headers).status_code == 200


# ── Records ──────────────────────────────────────────────────────────────


def test_record_crud(client, auth_headers):
    menu = create_menu(client, auth_headers)
    older = create_record(client, auth_headers, menu["id"], "2024-01-10")
    record = create_record(
        client,
        auth_headers,
        menu["id"],
        "2024-01-15",
        sets=[{"weight": 50, "reps": 10, "restTime": 90}, {"weight": 60, "reps": 5}],
        comment="good day",
    )
    assert record["menuId"] == menu["id"]
    assert record["date"] == "2024-01-15"
    assert [(s["weight"], s["reps"]) for s in record["sets"]] == [(50, 10), (60, 5)]
    assert record["sets"][0]["restTime"] == 90

    by_menu = client.get("/api/records", params={"menuId": menu["id"]}, headers=auth_headers).json()["data"]
    assert [r["id"] for r in by_menu] == [record["id"], older["id"]]

    latest = client.get(f"/api/records/latest/{menu['id']}", headers=auth_headers).json()
    assert latest["data"]["id"] == record["id"]

    updated = client.put(
        f"/api/records/{record['id']}",
        json={"sets": [{"weight": 80, "reps": 3}], "comment": ""},
        headers=auth_headers,
    ).json()["data"]
    assert [(s["weight"], s["reps"]) for s in updated["sets"]] == [(80, 3)]
    assert updated["comment"] == ""

    assert client.delete(f"/api/records/{record['id']}", headers=auth_headers).json()["message"] == "Record deleted"
    assert client.get(f"/api/records/{record['id']}", headers=auth_headers).status_code == 404
    assert [r["id"] for r in client.get("/api/records", headers=auth_headers).json()["data"]] == [older["id"]]


def test_latest_record_is_null_without_history(client, auth_headers):
    menu = create_menu(client, auth_headers)

    response = client.get(f"/api/records/latest/{menu['id']}", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["data"] is None


def test_record_validation(client, auth_headers):
    menu = create_menu(client, auth_headers)

    zero_weight = client.post(
        "/api/records",
        json={"menuId": menu["id"], "date": "2024-01-15", "sets": [{"weight": 0, "reps": 10}]},
        headers=auth_headers,
    )
    assert zero_weight.status_code == 400
    assert zero_weight.json() == {"success": False, "error": MSG_WEIGHT_POSITIVE}

    for literal in ("NaN", "Infinity", "-Infinity"):
        non_finite = client.post(
            "/api/records",
            content=f'{{"menuId": "{menu["id"]}", "date": "2024-01-15", "sets": [{{"weight": {literal}, "reps": 5}}]}}',
            headers={**auth_headers, "Content-Type": "application/json"},
        )
        assert non_finite.status_code == 400, literal
        assert non_finite.json() == {"success": False, "error": MSG_WEIGHT_POSITIVE}

    unknown_menu = client.post(
        "/api/records",
        json={"menuId": "missing", "date": "2024-01-15", "sets": [{"weight": 50, "reps": 10}]},
        headers=auth_headers,
    )
    assert unknown_menu.status_code == 404

    bad_date = client.post(
        "/api/records",
        json={"menuId": menu["id"], "date": "yesterday", "sets": [{"weight": 50, "reps": 10}]},
        headers=auth_headers,
    )
    assert bad_date.status_code == 400
    assert client.get("/api/records", headers=auth_headers).json()["data"] == []


def test_menu_delete_cascades_to_records(client, auth_headers):
    menu = create_menu(client, auth_headers)
    record = create_record(client, auth_headers, menu["id"], "2024-01-15")

    client.delete(f"/api/menus/{menu['id']}", headers=auth_headers)

    assert client.get(f"/api/records/{record['id']}", headers=auth_headers).status_code == 404
    assert client.get("/api/records", headers=auth_headers).json()["data"] == []


# ── Schedule ─────────────────────────────────────────────────────────────


def test_schedule(client, auth_headers):
    daily = create_menu(client, auth_headers, name="Plank", days=EVERY_DAY)
    monday_only = create_menu(client, auth_headers, name="Squat", days=["monday"])

    today = client.get("/api/schedule/today", headers=auth_headers).json()["data"]
    assert daily["id"] in [m["id"] for m in today]

    monday = client.get("/api/schedule/monday", headers=auth_headers).json()["data"]
    assert {m["id"] for m in monday} == {daily["id"], monday_only["id"]}

    assert client.get("/api/schedule/funday", headers=auth_headers).status_code == 400


# ── Analytics ────────────────────────────────────────────────────────────


def test_analytics_endpoints(client, auth_headers):
    bench = create_menu(client, auth_headers, name="ベンチプレス")
    squat = create_menu(client, auth_headers, name="Squat")
    recent = (date.today() - timedelta(days=2)).isoformat()
    older = (date.today() - timedelta(days=20)).isoformat()
    ancient = (date.today() - timedelta(days=400)).isoformat()
    create_record(client, auth_headers, bench["id"], recent, sets=[{"weight": 50, "reps": 10}, {"weight": 60, "reps": 5}])
    create_record(client, auth_headers, bench["id"], older)
    create_record(client, auth_headers, squat["id"], recent, sets=[{"weight": 100, "reps": 5}])
    create_record(client, auth_headers, squat["id"], ancient)

    summary = client.get("/api/analytics", headers=auth_headers).json()["data"]
    assert summary["days"] == 90
    assert summary["totalSessions"] == 3
    assert summary["totalSets"] == 4
    assert summary["totalVolume"] == 800 + 500 + 500
    assert summary["activeMenus"] == 2

    weekly = client.get("/api/analytics/frequency", headers=auth_headers).json()["data"]
    assert sum(w["count"] for w in weekly) == 3
    assert all("weekStartDate" in w for w in weekly)

    monthly = client.get("/api/analytics/frequency", params={"type": "monthly", "days": 1000}, headers=auth_headers)
    assert sum(m["count"] for m in monthly.json()["data"]) == 4
    assert client.get("/api/analytics/frequency", params={"type": "daily"}, headers=auth_headers).status_code == 400

    progress = client.get(f"/api/analytics/progress/{bench['id']}", headers=auth_headers).json()["data"]
    assert [p["date"] for p in progress] == [older, recent]
    assert progress[1]["maxWeight"] == 60
    assert progress[1]["volume"] == 800
    assert progress[1]["averageWeight"] == 55
    assert client.get("/api/analytics/progress/missing", headers=auth_headers).status_code == 404

    groups = client.get("/api/analytics/muscle-groups", params={"days": 7}, headers=auth_headers).json()["data"]
    by_group = {g["muscleGroup"]: g for g in groups}
    assert by_group["Chest"]["totalVolume"] == 800
    assert by_group["Chest"]["lastTrained"] == recent
    assert by_group["Legs"]["sessions"] == 1

    assert client.get("/api/analytics", params={"days": 0}, headers=auth_headers).status_code == 400
