"""HTTP tests for the user and log routes."""
import pytest

from utils.dates import format_date, utcnow


def _create(client, username="alice"):
    response = client.post("/api/users", data={"username": username})
    assert response.status_code == 200
    return response.json()


def _add(client, user_id, description="run", duration="30", date=""):
    return client.post(
        f"/api/users/{user_id}/exercises",
        data={"description": description, "duration": duration, "date": date},
    )


def test_health(client):
    response = client.get("/health")
    assert response.json()["status"] == "healthy"


def test_index_page(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "Exercise tracker" in response.text


def test_create_user_returns_id_and_name(client):
    body = _create(client, "  alice ")
    assert set(body) == {"_id", "username"}
    assert body["username"] == "alice"


def test_create_user_errors(client):
    response = client.post("/api/users", data={"username": "al"})
    assert response.status_code == 400
    assert response.json() == {"error": "Username must be at least 3 characters long"}

    response = client.post("/api/users", data={"username": ""})
    assert response.json() == {"error": "Username is a required field"}

    _create(client, "alice")
    response = client.post("/api/users", data={"username": "alice"})
    assert response.status_code == 409
    assert response.json() == {"error": "There is already a user with that username"}


def test_list_users(client):
    _create(client, "alice")
    _create(client, "bobby")
    response = client.get("/api/users")
    assert [u["username"] for u in response.json()] == ["alice", "bobby"]
    assert all("exercises" not in u for u in response.json())


def test_add_exercise_returns_full_log(client):
    user = _create(client)
    _add(client, user["_id"], "run", "30", "")
    response = _add(client, user["_id"], "swim", "45", "2021-06-01")
    assert response.status_code == 200
    body = response.json()
    assert body["_id"] == user["_id"]
    assert body["exercises"] == [
        {"description": "run", "duration": 30, "date": format_date(utcnow())},
        {"description": "swim", "duration": 45, "date": "Tue Jun 01 2021"},
    ]


def test_add_exercise_errors(client):
    user = _create(client)
    assert _add(client, "5f0000000000000000000000").status_code == 404
    response = _add(client, user["_id"], duration="lots")
    assert response.status_code == 400
    assert response.json() == {"error": "Duration must be a number"}
    response = _add(client, user["_id"], date="the day before")
    assert response.status_code == 400
    assert "error" in response.json()


def test_logs_unfiltered_and_filtered(client):
    user = _create(client)
    for date in ["2019-12-31", "2020-01-01", "2020-01-20", "2020-01-31", "2020-02-01"]:
        _add(client, user["_id"], date=date)

    body = client.get(f"/api/users/{user['_id']}/logs").json()
    assert body["count"] == 5
    assert body["username"] == "alice"

    body = client.get(
        f"/api/users/{user['_id']}/logs", params={"from": "2020-01-01", "to": "2020-01-31"}
    ).json()
    assert body["count"] == 3
    assert [e["date"] for e in body["exercises"]] == [
        "Wed Jan 01 2020", "Mon Jan 20 2020", "Fri Jan 31 2020",
    ]

    body = client.get(f"/api/users/{user['_id']}/logs", params={"limit": "2"}).json()
    assert body["count"] == 2
    assert [e["date"] for e in body["exercises"]] == ["Tue Dec 31 2019", "Wed Jan 01 2020"]


def test_singular_log_path(client):
    user = _create(client)
    _add(client, user["_id"])
    assert client.get(f"/api/users/{user['_id']}/log").json()["count"] == 1


def test_logs_errors(client):
    user = _create(client)
    response = client.get(f"/api/users/{user['_id']}/logs", params={"from": "nope"})
    assert response.status_code == 400
    response = client.get("/api/users/unknown/logs")
    assert response.status_code == 404
    assert response.json() == {"error": "No user was found"}


@pytest.mark.parametrize("path", ["/api/users/unknown/logs", "/api/users/unknown/logs?limit=3"])
def test_legacy_mode_answers_200(legacy_client, path):
    response = legacy_client.get(path)
    assert response.status_code == 200
    assert response.json() == {"error": "No user was found"}


def test_legacy_mode_validation(legacy_client):
    response = legacy_client.post("/api/users", data={"username": "x"})
    assert response.status_code == 200
    assert "error" in response.json()


@pytest.mark.parametrize("date", ["0001-01-01T00:00:00+01:00", "9999-12-31T23:00:00-05:00"])
def test_out_of_range_dates_are_invalid(client, date):
    user = _create(client)
    response = _add(client, user["_id"], date=date)
    assert response.status_code == 400
    assert response.json() == {"error": f"Invalid date format: '{date}'"}
    response = client.get(f"/api/users/{user['_id']}/logs", params={"from": date})
    assert response.status_code == 400


def test_unknown_user_wins_over_bad_date(client):
    response = client.get("/api/users/5f0000000000000000000000/logs", params={"from": "garbage"})
    assert response.status_code == 404
    assert response.json() == {"error": "No user was found"}


def test_legacy_mode_out_of_range_date(legacy_client):
    user = _create(legacy_client)
    response = _add(legacy_client, user["_id"], date="0001-01-01T00:00:00+01:00")
    assert response.status_code == 200
    assert "error" in response.json()
