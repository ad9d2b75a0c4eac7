"""Integration tests for API endpoints.

These tests verify API endpoints work correctly end-to-end.
"""

import pytest

from toodoo.notifications.events import AppEvent


def _create_category(test_client, name="Personal", **extra):
    response = test_client.post("/categories", json={"name": name, **extra})
    assert response.status_code == 201
    return response.json()["category"]


def _create_todo(test_client, category_id, goal="Buy milk", **extra):
    response = test_client.post("/todos", json={"goal": goal, "category_id": category_id, **extra})
    assert response.status_code == 201
    return response.json()["todo"]


class TestHealth:

    def test_health(self, test_client):
        response = test_client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestSetup:
    """First-run setup endpoint."""

    def test_setup_creates_defaults(self, test_client):
        received = []
        test_client.event_bus.listen(AppEvent.USER_HAS_SETUP, lambda event, payload: received.append(event))

        response = test_client.post("/setup")

        assert response.status_code == 201
        data = response.json()
        assert [c["order"] for c in data["categories"]] == [0, 1]
        assert data["todo"]["category_id"] == data["categories"][0]["id"]
        assert received == [AppEvent.USER_HAS_SETUP]

    def test_setup_twice_conflicts(self, test_client):
        assert test_client.post("/setup").status_code == 201
        assert test_client.post("/setup").status_code == 409
        assert test_client.get("/categories").json()["count"] == 2


class TestCategoryEndpoints:
    """Category listing, creation, and ordering."""

    def test_create_category(self, test_client):
        category = _create_category(test_client, "Errands", color="#59cd90", icon="cart")
        assert category["color"] == "59CD90"
        assert category["order"] == 0

    def test_create_category_blank_name(self, test_client):
        response = test_client.post("/categories", json={"name": "  "})
        assert response.status_code == 422

    def test_create_category_bad_color(self, test_client):
        response = test_client.post("/categories", json={"name": "Errands", "color": "purple"})
        assert response.status_code == 422

    def test_list_by_order(self, test_client):
        _create_category(test_client, "Work", order=1)
        _create_category(test_client, "Personal", order=0)

        data = test_client.get("/categories").json()
        assert data["count"] == 2
        assert [c["name"] for c in data["categories"]] == ["Personal", "Work"]

        data = test_client.get("/categories", params={"ascending": False, "limit": 1}).json()
        assert [c["name"] for c in data["categories"]] == ["Work"]

    def test_list_unknown_sort(self, test_client):
        assert test_client.get("/categories", params={"sort": "name"}).status_code == 400

    def test_default_category(self, test_client):
        assert test_client.get("/categories/default").status_code == 404
        _create_category(test_client, "Work", order=1)
        _create_category(test_client, "Personal", order=0)

        response = test_client.get("/categories/default")
        assert response.status_code == 200
        assert response.json()["category"]["name"] == "Personal"

    def test_set_order(self, test_client):
        category = _create_category(test_client)
        response = test_client.put(f"/categories/{category['id']}/order", json={"order": 9})
        assert response.status_code == 200
        assert response.json()["category"]["order"] == 9

    def test_set_order_missing(self, test_client):
        response = test_client.put("/categories/missing/order", json={"order": 1})
        assert response.status_code == 404

    def test_move(self, test_client):
        for name in ["a", "b", "c"]:
            _create_category(test_client, name)

        response = test_client.post("/categories/move", json={"from_index": 2, "to_index": 0})
        assert response.status_code == 200
        assert [(c["name"], c["order"]) for c in response.json()["categories"]] == [("c", 0), ("a", 1), ("b", 2)]

    def test_move_out_of_range(self, test_client):
        _create_category(test_client)
        response = test_client.post("/categories/move", json={"from_index": 0, "to_index": 4})
        assert response.status_code == 400


class TestToDoEndpoints:
    """To-do creation and lifecycle updates."""

    def test_create_and_get(self, test_client):
        category = _create_category(test_client)
        todo = _create_todo(test_client, category["id"])

        response = test_client.get(f"/todos/{todo['id']}")
        assert response.status_code == 200
        assert response.json()["todo"]["goal"] == "Buy milk"

    def test_create_blank_goal(self, test_client):
        category = _create_category(test_client)
        response = test_client.post("/todos", json={"goal": "", "category_id": category["id"]})
        assert response.status_code == 422

    def test_create_unknown_category(self, test_client):
        response = test_client.post("/todos", json={"goal": "Orphan", "category_id": "missing"})
        assert response.status_code == 404

    def test_get_missing(self, test_client):
        assert test_client.get("/todos/missing").status_code == 404

    def test_create_with_reminder(self, test_client, alarm_facility, remind_at):
        category = _create_category(test_client)
        _create_todo(test_client, category["id"], remind_at=remind_at.isoformat())

        pending = alarm_facility.pending()
        assert len(pending) == 1
        assert pending[0].trigger.to_datetime() == remind_at

    def test_clear_reminder(self, test_client, alarm_facility, remind_at):
        category = _create_category(test_client)
        todo = _create_todo(test_client, category["id"], remind_at=remind_at.isoformat())

        response = test_client.patch(f"/todos/{todo['id']}", json={"remind_at": None})

        assert response.status_code == 200
        assert response.json()["todo"]["remind_at"] is None
        assert alarm_facility.pending() == []

    def test_omitted_remind_at_is_untouched(self, test_client, alarm_facility, remind_at):
        category = _create_category(test_client)
        todo = _create_todo(test_client, category["id"], remind_at=remind_at.isoformat())

        response = test_client.patch(f"/todos/{todo['id']}", json={})

        assert response.json()["todo"]["remind_at"] is not None
        assert len(alarm_facility.pending()) == 1

    @pytest.mark.parametrize("flag", ["completed", "trashed"])
    def test_complete_or_trash_cancels_reminder(self, test_client, alarm_facility, remind_at, flag):
        category = _create_category(test_client)
        todo = _create_todo(test_client, category["id"], remind_at=remind_at.isoformat())

        response = test_client.patch(f"/todos/{todo['id']}", json={flag: True})

        assert response.status_code == 200
        assert response.json()["todo"][flag] is True
        assert alarm_facility.pending() == []

    def test_valid_todos(self, test_client):
        category = _create_category(test_client)
        keep = _create_todo(test_client, category["id"], goal="Keep")
        done = _create_todo(test_client, category["id"], goal="Done")
        test_client.patch(f"/todos/{done['id']}", json={"completed": True})

        data = test_client.get(f"/categories/{category['id']}/todos").json()
        assert data["count"] == 1
        assert data["todos"][0]["id"] == keep["id"]

    def test_valid_todos_unknown_category(self, test_client):
        assert test_client.get("/categories/missing/todos").status_code == 404


class TestToDoReactivation:
    """Remind times sent together with un-complete or restore."""

    @pytest.mark.parametrize("flag", ["completed", "trashed"])
    def test_reactivate_with_remind_at_registers(self, test_client, alarm_facility, remind_at, flag):
        category = _create_category(test_client)
        todo = _create_todo(test_client, category["id"])
        test_client.patch(f"/todos/{todo['id']}", json={flag: True})

        response = test_client.patch(
            f"/todos/{todo['id']}",
            json={flag: False, "remind_at": remind_at.isoformat()},
        )

        assert response.status_code == 200
        assert response.json()["todo"][flag] is False
        assert alarm_facility.pending_identifiers() == [f"/ToDo/{todo['id']}"]
        assert alarm_facility.pending()[0].trigger.to_datetime() == remind_at

    def test_complete_with_remind_at_stays_unscheduled(self, test_client, alarm_facility, remind_at):
        category = _create_category(test_client)
        todo = _create_todo(test_client, category["id"])

        response = test_client.patch(
            f"/todos/{todo['id']}",
            json={"completed": True, "remind_at": remind_at.isoformat()},
        )

        assert response.json()["todo"]["completed"] is True
        assert alarm_facility.pending() == []


class TestStartup:
    """Reminders are rebuilt from stored to-dos when the app starts."""

    def test_startup_reregisters_stored_reminders(
        self, db_session, scheduler, alarm_facility, todo_repository, stored_category,
        sample_todo_base, remind_at, monkeypatch
    ):
        from sqlalchemy.orm import sessionmaker
        from fastapi.testclient import TestClient
        from toodoo.api import app as app_module
        from toodoo.models.todo import ToDo

        due = todo_repository.create(ToDo(**{**sample_todo_base, "id": "due", "remind_at": remind_at}))
        todo_repository.create(ToDo(**{**sample_todo_base, "id": "done", "remind_at": remind_at,
                                       "completed": True}))
        assert alarm_facility.pending() == []

        monkeypatch.setattr(app_module, "SessionLocal", sessionmaker(bind=db_session.get_bind()))
        monkeypatch.setattr(app_module, "reminder_scheduler", scheduler)

        with TestClient(app_module.app) as client:
            assert client.get("/health").status_code == 200

        assert alarm_facility.pending_identifiers() == [f"/ToDo/{due.id}"]
