"""Test Tasks 동작과 회귀 시나리오를 검증하는 자동화 테스트입니다."""

from teamtasks.models.task import Task, TaskAssignee
from tests.conftest import auth_headers


def _create(client, headers, **overrides):
    payload = {
        "title": "Şasi kesimi",
        "start_date": "2026-03-02",
        "end_date": "2026-03-06",
    }
    payload.update(overrides)
    return client.post("/api/tasks", json=payload, headers=headers)


def test_create_task_with_assignees_reads_back(client, seed_users):
    headers = auth_headers(client, "admin")
    u1 = seed_users["member"].user_id
    u2 = seed_users["member2"].user_id
    resp = _create(client, headers, title="  Şasi kesimi  ", assignee_user_ids=[u1, u2], assignee_team="Mekanik")
    assert resp.status_code == 201, resp.text
    task = resp.json()["task"]
    assert task["title"] == "Şasi kesimi"
    assert task["status"] == "open"
    assert task["assignee_team"] == "mekanik"
    assert task["due_date"] == "2026-03-06"
    assert task["assignee_user_id"] == u1

    listing = client.get("/api/tasks", headers=headers).json()["data"]
    assert len(listing) == 1
    assignees = {a["id"]: a["done"] for a in listing[0]["assignees"]}
    assert assignees == {u1: False, u2: False}


def test_create_task_end_before_start_is_rejected(client, db, seed_users):
    headers = auth_headers(client, "admin")
    resp = _create(client, headers, title="A", start_date="2025-01-05", end_date="2025-01-01")
    assert resp.status_code == 400
    assert db.query(Task).count() == 0


def test_create_task_validation_errors(client, db, seed_users):
    headers = auth_headers(client, "admin")
    assert _create(client, headers, title="   ").status_code == 400
    assert _create(client, headers, start_date=None).status_code == 400
    assert _create(client, headers, end_date="yarın değil").status_code == 400
    assert _create(client, headers, status="closed").status_code == 400
    assert _create(client, headers, assignee_team="kimya").status_code == 400
    assert _create(client, headers, assignee_user_ids=[9999]).status_code == 400
    assert db.query(Task).count() == 0


def test_create_task_explicit_due_date_is_kept(client, seed_users):
    headers = auth_headers(client, "kaptan")
    resp = _create(client, headers, due_date="2026-03-04")
    assert resp.status_code == 201
    assert resp.json()["task"]["due_date"] == "2026-03-04"


def test_create_task_forbidden_for_member(client, seed_users):
    headers = auth_headers(client, "elif")
    assert _create(client, headers).status_code == 403


def test_list_tasks_requires_auth(client):
    resp = client.get("/api/tasks")
    assert resp.status_code in (401, 403)


def test_list_tasks_forbidden_without_role(client, seed_users):
    headers = auth_headers(client, "yeni")
    assert client.get("/api/tasks", headers=headers).status_code == 403


def test_list_tasks_filters(client, seed_users, seed_task):
    headers = auth_headers(client, "admin")
    _create(client, headers, title="Yazılım", assignee_team="yazilim", status="done",
            start_date="2026-04-01", end_date="2026-04-03")

    def titles(**params):
        resp = client.get("/api/tasks", params=params, headers=headers)
        assert resp.status_code == 200, resp.text
        return [t["title"] for t in resp.json()["data"]]

    assert titles() == ["Yazılım", "Robot kol montajı"]
    assert titles(status="done") == ["Yazılım"]
    assert titles(team="mekanik") == ["Robot kol montajı"]
    assert titles(**{"from": "2026-03-15"}) == ["Yazılım"]
    assert titles(to="2026-03-31") == ["Robot kol montajı"]


def test_list_tasks_rejects_bad_filters(client, seed_users):
    headers = auth_headers(client, "admin")
    assert client.get("/api/tasks", params={"status": "x"}, headers=headers).status_code == 400
    assert client.get("/api/tasks", params={"team": "x"}, headers=headers).status_code == 400
    assert client.get("/api/tasks", params={"from": "x"}, headers=headers).status_code == 400


def test_member_sees_only_assigned_tasks(client, seed_users, seed_task):
    admin = auth_headers(client, "admin")
    _create(client, admin, title="Başkasının işi", assignee_user_ids=[seed_users["captain"].user_id])

    member = auth_headers(client, "elif")
    titles = [t["title"] for t in client.get("/api/tasks", headers=member).json()["data"]]
    assert titles == ["Robot kol montajı"]

    captain = auth_headers(client, "kaptan")
    assert len(client.get("/api/tasks", headers=captain).json()["data"]) == 2


def test_legacy_single_assignee_fallback(client, db, seed_users):
    task = Task(title="Eski görev", status="open", assignee_user_id=seed_users["member"].user_id)
    db.add(task)
    db.commit()
    headers = auth_headers(client, "elif")
    data = client.get("/api/tasks", headers=headers).json()["data"]
    assert data[0]["assignees"] == [{"id": seed_users["member"].user_id, "done": False}]


def test_get_single_task(client, seed_users, seed_task):
    headers = auth_headers(client, "can")
    resp = client.get(f"/api/tasks/{seed_task.task_id}", headers=headers)
    assert resp.status_code == 200
    assert len(resp.json()["data"]["assignees"]) == 2
    assert client.get("/api/tasks/9999", headers=headers).status_code == 404


def test_partial_update_only_changes_status(client, seed_users, seed_task):
    headers = auth_headers(client, "admin")
    before = client.get(f"/api/tasks/{seed_task.task_id}", headers=headers).json()["data"]
    resp = client.put(f"/api/tasks/{seed_task.task_id}", json={"status": "done"}, headers=headers)
    assert resp.status_code == 200, resp.text
    after = resp.json()["task"]
    assert after["status"] == "done"
    for field in ("title", "description", "start_date", "end_date", "due_date", "assignee_team", "assignees"):
        assert after[field] == before[field]


def test_update_by_body_id(client, seed_users, seed_task):
    headers = auth_headers(client, "kaptan")
    resp = client.put("/api/tasks", json={"id": seed_task.task_id, "description": ""}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["task"]["description"] is None


def test_update_end_date_syncs_due_date(client, seed_users, seed_task):
    headers = auth_headers(client, "admin")
    resp = client.put(f"/api/tasks/{seed_task.task_id}", json={"end_date": "2026-03-09"}, headers=headers)
    assert resp.status_code == 200
    task = resp.json()["task"]
    assert task["end_date"] == "2026-03-09"
    assert task["due_date"] == "2026-03-09"


def test_update_rejects_end_before_existing_start(client, db, seed_users, seed_task):
    headers = auth_headers(client, "admin")
    resp = client.put(f"/api/tasks/{seed_task.task_id}", json={"end_date": "2026-03-01"}, headers=headers)
    assert resp.status_code == 400
    db.expire_all()
    assert str(db.get(Task, seed_task.task_id).end_date) == "2026-03-06"


def test_update_validation_errors_do_not_mutate(client, db, seed_users, seed_task):
    headers = auth_headers(client, "admin")
    url = f"/api/tasks/{seed_task.task_id}"
    assert client.put(url, json={"status": "closed", "title": "Yeni"}, headers=headers).status_code == 400
    assert client.put(url, json={"assignee_team": "kimya"}, headers=headers).status_code == 400
    assert client.put(url, json={"start_date": "olmaz"}, headers=headers).status_code == 400
    assert client.put(url, json={"title": ""}, headers=headers).status_code == 400
    assert client.put(url, json={}, headers=headers).status_code == 400
    db.expire_all()
    assert db.get(Task, seed_task.task_id).title == "Robot kol montajı"


def test_update_missing_task_is_404(client, seed_users):
    headers = auth_headers(client, "admin")
    assert client.put("/api/tasks/9999", json={"status": "done"}, headers=headers).status_code == 404
    assert client.put("/api/tasks", json={"status": "done"}, headers=headers).status_code == 400


def test_replace_assignees_with_empty_list(client, db, seed_users, seed_task):
    headers = auth_headers(client, "admin")
    resp = client.put(f"/api/tasks/{seed_task.task_id}", json={"assignee_user_ids": []}, headers=headers)
    assert resp.status_code == 200, resp.text
    task = resp.json()["task"]
    assert task["assignees"] == []
    assert task["title"] == "Robot kol montajı"
    assert task["end_date"] == "2026-03-06"
    assert db.query(TaskAssignee).filter(TaskAssignee.task_id == seed_task.task_id).count() == 0


def test_replace_assignees_resets_completion(client, db, seed_users, seed_task):
    headers = auth_headers(client, "admin")
    captain_id = seed_users["captain"].user_id
    member_id = seed_users["member"].user_id
    row = db.query(TaskAssignee).filter(TaskAssignee.user_id == member_id).first()
    row.is_done = True
    db.commit()

    resp = client.put(
        f"/api/tasks/{seed_task.task_id}",
        json={"assignee_user_ids": [captain_id, member_id, captain_id]},
        headers=headers,
    )
    assert resp.status_code == 200
    task = resp.json()["task"]
    assert task["assignees"] == [{"id": captain_id, "done": False}, {"id": member_id, "done": False}]
    assert task["assignee_user_id"] == captain_id


def test_update_forbidden_for_member(client, seed_users, seed_task):
    headers = auth_headers(client, "elif")
    resp = client.put(f"/api/tasks/{seed_task.task_id}", json={"status": "done"}, headers=headers)
    assert resp.status_code == 403


def test_delete_task_removes_assignments(client, db, seed_users, seed_task):
    headers = auth_headers(client, "admin")
    resp = client.delete(f"/api/tasks?id={seed_task.task_id}", headers=headers)
    assert resp.status_code == 204
    assert db.query(Task).filter(Task.task_id == seed_task.task_id).first() is None
    assert db.query(TaskAssignee).filter(TaskAssignee.task_id == seed_task.task_id).count() == 0


def test_delete_task_with_json_body_and_path(client, db, seed_users, seed_task):
    headers = auth_headers(client, "admin")
    other = _create(client, headers).json()["task"]["task_id"]
    resp = client.request("DELETE", "/api/tasks", json={"id": seed_task.task_id}, headers=headers)
    assert resp.status_code == 204
    assert client.delete(f"/api/tasks/{other}", headers=headers).status_code == 204
    assert db.query(Task).count() == 0


def test_delete_task_errors(client, seed_users, seed_task):
    admin = auth_headers(client, "admin")
    assert client.delete("/api/tasks", headers=admin).status_code == 400
    assert client.delete("/api/tasks/9999", headers=admin).status_code == 404
    member = auth_headers(client, "elif")
    assert client.delete(f"/api/tasks/{seed_task.task_id}", headers=member).status_code == 403


def test_captain_can_delete_task(client, db, seed_users, seed_task):
    headers = auth_headers(client, "kaptan")
    assert client.delete(f"/api/tasks/{seed_task.task_id}", headers=headers).status_code == 204
    assert db.query(Task).count() == 0
    assert db.query(TaskAssignee).count() == 0


def test_create_task_skips_empty_assignee_entries(client, seed_users):
    headers = auth_headers(client, "admin")
    u1 = seed_users["member"].user_id
    resp = _create(client, headers, assignee_user_ids=[None, u1, None, u1])
    assert resp.status_code == 201, resp.text
    task = resp.json()["task"]
    assert task["assignee_user_id"] == u1
    assert task["assignees"] == [{"id": u1, "done": False}]
