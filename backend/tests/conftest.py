import pytest
from datetime import date
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from teamtasks.database import Base, get_db
from teamtasks.main import app
from teamtasks.models.user import User
from teamtasks.models.task import Task, TaskAssignee

TEST_DB_URL = "sqlite:///./test_teamtasks.db"

engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False})
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def seed_users(db):
    users = {
        "admin": User(username="admin", first_name="Ayşe", last_name="Kaya", role="admin",
                      email="admin@team.local", member_team="yazilim"),
        "captain": User(username="kaptan", first_name="Mehmet", last_name="Demir", role="captain",
                        email="captain@team.local", member_team="Mekanik"),
        "member": User(username="elif", first_name="Elif", role="member",
                       email="elif@team.local", member_team="Yazılım"),
        "member2": User(username="can", first_name="Can", role="member",
                        email="can@team.local", member_team="elektronik"),
        "norole": User(username="yeni", email="yeni@team.local"),
    }
    for u in users.values():
        db.add(u)
    db.commit()
    for u in users.values():
        db.refresh(u)
    return users


@pytest.fixture
def seed_task(db, seed_users):
    """member, member2 두 명이 배정된 태스크."""
    task = Task(
        title="Robot kol montajı",
        description="ilk prototip",
        start_date=date(2026, 3, 2),
        end_date=date(2026, 3, 6),
        due_date=date(2026, 3, 6),
        status="assigned",
        assignee_team="mekanik",
        assignee_user_id=seed_users["member"].user_id,
        created_by=seed_users["admin"].user_id,
    )
    db.add(task)
    db.commit()
    db.refresh(task)
    db.add_all([
        TaskAssignee(task_id=task.task_id, user_id=seed_users["member"].user_id, is_done=False),
        TaskAssignee(task_id=task.task_id, user_id=seed_users["member2"].user_id, is_done=False),
    ])
    db.commit()
    return task


def get_token(client, username: str) -> str:
    resp = client.post("/api/auth/login", json={"username": username})
    assert resp.status_code == 200, resp.text
    return resp.json()["access_token"]


def auth_headers(client, username: str) -> dict:
    return {"Authorization": f"Bearer {get_token(client, username)}"}
