"""Seed the database with test data."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import date
from teamtasks.database import SessionLocal, engine, Base
import teamtasks.models  # noqa: F401

from teamtasks.models.user import User
from teamtasks.models.task import Task, TaskAssignee


def seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if db.query(User).count() > 0:
            print("Database already seeded. Skipping.")
            return

        # Users
        users = [
            User(username="admin", first_name="Ayşe", last_name="Kaya", role="admin",
                 email="admin@team.local", member_team="yazilim"),
            User(username="kaptan", first_name="Mehmet", last_name="Demir", role="captain",
                 email="captain@team.local", member_team="Mekanik"),
            User(username="elif", first_name="Elif", last_name="Şahin", role="member",
                 email="elif@team.local", member_team="Yazılım"),
            User(username="can", first_name="Can", last_name="Yıldız", role="member",
                 email="can@team.local", member_team="elektronik"),
            User(username="yeni", email="yeni@team.local"),
        ]
        db.add_all(users)
        db.flush()

        tasks = [
            Task(title="Motor sürücü kartı lehim", status="assigned", assignee_team="elektronik",
                 start_date=date(2026, 3, 2), end_date=date(2026, 3, 6), due_date=date(2026, 3, 6),
                 created_by=users[0].user_id),
            Task(title="Otonom sürüş kodu refactor", status="open", assignee_team="yazilim",
                 start_date=date(2026, 3, 3), end_date=date(2026, 3, 10), due_date=date(2026, 3, 10),
                 created_by=users[1].user_id),
            Task(title="Sponsor sunumu", status="open", assignee_team="sosyal",
                 start_date=date(2026, 3, 9), end_date=date(2026, 3, 9), due_date=date(2026, 3, 9),
                 assignee_user_id=users[3].user_id, created_by=users[0].user_id),
        ]
        db.add_all(tasks)
        db.flush()

        assignments = [
            TaskAssignee(task_id=tasks[0].task_id, user_id=users[3].user_id, is_done=False),
            TaskAssignee(task_id=tasks[1].task_id, user_id=users[2].user_id, is_done=False),
            TaskAssignee(task_id=tasks[1].task_id, user_id=users[0].user_id, is_done=False),
        ]
        db.add_all(assignments)

        db.commit()
        print("Seed data inserted successfully.")
        print(f"  Users: {len(users)}")
        print(f"  Tasks: {len(tasks)}")
        print(f"  Assignments: {len(assignments)}")
        print()
        print("Test login credentials:")
        for u in users:
            print(f"  username={u.username}  role={u.role}  name={u.full_name}")

    except Exception as e:
        db.rollback()
        raise e
    finally:
        db.close()


if __name__ == "__main__":
    seed()
