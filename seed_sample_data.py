from sqlalchemy import func

from db.base import Base
from db.session import engine, get_db_session, init_db
from auth.security import hash_password
from models import Comment, Project, Role, Task, TaskStatus, User

SAMPLE_PASSWORD = "changeme123"


def main() -> None:
    Base.metadata.drop_all(bind=engine)
    init_db()

    people = [
        ("pm@example.com", "Priya Manager", Role.PROJECT_MANAGER),
        ("alex@example.com", "Alex Builder", Role.TEAM_MEMBER),
        ("sam@example.com", "Sam Tester", Role.TEAM_MEMBER),
        ("jo@example.com", "Jo Designer", Role.TEAM_MEMBER),
    ]

    projects = [
        ("Launch", "Public launch of the customer portal."),
        ("Onboarding revamp", "Rework the first-week onboarding flow."),
    ]

    tasks = [
        # (project index, title, assignee index or None, status)
        (0, "Design landing page", 3, TaskStatus.DONE),
        (0, "Implement signup API", 1, TaskStatus.IN_PROGRESS),
        (0, "Write release notes", None, TaskStatus.TODO),
        (1, "Audit current onboarding emails", 2, TaskStatus.TODO),
        (1, "Prototype checklist widget", 1, TaskStatus.TODO),
    ]

    with get_db_session() as db:
        password_hash = hash_password(SAMPLE_PASSWORD)
        users = [
            User(email=email, name=name, role=role, password_hash=password_hash)
            for email, name, role in people
        ]
        db.add_all(users)
        db.flush()

        manager = users[0]
        seeded_projects = [
            Project(title=title, description=description, owner_id=manager.id)
            for title, description in projects
        ]
        db.add_all(seeded_projects)
        db.flush()

        for project_index, title, assignee_index, status in tasks:
            assignee = users[assignee_index] if assignee_index is not None else None
            task = Task(
                title=title,
                project_id=seeded_projects[project_index].id,
                assignee_id=assignee.id if assignee else None,
                status=status,
            )
            db.add(task)
            db.flush()
            if assignee is not None:
                db.add(Comment(content="Picked this up.", task_id=task.id, author_id=assignee.id))

    with get_db_session() as db:
        counts = {
            model.__tablename__: db.query(func.count(model.id)).scalar()
            for model in (User, Project, Task, Comment)
        }
        seeded_users = db.query(User.id, User.email, User.role).order_by(User.id).all()

    print("Seeding complete:", counts)
    print("Users (password %r):" % SAMPLE_PASSWORD)
    for user_id, email, role in seeded_users:
        print(f"  {user_id:>3}  {email:<22} {role.value}")


if __name__ == "__main__":
    main()
