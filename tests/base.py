import unittest

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models.environment import Environment, EnvironmentType
from app.models.user import User, UserRole
from app.utils.security import hash_password, create_access_token

API = "/api/v1"
DEFAULT_PASSWORD = "Secret123"


class ApiTestCase(unittest.TestCase):
    """Runs the API against a fresh in-memory SQLite database per test."""

    def setUp(self):
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)
        self.db = self.Session()

        def override_get_db():
            db = self.Session()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

        self.admin = self.make_user("Admin", "admin@campus.edu", None, role=UserRole.ADMIN)

    def tearDown(self):
        app.dependency_overrides.clear()
        self.db.close()
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()

    # ─── Fixtures ─────────────────────────────────────────────────────────────
    def make_user(self, name, email, registration, role=UserRole.STUDENT,
                  password=DEFAULT_PASSWORD, is_active=True) -> User:
        user = User(
            name=name,
            email=email,
            registration=registration,
            password=hash_password(password),
            role=role,
            isActive=is_active,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def make_student(self, n: int = 1, **kwargs) -> User:
        return self.make_user(f"Student {n}", f"student{n}@campus.edu", f"2024{n:04d}", **kwargs)

    def make_environment(self, name="Lab 1", capacity=10,
                         env_type=EnvironmentType.LABORATORY, is_active=True) -> Environment:
        env = Environment(name=name, type=env_type, capacity=capacity, isActive=is_active)
        self.db.add(env)
        self.db.commit()
        self.db.refresh(env)
        return env

    # ─── Auth helpers ─────────────────────────────────────────────────────────
    def auth(self, user: User) -> dict:
        token = create_access_token(user.id, user.email, user.role.value)
        return {"Authorization": f"Bearer {token}"}

    @property
    def admin_headers(self) -> dict:
        return self.auth(self.admin)
