from datetime import timedelta

from app.models.user import User, UserRole
from app.seed_admin import seed_admin
from app.utils.security import create_access_token
from tests.base import ApiTestCase, API, DEFAULT_PASSWORD


class TestRegister(ApiTestCase):

    def test_register_creates_student(self):
        r = self.client.post(f"{API}/auth/register", json={
            "name": "  Ana Souza ",
            "email": "ana@campus.edu",
            "password": "secret1",
            "registration": "20240001",
        })
        self.assertEqual(r.status_code, 201)
        body = r.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["data"]["name"], "Ana Souza")
        self.assertEqual(body["data"]["role"], "student")
        self.assertNotIn("password", body["data"])

    def test_register_duplicate_email_is_conflict(self):
        self.make_student(1)
        r = self.client.post(f"{API}/auth/register", json={
            "name": "Other",
            "email": "student1@campus.edu",
            "password": "secret1",
            "registration": "99999999",
        })
        self.assertEqual(r.status_code, 409)
        self.assertEqual(r.json()["error"]["code"], "DUPLICATE_ENTRY")
        self.assertEqual(r.json()["error"]["field"], "email")

    def test_register_short_password_is_validation_error(self):
        r = self.client.post(f"{API}/auth/register", json={
            "name": "Ana",
            "email": "ana@campus.edu",
            "password": "123",
            "registration": "20240001",
        })
        self.assertEqual(r.status_code, 400)
        body = r.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["error"]["code"], "VALIDATION_ERROR")
        self.assertEqual(body["error"]["details"][0]["field"], "password")


class TestLogin(ApiTestCase):

    def test_login_returns_token_usable_on_me(self):
        student = self.make_student(1)
        r = self.client.post(f"{API}/auth/login", json={
            "email": student.email, "password": DEFAULT_PASSWORD,
        })
        self.assertEqual(r.status_code, 200)
        data = r.json()["data"]
        self.assertEqual(data["tokenType"], "Bearer")
        self.assertEqual(data["user"]["id"], student.id)

        me = self.client.get(f"{API}/auth/me",
                             headers={"Authorization": f"Bearer {data['accessToken']}"})
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.json()["data"]["email"], student.email)

    def test_wrong_password_is_unauthorized(self):
        student = self.make_student(1)
        r = self.client.post(f"{API}/auth/login", json={
            "email": student.email, "password": "wrong-password",
        })
        self.assertEqual(r.status_code, 401)
        self.assertEqual(r.json()["message"], "Invalid email or password")

    def test_inactive_account_cannot_login(self):
        student = self.make_student(1, is_active=False)
        r = self.client.post(f"{API}/auth/login", json={
            "email": student.email, "password": DEFAULT_PASSWORD,
        })
        self.assertEqual(r.status_code, 403)
        self.assertEqual(r.json()["error"]["code"], "ACCOUNT_INACTIVE")


class TestTokenGuard(ApiTestCase):

    def test_missing_token_is_unauthorized(self):
        r = self.client.get(f"{API}/auth/me")
        self.assertEqual(r.status_code, 401)
        self.assertEqual(r.json()["error"]["code"], "UNAUTHORIZED")

    def test_garbage_token_is_unauthorized(self):
        r = self.client.get(f"{API}/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
        self.assertEqual(r.status_code, 401)

    def test_expired_token(self):
        token = create_access_token(self.admin.id, self.admin.email, "admin",
                                    expires_delta=timedelta(minutes=-5))
        r = self.client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(r.status_code, 401)
        self.assertEqual(r.json()["error"]["code"], "TOKEN_EXPIRED")

    def test_student_cannot_use_admin_routes(self):
        student = self.make_student(1)
        r = self.client.get(f"{API}/students", headers=self.auth(student))
        self.assertEqual(r.status_code, 403)
        self.assertEqual(r.json()["error"]["code"], "FORBIDDEN")

    def test_unknown_route_uses_error_envelope(self):
        r = self.client.get(f"{API}/nothing-here")
        self.assertEqual(r.status_code, 404)
        self.assertFalse(r.json()["success"])


class TestSeedAdmin(ApiTestCase):

    def test_seed_is_idempotent(self):
        first = seed_admin(self.db)
        second = seed_admin(self.db)
        self.assertEqual(first.id, second.id)
        self.assertEqual(first.role, UserRole.ADMIN)
        self.assertEqual(self.db.query(User).filter(User.role == UserRole.ADMIN).count(), 1)
