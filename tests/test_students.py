from app.models.user import User
from tests.base import ApiTestCase, API

NEW_STUDENT = {
    "name": "Bruno Lima",
    "email": "bruno@campus.edu",
    "registration": "20240042",
    "password": "secret1",
}


class TestStudentsCrud(ApiTestCase):

    def test_create_and_get(self):
        r = self.client.post(f"{API}/students", json=NEW_STUDENT, headers=self.admin_headers)
        self.assertEqual(r.status_code, 201)
        student_id = r.json()["data"]["id"]

        r = self.client.get(f"{API}/students/{student_id}", headers=self.admin_headers)
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json()["data"]["registration"], "20240042")

    def test_list_excludes_admins_and_deleted(self):
        self.make_student(1)
        s2 = self.make_student(2)
        self.client.delete(f"{API}/students/{s2.id}", headers=self.admin_headers)

        r = self.client.get(f"{API}/students", headers=self.admin_headers)
        self.assertEqual(r.status_code, 200)
        body = r.json()
        self.assertEqual(body["meta"]["total"], 1)
        self.assertEqual([s["email"] for s in body["data"]], ["student1@campus.edu"])

    def test_list_search(self):
        self.make_student(1)
        self.make_student(2)
        r = self.client.get(f"{API}/students", params={"search": "20240002"},
                            headers=self.admin_headers)
        self.assertEqual(r.json()["meta"]["total"], 1)

    def test_duplicate_registration_is_conflict(self):
        self.make_student(1)
        payload = dict(NEW_STUDENT, registration="20240001")
        r = self.client.post(f"{API}/students", json=payload, headers=self.admin_headers)
        self.assertEqual(r.status_code, 409)
        self.assertEqual(r.json()["error"]["field"], "registration")

    def test_patch_updates_only_given_fields(self):
        s = self.make_student(1)
        r = self.client.patch(f"{API}/students/{s.id}", json={"name": "Renamed"},
                              headers=self.admin_headers)
        self.assertEqual(r.status_code, 200)
        data = r.json()["data"]
        self.assertEqual(data["name"], "Renamed")
        self.assertEqual(data["email"], "student1@campus.edu")

    def test_patch_to_taken_email_is_conflict(self):
        s1 = self.make_student(1)
        self.make_student(2)
        r = self.client.patch(f"{API}/students/{s1.id}", json={"email": "student2@campus.edu"},
                              headers=self.admin_headers)
        self.assertEqual(r.status_code, 409)

    def test_missing_student_is_not_found(self):
        r = self.client.get(f"{API}/students/999", headers=self.admin_headers)
        self.assertEqual(r.status_code, 404)
        self.assertEqual(r.json()["message"], "Student not found")

    def test_delete_is_soft(self):
        s = self.make_student(1)
        r = self.client.delete(f"{API}/students/{s.id}", headers=self.admin_headers)
        self.assertEqual(r.status_code, 200)

        self.assertEqual(self.client.get(f"{API}/students/{s.id}",
                                         headers=self.admin_headers).status_code, 404)
        self.db.expire_all()
        row = self.db.get(User, s.id)
        self.assertIsNotNone(row)
        self.assertIsNotNone(row.deletedAt)


class TestStudentResurrection(ApiTestCase):

    def test_recreate_deleted_student_restores_same_row(self):
        r = self.client.post(f"{API}/students", json=NEW_STUDENT, headers=self.admin_headers)
        original_id = r.json()["data"]["id"]
        self.client.delete(f"{API}/students/{original_id}", headers=self.admin_headers)

        payload = dict(NEW_STUDENT, name="Bruno L.", password="another1")
        r = self.client.post(f"{API}/students", json=payload, headers=self.admin_headers)
        self.assertEqual(r.status_code, 201)
        self.assertEqual(r.json()["data"]["id"], original_id)
        self.assertEqual(r.json()["data"]["name"], "Bruno L.")

        self.db.expire_all()
        self.assertEqual(self.db.query(User).filter(User.email == NEW_STUDENT["email"]).count(), 1)

        # restored account logs in with the new password
        r = self.client.post(f"{API}/auth/login", json={
            "email": NEW_STUDENT["email"], "password": "another1",
        })
        self.assertEqual(r.status_code, 200)

    def test_deleted_user_token_is_rejected(self):
        s = self.make_student(1)
        headers = self.auth(s)
        self.client.delete(f"{API}/students/{s.id}", headers=self.admin_headers)
        r = self.client.get(f"{API}/auth/me", headers=headers)
        self.assertEqual(r.status_code, 401)
