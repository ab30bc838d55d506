import unittest

from app.services.dashboard_service import occupation_rate
from tests.base import ApiTestCase, API


class TestOccupationRate(unittest.TestCase):

    def test_rounds_to_two_decimals(self):
        self.assertEqual(occupation_rate(1, 3), 33.33)
        self.assertEqual(occupation_rate(2, 3), 66.67)

    def test_halves_round_up(self):
        self.assertEqual(occupation_rate(1, 32), 3.13)
        self.assertEqual(occupation_rate(5, 32), 15.63)
        self.assertEqual(occupation_rate(1, 8), 12.5)

    def test_full_and_empty(self):
        self.assertEqual(occupation_rate(10, 10), 100.0)
        self.assertEqual(occupation_rate(0, 10), 0.0)

    def test_zero_capacity_is_zero(self):
        self.assertEqual(occupation_rate(5, 0), 0.0)


class TestDashboard(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.lab = self.make_environment("Lab A", capacity=4)
        self.room = self.make_environment("Room B", capacity=3)
        self.students = [self.make_student(n) for n in range(1, 4)]

    def check_in(self, student, env):
        r = self.client.post(f"{API}/access-logs", headers=self.admin_headers, json={
            "studentId": student.id, "environmentId": env.id, "action": "check_in",
        })
        self.assertEqual(r.status_code, 201)

    def check_out(self, student, env):
        r = self.client.post(f"{API}/access-logs", headers=self.admin_headers, json={
            "studentId": student.id, "environmentId": env.id, "action": "check_out",
        })
        self.assertEqual(r.status_code, 200)

    def occupation(self, headers=None):
        r = self.client.get(f"{API}/dashboard/occupation", headers=headers or self.admin_headers)
        self.assertEqual(r.status_code, 200)
        return {row["name"]: row for row in r.json()["data"]}

    def test_counts_open_sessions_per_environment(self):
        self.check_in(self.students[0], self.lab)
        self.check_in(self.students[1], self.lab)
        self.check_in(self.students[2], self.room)
        self.check_out(self.students[1], self.lab)

        data = self.occupation()
        self.assertEqual(data["Lab A"]["currentOccupancy"], 1)
        self.assertEqual(data["Lab A"]["occupationRate"], 25.0)
        self.assertEqual(data["Room B"]["currentOccupancy"], 1)
        self.assertEqual(data["Room B"]["occupationRate"], 33.33)
        self.assertEqual(data["Room B"]["type"], "laboratory")

    def test_empty_environments_report_zero(self):
        data = self.occupation()
        self.assertEqual(set(data), {"Lab A", "Room B"})
        self.assertTrue(all(row["currentOccupancy"] == 0 for row in data.values()))

    def test_zero_capacity_environment_has_zero_rate(self):
        self.make_environment("Broken Room", capacity=0)
        data = self.occupation()
        self.assertEqual(data["Broken Room"]["occupationRate"], 0)

    def test_deleted_environments_are_not_reported(self):
        self.client.delete(f"{API}/environments/{self.room.id}", headers=self.admin_headers)
        self.assertEqual(set(self.occupation()), {"Lab A"})

    def test_students_can_read_dashboard(self):
        self.check_in(self.students[0], self.lab)
        data = self.occupation(headers=self.auth(self.students[0]))
        self.assertEqual(data["Lab A"]["currentOccupancy"], 1)

    def test_requires_authentication(self):
        r = self.client.get(f"{API}/dashboard/occupation")
        self.assertEqual(r.status_code, 401)

    def test_summary_totals(self):
        self.check_in(self.students[0], self.lab)
        self.check_in(self.students[1], self.room)
        r = self.client.get(f"{API}/dashboard/summary", headers=self.admin_headers)
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json()["data"], {
            "environmentCount": 2,
            "totalOccupancy": 2,
            "totalCapacity": 7,
            "overallRate": 28.57,
        })
