"""
Auth, role-based access and academy scoping across the CRUD endpoints.
- coach token may read but not write students/coaches/classes
- users only see rows of their own academy
- enrollment is unique per (student, class)
"""

from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from classes.models import ClassEnrollment
from notifications.models import NotificationLog
from students.models import Student

from .helpers import auth_header, make_academy, make_class, make_coach, make_student, make_user


class AuthTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.academy = make_academy()
        self.admin = make_user(self.academy)

    def test_login_and_me(self):
        resp = self.client.post("/api/auth/login", {"email": "admin@academy.test", "password": "pass123"},
                                format="json")
        self.assertEqual(resp.status_code, 200, resp.data)
        self.assertIn("accessToken", resp.data)
        self.assertEqual(resp.data["user"]["academyId"], self.academy.id)

        me = self.client.get("/api/auth/me", HTTP_AUTHORIZATION=f"Bearer {resp.data['accessToken']}")
        self.assertEqual(me.data["email"], "admin@academy.test")
        self.assertEqual(me.data["role"], "ACADEMY_ADMIN")

    def test_bad_password(self):
        resp = self.client.post("/api/auth/login", {"email": "admin@academy.test", "password": "nope"},
                                format="json")
        self.assertEqual(resp.status_code, 401)

    def test_inactive_user(self):
        self.admin.is_active = False
        self.admin.save()
        resp = self.client.post("/api/auth/login", {"email": "admin@academy.test", "password": "pass123"},
                                format="json")
        self.assertEqual(resp.status_code, 401)

    def test_anonymous_rejected(self):
        resp = self.client.get("/api/students/")
        self.assertEqual(resp.status_code, 401)

    def test_health(self):
        resp = self.client.get("/api/health/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["db"], "ok")


class RBACTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.academy = make_academy()
        self.admin = make_user(self.academy)
        self.coach_user = make_user(self.academy, email="coach@academy.test", role="COACH")
        self.coach = make_coach(self.academy)
        self.student = make_student(self.academy)

    def test_coach_can_read_students(self):
        resp = self.client.get("/api/students/", **auth_header(self.coach_user))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.data), 1)

    def test_coach_cannot_write(self):
        resp = self.client.post(
            "/api/students/",
            {"name": "New", "dateOfBirth": "2015-01-01", "guardianName": "G", "contactNumber": "1"},
            format="json",
            **auth_header(self.coach_user),
        )
        self.assertEqual(resp.status_code, 403)
        resp = self.client.delete(f"/api/coaches/{self.coach.id}", **auth_header(self.coach_user))
        self.assertEqual(resp.status_code, 403)

    def test_other_academy_is_isolated(self):
        other_admin = make_user(make_academy("other-academy"), email="admin@other.test")
        resp = self.client.get("/api/students/", **auth_header(other_admin))
        self.assertEqual(resp.data, [])
        resp = self.client.get(f"/api/students/{self.student.id}", **auth_header(other_admin))
        self.assertEqual(resp.status_code, 403)

    def test_system_admin_sees_everything(self):
        root = make_user(None, email="root@platform.test", role="SYSTEM_ADMIN")
        resp = self.client.get("/api/students/", **auth_header(root))
        self.assertEqual(len(resp.data), 1)


class StudentAPITests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.academy = make_academy()
        self.admin = make_user(self.academy)

    def test_create_search_update_delete(self):
        resp = self.client.post(
            "/api/students/",
            {
                "name": "Lina Park",
                "dateOfBirth": "2013-07-20",
                "guardianName": "Mina Park",
                "guardianEmail": "mina@family.test",
                "contactNumber": "+15557654321",
            },
            format="json",
            **auth_header(self.admin),
        )
        self.assertEqual(resp.status_code, 201, resp.data)
        student_id = resp.data["id"]
        self.assertEqual(resp.data["academyId"], self.academy.id)
        self.assertEqual(resp.data["registrationDate"], timezone.localdate().isoformat())

        make_student(self.academy, name="Other")
        resp = self.client.get("/api/students/?search=mina", **auth_header(self.admin))
        self.assertEqual([s["id"] for s in resp.data], [student_id])
        resp = self.client.get("/api/students/?search=7654", **auth_header(self.admin))
        self.assertEqual([s["id"] for s in resp.data], [student_id])

        resp = self.client.patch(f"/api/students/{student_id}", {"medicalNotes": "Asthma"}, format="json",
                                 **auth_header(self.admin))
        self.assertEqual(resp.data["medicalNotes"], "Asthma")

        resp = self.client.delete(f"/api/students/{student_id}", **auth_header(self.admin))
        self.assertEqual(resp.status_code, 204)
        self.assertFalse(Student.objects.filter(id=student_id).exists())

    def test_missing_fields(self):
        resp = self.client.post("/api/students/", {"name": "X"}, format="json", **auth_header(self.admin))
        self.assertEqual(resp.status_code, 400)


class CoachAPITests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.academy = make_academy()
        self.admin = make_user(self.academy)

    def test_per_session_coach_needs_rate(self):
        payload = {"name": "Sam", "paymentType": "PER_SESSION", "payoutMethod": "CASH", "contactNumber": "1"}
        resp = self.client.post("/api/coaches/", payload, format="json", **auth_header(self.admin))
        self.assertEqual(resp.status_code, 400)
        resp = self.client.post("/api/coaches/", {**payload, "sessionRate": "30.00"}, format="json",
                                **auth_header(self.admin))
        self.assertEqual(resp.status_code, 201, resp.data)

    def test_cannot_delete_coach_with_classes(self):
        coach = make_coach(self.academy)
        make_class(self.academy, coach)
        resp = self.client.delete(f"/api/coaches/{coach.id}", **auth_header(self.admin))
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.data["code"], "coach_in_use")


class EnrollmentAPITests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.academy = make_academy()
        self.admin = make_user(self.academy)
        self.recurring_class = make_class(self.academy, make_coach(self.academy))
        self.student = make_student(self.academy)
        self.url = f"/api/classes/{self.recurring_class.id}/students"

    def test_enroll_list_and_remove(self):
        resp = self.client.post(self.url, {"studentId": self.student.id}, format="json", **auth_header(self.admin))
        self.assertEqual(resp.status_code, 201, resp.data)
        resp = self.client.post(self.url, {"studentId": self.student.id}, format="json", **auth_header(self.admin))
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(ClassEnrollment.objects.count(), 1)

        resp = self.client.get(f"/api/classes/{self.recurring_class.id}", **auth_header(self.admin))
        self.assertEqual(resp.data["studentCount"], 1)
        self.assertEqual(resp.data["students"][0]["name"], self.student.name)

        resp = self.client.delete(f"{self.url}/{self.student.id}", **auth_header(self.admin))
        self.assertEqual(resp.status_code, 204)
        resp = self.client.delete(f"{self.url}/{self.student.id}", **auth_header(self.admin))
        self.assertEqual(resp.status_code, 404)

    def test_cannot_enroll_student_of_other_academy(self):
        foreign = make_student(make_academy("other-academy"), name="Foreign")
        resp = self.client.post(self.url, {"studentId": foreign.id}, format="json", **auth_header(self.admin))
        self.assertEqual(resp.status_code, 403)

    def test_list_classes_filters(self):
        make_class(self.academy, make_coach(self.academy, name="Coach Two"), name="Sunday", day=0)
        resp = self.client.get("/api/classes/?dayOfWeek=0", **auth_header(self.admin))
        self.assertEqual([c["name"] for c in resp.data], ["Sunday"])


class NotificationLogAPITests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.academy = make_academy()
        self.admin = make_user(self.academy)

    def test_lists_failed_notifications(self):
        NotificationLog.objects.create(channel="EMAIL", recipient="", sent=False, error="No email recipient on file")
        resp = self.client.get("/api/notifications/?sent=false", **auth_header(self.admin))
        self.assertEqual(resp.status_code, 200)
        # logs without an attendance record are not tied to any academy
        self.assertEqual(resp.data["notifications"], [])

    def test_system_admin_sees_unscoped_logs(self):
        NotificationLog.objects.create(channel="SMS", recipient="+1555", sent=True, message_id="locmem-1")
        root = make_user(None, email="root@platform.test", role="SYSTEM_ADMIN")
        resp = self.client.get("/api/notifications/?channel=sms", **auth_header(root))
        self.assertEqual(len(resp.data["notifications"]), 1)
        self.assertEqual(resp.data["failedCount"], 0)
