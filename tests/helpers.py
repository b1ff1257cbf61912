"""
Shared fixtures for API and service tests.
"""
from datetime import date, time

from rest_framework_simplejwt.tokens import AccessToken

from accounts.models import User
from classes.models import ClassEnrollment, RecurringClass
from coaches.models import Coach
from core.models import Academy
from students.models import Student


def auth_header(user):
    token = str(AccessToken.for_user(user))
    return {"HTTP_AUTHORIZATION": f"Bearer {token}"}


def make_academy(slug="test-academy"):
    return Academy.objects.create(name=slug.replace("-", " ").title(), slug=slug)


def make_user(academy, email="admin@academy.test", role=User.ROLE_ACADEMY_ADMIN):
    return User.objects.create_user(
        email=email,
        password="pass123",
        full_name=email.split("@")[0].title(),
        role=role,
        academy=academy,
    )


def make_coach(academy, name="Coach Lee", **kwargs):
    kwargs.setdefault("payment_type", Coach.PAYMENT_HOURLY)
    kwargs.setdefault("hourly_rate", "40.00")
    return Coach.objects.create(
        academy=academy,
        name=name,
        payout_method="BANK_TRANSFER",
        contact_number="+15550000000",
        **kwargs,
    )


def make_student(academy, name="Ana", guardian_email="guardian@family.test", contact_number="+15551112222"):
    return Student.objects.create(
        academy=academy,
        name=name,
        date_of_birth=date(2014, 5, 1),
        guardian_name=f"Guardian of {name}",
        guardian_email=guardian_email,
        contact_number=contact_number,
    )


def make_class(academy, coach, name="Juniors", day=1, start=time(16, 0), end=time(17, 0)):
    return RecurringClass.objects.create(
        academy=academy,
        name=name,
        coach=coach,
        day_of_week=day,
        start_time=start,
        end_time=end,
    )


def enroll(recurring_class, *students):
    return [ClassEnrollment.objects.create(recurring_class=recurring_class, student=s) for s in students]
