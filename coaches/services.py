"""
Weekly coach report: sessions taught, hours, and payout estimate.
"""
from decimal import Decimal, ROUND_HALF_UP
from datetime import timedelta

from classes.models import ClassSession
from core.utils import filter_by_academy
from .models import Coach

CENTS = Decimal('0.01')


def session_hours(session):
    """Duration in hours; an end before the start means the session crosses midnight."""
    start, end = session.start_time, session.end_time
    if end < start:
        end += timedelta(days=1)
    return Decimal((end - start).total_seconds()) / Decimal(3600)


def session_payment(coach, hours):
    if coach.payment_type == Coach.PAYMENT_HOURLY:
        return hours * coach.hourly_rate
    return coach.session_rate


def build_coach_reports(start, end, user=None, coach_id=None):
    """
    One entry per coach who taught at least one session dated in [start, end],
    ordered by first session. Money and hours are rounded to cents on output only.
    """
    sessions = ClassSession.objects.filter(
        date__gte=start.date(), date__lte=end.date(),
    ).select_related('recurring_class__coach').order_by('date', 'start_time')
    if user is not None:
        sessions = filter_by_academy(sessions, user, 'recurring_class__academy')
    if coach_id is not None:
        sessions = sessions.filter(recurring_class__coach_id=coach_id)

    reports = {}
    for session in sessions:
        coach = session.recurring_class.coach
        hours = session_hours(session)
        payment = session_payment(coach, hours)
        report = reports.get(coach.id)
        if report is None:
            report = reports[coach.id] = {
                'coachId': coach.id,
                'coachName': coach.name,
                'paymentType': coach.payment_type,
                'rate': coach.rate,
                'totalSessions': 0,
                'totalHours': Decimal(0),
                'paymentAmount': Decimal(0),
                'sessions': [],
            }
        report['totalSessions'] += 1
        report['totalHours'] += hours
        report['paymentAmount'] += payment
        report['sessions'].append({
            'id': session.id,
            'date': session.date.isoformat(),
            'startTime': session.start_time.isoformat(),
            'endTime': session.end_time.isoformat(),
            'className': session.recurring_class.name,
            'duration': hours.quantize(CENTS, ROUND_HALF_UP),
            'payment': Decimal(payment).quantize(CENTS, ROUND_HALF_UP),
        })

    for report in reports.values():
        report['totalHours'] = report['totalHours'].quantize(CENTS, ROUND_HALF_UP)
        report['paymentAmount'] = report['paymentAmount'].quantize(CENTS, ROUND_HALF_UP)
    return list(reports.values())
