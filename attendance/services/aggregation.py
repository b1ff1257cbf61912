"""
Attendance report aggregation.

aggregate() is a pure function over plain row dicts so it can be tested
without a database. Merge rule: stats for the same key are summed field-wise.
"""
from dataclasses import dataclass
from datetime import timedelta

from django.core.exceptions import ValidationError
from django.utils import timezone

from attendance.models import AttendanceRecord
from core.utils import filter_by_academy

PERIOD_DAYS = {
    'week': 7,
    'month': 30,
    'quarter': 90,
    'year': 365,
}
REPORT_TYPES = ('student', 'class', 'summary')


@dataclass(frozen=True)
class AttendanceStats:
    total: int = 0
    present: int = 0
    late: int = 0
    absent: int = 0

    @classmethod
    def for_status(cls, status):
        return cls(
            total=1,
            present=int(status == AttendanceRecord.STATUS_PRESENT),
            late=int(status == AttendanceRecord.STATUS_LATE),
            absent=int(status == AttendanceRecord.STATUS_ABSENT),
        )

    def __add__(self, other):
        return AttendanceStats(
            self.total + other.total,
            self.present + other.present,
            self.late + other.late,
            self.absent + other.absent,
        )

    @property
    def attendance_rate(self):
        """Present or late, as a percentage of all records; 0 when there are none."""
        if not self.total:
            return 0.0
        return round((self.present + self.late) / self.total * 100, 2)

    def as_dict(self):
        return {
            'totalSessions': self.total,
            'present': self.present,
            'late': self.late,
            'absent': self.absent,
            'attendanceRate': self.attendance_rate,
        }


def aggregate(rows, key):
    """
    rows: iterable of mappings with at least 'status'.
    key: callable row -> hashable, or the name of a row field.
    Returns {key: AttendanceStats} in first-seen key order.
    """
    key_of = key if callable(key) else (lambda row: row[key])
    result = {}
    for row in rows:
        k = key_of(row)
        result[k] = result.get(k, AttendanceStats()) + AttendanceStats.for_status(row['status'])
    return result


def period_start(period, now=None):
    if period not in PERIOD_DAYS:
        raise ValidationError(f'Invalid period {period!r}; expected one of {", ".join(PERIOD_DAYS)}')
    now = now or timezone.now()
    return timezone.localdate(now) - timedelta(days=PERIOD_DAYS[period])


def attendance_rows(user, period='month', class_id=None, now=None):
    """
    Flat rows for records in sessions dated from the period start up to today.
    Ad-hoc records are included and keyed by their direct student.
    """
    start = period_start(period, now)
    qs = AttendanceRecord.objects.filter(
        session__date__gte=start,
        session__date__lte=timezone.localdate(now or timezone.now()),
    )
    qs = filter_by_academy(qs, user, 'session__recurring_class__academy')
    if class_id is not None:
        qs = qs.filter(session__recurring_class_id=class_id)
    return list(qs.values(
        'status',
        'student_id',
        'student__name',
        'session_id',
        'session__date',
        'session__recurring_class_id',
        'session__recurring_class__name',
        'enrollment_id',
    ).order_by('session__date', 'student__name'))


def student_report(rows):
    names = {r['student_id']: r['student__name'] for r in rows}
    stats = aggregate(rows, 'student_id')
    report = [
        {'studentId': sid, 'studentName': names[sid], **s.as_dict()}
        for sid, s in stats.items()
    ]
    return sorted(report, key=lambda r: r['studentName'])


def class_report(rows):
    names = {r['session__recurring_class_id']: r['session__recurring_class__name'] for r in rows}
    stats = aggregate(rows, 'session__recurring_class_id')
    report = []
    for cid, s in stats.items():
        class_rows = [r for r in rows if r['session__recurring_class_id'] == cid]
        report.append({
            'classId': cid,
            'className': names[cid],
            'sessionsHeld': len({r['session_id'] for r in class_rows}),
            'students': len({r['student_id'] for r in class_rows}),
            **s.as_dict(),
        })
    return sorted(report, key=lambda r: r['className'])


def summary_report(rows):
    overall = aggregate(rows, lambda row: 'all').get('all', AttendanceStats())
    return {
        'totalRecords': overall.total,
        'totalSessions': len({r['session_id'] for r in rows}),
        'totalStudents': len({r['student_id'] for r in rows}),
        'present': overall.present,
        'late': overall.late,
        'absent': overall.absent,
        'attendanceRate': overall.attendance_rate,
    }


def build_attendance_report(user, report_type='student', period='month', class_id=None, now=None):
    if report_type not in REPORT_TYPES:
        raise ValidationError(f'Invalid report type {report_type!r}; expected one of {", ".join(REPORT_TYPES)}')
    rows = attendance_rows(user, period, class_id, now)
    if report_type == 'student':
        data = student_report(rows)
    elif report_type == 'class':
        data = class_report(rows)
    else:
        data = summary_report(rows)
    return {
        'type': report_type,
        'period': period,
        'startDate': period_start(period, now).isoformat(),
        'classId': class_id,
        'data': data,
    }
