"""
Class, court and session URLs
"""
from django.urls import path
from .views import classes, sessions

app_name = 'classes'

class_urlpatterns = [
    path('', classes.classes_view, name='list'),
    path('<int:pk>', classes.class_detail_view, name='detail'),
    path('<int:class_id>/students', classes.class_students_view, name='students'),
    path('<int:class_id>/students/<int:student_id>', classes.class_students_view, name='student-remove'),
]

court_urlpatterns = [
    path('', classes.courts_view, name='court-list'),
    path('<int:pk>', classes.court_detail_view, name='court-detail'),
]

session_urlpatterns = [
    path('', sessions.sessions_view, name='session-list'),
    path('generate', sessions.generate_sessions_view, name='session-generate'),
    path('generate-attendance', sessions.generate_attendance_view, name='session-generate-attendance'),
]

schedule_urlpatterns = [
    path('week', sessions.schedule_week_view, name='schedule-week'),
]
