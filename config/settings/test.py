"""
Test settings: in-memory SQLite, fast hashing, locmem mail.
"""
import os

os.environ.setdefault('DATABASE_URL', 'sqlite://:memory:')

from .base import *

DEBUG = False

DATABASES = {
    'default': env.db('TEST_DATABASE_URL', default='sqlite://:memory:'),
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'
SMS_BACKEND = 'notifications.backends.LocmemSMSBackend'

SESSION_GENERATION_SEED_ATTENDANCE = False
ATTENDANCE_NOTIFY_STATUSES = ['ABSENT']
TIME_ZONE = 'UTC'
