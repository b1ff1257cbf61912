"""
Management command to seed development data.
Usage: python manage.py seed_dev
"""
import os
from datetime import date, time

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

User = get_user_model()


class Command(BaseCommand):
    help = 'Seed development data: 1 academy, 1 admin, 2 coaches, 1 court, 4 students, 2 classes, upcoming sessions'

    def handle(self, *args, **options):
        self.stdout.write(self.style.SUCCESS('Starting seed data...'))

        with transaction.atomic():
            from core.models import Academy
            academy, _ = Academy.objects.get_or_create(
                slug='demo-academy',
                defaults={'name': 'Demo Badminton Academy'},
            )
            self.stdout.write(self.style.SUCCESS(f'Academy: {academy.name}'))

            admin_email = os.getenv('SEED_ADMIN_EMAIL', 'admin@academy.local')
            admin_password = os.getenv('SEED_ADMIN_PASSWORD', 'admin123')
            admin, created = User.objects.get_or_create(
                email=admin_email,
                defaults={
                    'full_name': 'Academy Admin',
                    'role': User.ROLE_ACADEMY_ADMIN,
                    'academy': academy,
                },
            )
            admin.set_password(admin_password)
            admin.save()
            if created:
                self.stdout.write(self.style.SUCCESS(f'Created admin: {admin_email}'))
            else:
                self.stdout.write(self.style.WARNING(f'Admin exists, password updated: {admin_email}'))

            from coaches.models import Coach
            hourly, _ = Coach.objects.get_or_create(
                academy=academy, name='Lee Chong',
                defaults={'payment_type': Coach.PAYMENT_HOURLY, 'hourly_rate': 40,
                          'payout_method': 'BANK_TRANSFER', 'contact_number': '+15550001001'},
            )
            flat, _ = Coach.objects.get_or_create(
                academy=academy, name='Maria Santos',
                defaults={'payment_type': Coach.PAYMENT_PER_SESSION, 'session_rate': 55,
                          'payout_method': 'CASH', 'contact_number': '+15550001002'},
            )

            from classes.models import ClassEnrollment, Court, RecurringClass
            court, _ = Court.objects.get_or_create(academy=academy, name='Court 1', defaults={'location': 'Main hall'})
            juniors, _ = RecurringClass.objects.get_or_create(
                academy=academy, name='Juniors',
                defaults={'coach': hourly, 'court': court, 'day_of_week': 1,
                          'start_time': time(16, 0), 'end_time': time(17, 0)},
            )
            seniors, _ = RecurringClass.objects.get_or_create(
                academy=academy, name='Seniors',
                defaults={'coach': flat, 'court': court, 'day_of_week': 3,
                          'start_time': time(18, 0), 'end_time': time(19, 30)},
            )

            from students.models import Student
            students_data = [
                ('Ana Lima', 'Rosa Lima', juniors),
                ('Ben Okafor', 'Grace Okafor', juniors),
                ('Cai Wen', 'Li Wen', seniors),
                ('Dara Noor', 'Sami Noor', seniors),
            ]
            for i, (name, guardian, recurring_class) in enumerate(students_data, start=1):
                student, _ = Student.objects.get_or_create(
                    academy=academy, name=name,
                    defaults={
                        'date_of_birth': date(2012, i, 10),
                        'guardian_name': guardian,
                        'guardian_email': f'guardian{i}@family.local',
                        'contact_number': f'+1555000200{i}',
                    },
                )
                ClassEnrollment.objects.get_or_create(student=student, recurring_class=recurring_class)
                self.stdout.write(self.style.SUCCESS(f'Student: {name} -> {recurring_class.name}'))

        from classes.services.session_generator import SessionMaterializer
        result = SessionMaterializer().generate_sessions(academy_id=academy.id, seed_attendance=True)
        self.stdout.write(self.style.SUCCESS(f'Generated {result.generated_count} sessions'))
        self.stdout.write(self.style.SUCCESS('Seed data complete.'))
