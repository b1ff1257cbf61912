"""
Coaches and how they are paid.
"""
from django.core.validators import MinValueValidator
from django.db import models


class Coach(models.Model):
    PAYMENT_HOURLY = 'HOURLY'
    PAYMENT_PER_SESSION = 'PER_SESSION'
    PAYMENT_TYPE_CHOICES = [
        (PAYMENT_HOURLY, 'Hourly'),
        (PAYMENT_PER_SESSION, 'Per session'),
    ]

    academy = models.ForeignKey(
        'core.Academy',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='coaches',
    )
    name = models.CharField(max_length=255, db_index=True)
    payment_type = models.CharField(max_length=20, choices=PAYMENT_TYPE_CHOICES, default=PAYMENT_HOURLY)
    hourly_rate = models.DecimalField(
        max_digits=10, decimal_places=2, default=0,
        validators=[MinValueValidator(0)],
    )
    session_rate = models.DecimalField(
        max_digits=10, decimal_places=2, default=0,
        validators=[MinValueValidator(0)],
    )
    payout_method = models.CharField(max_length=50, help_text="e.g. BANK_TRANSFER, CASH")
    bank_details = models.TextField(blank=True, null=True)
    contact_number = models.CharField(max_length=30)
    email = models.EmailField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'coaches'
        verbose_name = 'Coach'
        verbose_name_plural = 'Coaches'
        ordering = ['name']

    def __str__(self):
        return self.name

    @property
    def rate(self):
        """The rate that applies for the coach's payment type."""
        return self.hourly_rate if self.payment_type == self.PAYMENT_HOURLY else self.session_rate
