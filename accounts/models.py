"""
==============================================================================
ACCOUNTS APP - MODELS
==============================================================================
This module defines the custom User model, the creator Profile and the
email verification codes for LusionBeatz.

Key Models:
    - CustomUser: Django user with a role, email verification and creator approval
    - Profile: Payout (bank/UPI) details of a creator
    - EmailOTP: One-time codes mailed at signup to verify the email address

User Lifecycle:
    1. Signup creates an unverified user and mails a 6-digit OTP
    2. Entering the OTP marks the user as verified (can log in and buy)
    3. An admin approves the user as a creator (can upload samples)

Author: LusionBeatz Development Team
==============================================================================
"""

import secrets
from datetime import timedelta

from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils import timezone


class CustomUser(AbstractUser):
    """
    Custom User model extending Django's AbstractUser.

    Users log in with their email address. The ``username`` column is kept
    (Django admin relies on it) and mirrors the email.

    Attributes:
        name (str): Display name entered at signup
        role (str): 'user' for buyers/creators, 'admin' for moderators
        is_verified (bool): Email confirmed through an OTP
        approved_creator (bool): Admin allowed this user to upload samples
        created_at (datetime): When the account was created
        updated_at (datetime): When the account was last modified
    """

    ROLE_CHOICES = [
        ('user', 'User'),             # Buys samples, may become a creator
        ('admin', 'Administrator'),   # Moderates creators, samples, orders
    ]

    name = models.CharField(
        max_length=150,
        help_text="Full name shown on the dashboard"
    )

    email = models.EmailField(
        unique=True,
        help_text="Login address, verified with an OTP"
    )

    role = models.CharField(
        max_length=10,
        choices=ROLE_CHOICES,
        default='user',
        help_text="User's role determines access to the admin console"
    )

    is_verified = models.BooleanField(
        default=False,
        help_text="Set to True once the email OTP has been confirmed"
    )

    approved_creator = models.BooleanField(
        default=False,
        help_text="Set by an admin; approved creators can upload samples"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'User'
        verbose_name_plural = 'Users'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.email} ({self.get_role_display()})"

    def save(self, *args, **kwargs):
        if not self.username:
            self.username = self.email
        super().save(*args, **kwargs)

    def is_admin_user(self):
        """Check if user is an administrator."""
        return self.role == 'admin'

    def can_upload(self):
        """Verified, admin-approved creators (and admins) may upload samples."""
        return self.is_admin_user() or (self.is_verified and self.approved_creator)

    def is_pending_creator(self):
        """Verified users still waiting for creator approval."""
        return self.is_verified and not self.approved_creator and not self.is_admin_user()


class Profile(models.Model):
    """
    Payout details of a creator.

    Created automatically for every user. Creators fill it in from the
    dashboard so the platform can transfer their earnings.

    Attributes:
        user (OneToOne): Link to the CustomUser
        holder_name (str): Bank account holder name
        upi_id (str): UPI handle (e.g. name@okbank)
        account_number (str): Bank account number
        ifsc (str): IFSC code of the bank branch
        phone (str): Contact number for payouts
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='profile',
        help_text="The user this profile belongs to"
    )

    holder_name = models.CharField(
        max_length=150,
        blank=True,
        help_text="Name on the bank account"
    )

    upi_id = models.CharField(
        max_length=100,
        blank=True,
        help_text="UPI ID for payouts (e.g. creator@okaxis)"
    )

    account_number = models.CharField(
        max_length=30,
        blank=True,
        help_text="Bank account number"
    )

    ifsc = models.CharField(
        max_length=11,
        blank=True,
        help_text="IFSC code (11 characters)"
    )

    phone = models.CharField(
        max_length=15,
        blank=True,
        help_text="Contact phone number (e.g., +91-9876543210)"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Profile'
        verbose_name_plural = 'Profiles'
        ordering = ['-created_at']

    def __str__(self):
        return self.holder_name or self.user.email

    def has_payout_details(self):
        """A payout needs either a UPI ID or a full bank account."""
        return bool(self.upi_id or (self.account_number and self.ifsc))

    def as_bank_details(self):
        """Bank details in the shape the dashboard expects."""
        return {
            'holderName': self.holder_name,
            'upiId': self.upi_id,
            'accountNumber': self.account_number,
            'ifsc': self.ifsc,
            'phone': self.phone,
        }


def generate_otp_code():
    """Random numeric code of ``OTP_LENGTH`` digits (leading zeros allowed)."""
    length = settings.OTP_LENGTH
    return f"{secrets.randbelow(10 ** length):0{length}d}"


def default_otp_expiry():
    return timezone.now() + timedelta(minutes=settings.OTP_EXPIRY_MINUTES)


class EmailOTP(models.Model):
    """
    One-time code sent to a user's email address.

    A code is valid until ``expires_at`` and can be used once. Issuing a new
    code invalidates every older unused code of the same user.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='email_otps',
    )

    code = models.CharField(max_length=10, default=generate_otp_code)

    expires_at = models.DateTimeField(default=default_otp_expiry)

    is_used = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'Email OTP'
        verbose_name_plural = 'Email OTPs'
        ordering = ['-created_at']

    def __str__(self):
        state = "used" if self.is_used else "active"
        return f"OTP for {self.user.email} ({state})"

    @property
    def is_expired(self):
        return timezone.now() >= self.expires_at

    def matches(self, code):
        """True when the code is correct, unused and not expired."""
        return (
            not self.is_used
            and not self.is_expired
            and secrets.compare_digest(self.code, str(code).strip())
        )


# =============================================================================
# Django Signals for automatic Profile creation
# =============================================================================
from django.db.models.signals import post_save  # noqa: E402
from django.dispatch import receiver  # noqa: E402


@receiver(post_save, sender=CustomUser)
def create_user_profile(sender, instance, created, **kwargs):
    """Automatically create a Profile when a new CustomUser is created."""
    if created:
        Profile.objects.create(user=instance)
