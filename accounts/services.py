"""
==============================================================================
ACCOUNTS APP - SERVICES
==============================================================================
Email verification and user serialization.

OTP Flow:
    1. issue_otp(user) invalidates older codes, stores a new one and mails it
    2. verify_otp(email, code) checks the latest code and marks the user verified

Author: LusionBeatz Development Team
==============================================================================
"""

import logging

from django.conf import settings
from django.core.mail import send_mail
from django.db import transaction

from .models import CustomUser, EmailOTP

logger = logging.getLogger('lusionbeatz.accounts')


class VerificationError(Exception):
    """Raised when an email cannot be verified (or re-verified)."""


def issue_otp(user):
    """
    Create and mail a fresh verification code.

    Args:
        user: CustomUser that has not verified their email yet

    Returns:
        EmailOTP: The stored code
    """
    with transaction.atomic():
        user.email_otps.filter(is_used=False).update(is_used=True)
        otp = EmailOTP.objects.create(user=user)

    send_mail(
        subject='Your LusionBeatz verification code',
        message=(
            f'Hi {user.name or user.email},\n\n'
            f'Your verification code is {otp.code}. '
            f'It expires in {settings.OTP_EXPIRY_MINUTES} minutes.\n\n'
            'If you did not sign up for LusionBeatz, ignore this email.'
        ),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[user.email],
    )
    logger.info('Verification code sent to user %s', user.pk)
    return otp


def resend_otp(email):
    """Issue a new code for an unverified account."""
    user = CustomUser.objects.filter(email__iexact=email).first()
    if user is None:
        raise VerificationError('No account found for this email')
    if user.is_verified:
        raise VerificationError('Email is already verified. Please log in.')
    return issue_otp(user)


def verify_otp(email, code):
    """
    Verify a user's email with the code they received.

    Only the most recent unused code is accepted.

    Raises:
        VerificationError: unknown email, wrong, used or expired code
    """
    user = CustomUser.objects.filter(email__iexact=email).first()
    if user is None:
        raise VerificationError('No account found for this email')
    if user.is_verified:
        raise VerificationError('Email is already verified. Please log in.')

    otp = user.email_otps.filter(is_used=False).order_by('-created_at').first()
    if otp is None or not otp.matches(code):
        logger.warning('Failed OTP verification for user %s', user.pk)
        raise VerificationError('Invalid or expired OTP')

    with transaction.atomic():
        otp.is_used = True
        otp.save(update_fields=['is_used'])
        user.is_verified = True
        user.save(update_fields=['is_verified', 'updated_at'])

    logger.info('User %s verified their email', user.pk)
    return user


def serialize_user(user):
    """
    Public representation of a user (``/api/auth/me``, admin lists).

    Bank details are only meaningful for creators but are always returned
    so the dashboard can prefill its form.
    """
    return {
        'id': user.pk,
        'name': user.name,
        'email': user.email,
        'role': user.role,
        'verified': user.is_verified,
        'approvedCreator': user.approved_creator,
        'bankDetails': user.profile.as_bank_details() if hasattr(user, 'profile') else None,
        'createdAt': user.created_at.isoformat(),
    }
