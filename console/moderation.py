"""
==============================================================================
CONSOLE APP - MODERATION ACTIONS
==============================================================================
The decisions an admin can take, shared by the JSON API and the console page.

    - approve_creator / reject_creator
    - approve_sample / reject_sample
    - delete_user / delete_sample
    - platform_stats: numbers shown at the top of the console

Every action is logged with the acting admin.

Author: LusionBeatz Development Team
==============================================================================
"""

import logging
from decimal import Decimal

from django.db.models import Sum

from accounts.models import CustomUser
from core.http import parse_id
from core.models import Order, Sample

logger = logging.getLogger('lusionbeatz.console')


class ModerationError(Exception):
    def __init__(self, message, status=400):
        super().__init__(message)
        self.message = message
        self.status = status


def _get_user(user_id):
    try:
        user = CustomUser.objects.filter(pk=parse_id(user_id)).first()
    except ValueError:
        user = None
    if user is None:
        raise ModerationError('User not found', status=404)
    return user


def _get_sample(sample_id):
    try:
        sample = Sample.objects.filter(pk=parse_id(sample_id)).first()
    except ValueError:
        sample = None
    if sample is None:
        raise ModerationError('Sample not found', status=404)
    return sample


def approve_creator(admin, user_id):
    """Allow a verified user to upload samples."""
    user = _get_user(user_id)
    if not user.is_verified:
        raise ModerationError('User has not verified their email yet')
    user.approved_creator = True
    user.save(update_fields=['approved_creator', 'updated_at'])
    logger.info('Admin %s approved creator %s', admin.pk, user.pk)
    return user


def reject_creator(admin, user_id):
    """Withdraw (or refuse) creator status. Existing samples stay as they are."""
    user = _get_user(user_id)
    user.approved_creator = False
    user.save(update_fields=['approved_creator', 'updated_at'])
    logger.info('Admin %s rejected creator %s', admin.pk, user.pk)
    return user


def approve_sample(admin, sample_id):
    sample = _get_sample(sample_id)
    sample.set_status('approved')
    logger.info('Admin %s approved sample %s', admin.pk, sample.pk)
    return sample


def reject_sample(admin, sample_id):
    """Rejected samples disappear from the catalog and from every cart."""
    sample = _get_sample(sample_id)
    sample.set_status('rejected')
    sample.cart_items.all().delete()
    logger.info('Admin %s rejected sample %s', admin.pk, sample.pk)
    return sample


def delete_user(admin, user_id):
    """
    Delete an account. Admins cannot delete themselves.

    Orders placed by the user are kept with an empty buyer, so revenue and
    creator earnings stay in the totals.
    """
    user = _get_user(user_id)
    if user.pk == admin.pk:
        raise ModerationError('You cannot delete your own account')
    email = user.email
    user.delete()
    logger.warning('Admin %s deleted user %s (%s)', admin.pk, user_id, email)


def delete_sample(admin, sample_id):
    """Delete a sample. Past orders keep their title and price snapshot."""
    sample = _get_sample(sample_id)
    sample.delete()
    logger.warning('Admin %s deleted sample %s', admin.pk, sample_id)


def pending_creators():
    """Verified users waiting for creator approval."""
    return CustomUser.objects.filter(
        is_verified=True, approved_creator=False, role='user'
    ).order_by('created_at')


def pending_samples():
    return Sample.objects.filter(status='pending').select_related('creator').order_by('created_at')


def platform_stats():
    """
    Summary numbers for the console header.

    Returns:
        dict: user/sample/order counts and earnings totals (Decimal)
    """
    totals = Order.objects.aggregate(
        revenue=Sum('amount'),
        platform=Sum('platform_earning'),
        creators=Sum('creator_earning'),
    )
    return {
        'total_users': CustomUser.objects.count(),
        'pending_creators': pending_creators().count(),
        'pending_samples': pending_samples().count(),
        'approved_samples': Sample.objects.filter(status='approved').count(),
        'total_orders': Order.objects.count(),
        'total_revenue': totals['revenue'] or Decimal('0.00'),
        'platform_earnings': totals['platform'] or Decimal('0.00'),
        'creator_earnings': totals['creators'] or Decimal('0.00'),
    }
