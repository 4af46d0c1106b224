"""
==============================================================================
CORE APP - CART OPERATIONS
==============================================================================
Adding and removing samples from a user's cart.

Rules:
    - Only approved samples can be added
    - A sample already in the cart is not added twice
    - A sample the user already bought is refused
    - Creators cannot buy their own samples
    - Removing a sample that is not in the cart does nothing

Author: LusionBeatz Development Team
==============================================================================
"""

import logging

from .models import Cart, CartItem, OrderItem, Sample

logger = logging.getLogger('lusionbeatz.cart')


class CartError(Exception):
    """A cart change that cannot be applied; the cart is left as it was."""

    def __init__(self, message, status=400):
        super().__init__(message)
        self.message = message
        self.status = status


def get_cart(user, create=False):
    """The user's cart, or None when they never had one and ``create`` is False."""
    if create:
        cart, _ = Cart.objects.get_or_create(user=user)
        return cart
    return Cart.objects.filter(user=user).first()


def has_purchased(user, sample):
    return OrderItem.objects.filter(order__buyer=user, sample=sample).exists()


def add_to_cart(user, sample_id):
    """
    Add an approved sample to the user's cart.

    Returns:
        tuple: (cart, added) where ``added`` is False if it was already there

    Raises:
        CartError: unknown/unapproved sample, own sample, already purchased
    """
    sample = Sample.objects.filter(pk=sample_id, status='approved').first()
    if sample is None:
        raise CartError('Sample not found', status=404)
    if sample.creator_id == user.pk:
        raise CartError('You cannot buy your own sample')
    if has_purchased(user, sample):
        raise CartError('You already own this sample')

    cart = get_cart(user, create=True)
    _, added = CartItem.objects.get_or_create(cart=cart, sample=sample)
    if added:
        logger.debug('User %s added sample %s to cart', user.pk, sample.pk)
    return cart, added


def remove_from_cart(user, sample_id):
    """
    Remove a sample from the cart.

    Returns:
        bool: True if something was removed
    """
    cart = get_cart(user)
    if cart is None:
        return False
    deleted, _ = cart.items.filter(sample_id=sample_id).delete()
    return deleted > 0
