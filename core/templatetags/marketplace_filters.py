"""
Custom template filters for the marketplace pages.
"""
from decimal import Decimal, InvalidOperation

from django import template

register = template.Library()


@register.filter
def inr(value):
    """
    Format an amount in rupees with two decimals.
    Example: Decimal('499') -> '₹499.00'
    """
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return "₹0.00"
    return f"₹{amount:,.2f}"


@register.filter
def display_name(user):
    """
    Name to greet a user with, falling back to the part of the email
    before the '@'.
    Example: 'asha.k@example.com' -> 'Asha K'
    """
    if not user:
        return ''
    if getattr(user, 'name', ''):
        return user.name
    local_part = (getattr(user, 'email', '') or '').split('@')[0]
    return local_part.replace('.', ' ').replace('_', ' ').title()


@register.filter
def mask_account(value):
    """
    Hide all but the last four digits of a bank account number.
    Example: '123456789012' -> '••••••••9012'
    """
    if not value:
        return ''
    value = str(value)
    return '•' * max(len(value) - 4, 0) + value[-4:]
