"""
==============================================================================
CORE APP - CHECKOUT
==============================================================================
Manual UPI checkout.

There is no payment gateway: the buyer transfers the cart total to the
platform UPI ID and then types the UTR (Unique Transaction Reference) shown
by their payment app.

Checkout Steps (kept in the session):

    payment --mark_paid()--> utr --submit(utr)--> order created
       ^                      |
       +-------back()---------+

    - submit() refuses UTRs shorter than UTR_MIN_LENGTH without touching
      the cart; anything else is handed verbatim to place_order()
    - place_order() is the authority: it re-validates the UTR, rejects an
      empty cart or a UTR that was already used, and creates the order
    - After a successful order the cart is empty and the step is reset

Author: LusionBeatz Development Team
==============================================================================
"""

import logging

from django.conf import settings
from django.core.mail import send_mail
from django.db import IntegrityError, transaction
from django.urls import reverse

from .forms import UTRForm, split_earnings
from .http import first_form_error
from .models import Cart, Order, OrderItem

logger = logging.getLogger('lusionbeatz.checkout')


class CheckoutError(Exception):
    """Checkout could not go ahead; nothing was changed."""

    def __init__(self, message, title='Error'):
        super().__init__(message)
        self.message = message
        self.title = title


# =============================================================================
# ORDER CREATION
# =============================================================================

def place_order(user, utr):
    """
    Turn the user's cart into an order paid with ``utr``.

    All database changes happen in one transaction, so on any error the
    cart is exactly as it was.

    Args:
        user: Buyer
        utr (str): Transaction reference as entered by the buyer

    Returns:
        Order: The created order

    Raises:
        CheckoutError: invalid UTR, empty cart, UTR already used,
            or a cart sample that is no longer on sale
    """
    form = UTRForm({'utr': utr})
    if not form.is_valid():
        raise CheckoutError(first_form_error(form), title='Invalid UTR')
    utr = form.cleaned_data['utr']

    try:
        with transaction.atomic():
            cart = Cart.objects.select_for_update().filter(user=user).first()
            if cart is None or cart.is_empty():
                raise CheckoutError('Your cart is empty')

            if Order.objects.filter(utr=utr).exists():
                raise CheckoutError(
                    'This UTR has already been used for another order',
                    title='Invalid UTR',
                )

            samples = cart.samples()
            for sample in samples:
                if not sample.is_approved():
                    raise CheckoutError(
                        f'"{sample.title}" is no longer available. '
                        'Please remove it from your cart.'
                    )

            order = Order.objects.create(buyer=user, utr=utr)

            amount = creator_total = platform_total = 0
            for sample in samples:
                creator_share, platform_share = split_earnings(sample.price)
                OrderItem.objects.create(
                    order=order,
                    sample=sample,
                    creator=sample.creator,
                    sample_title=sample.title,
                    price=sample.price,
                    creator_earning=creator_share,
                    platform_earning=platform_share,
                )
                amount += sample.price
                creator_total += creator_share
                platform_total += platform_share

            order.amount = amount
            order.creator_earning = creator_total
            order.platform_earning = platform_total
            order.save(update_fields=['amount', 'creator_earning', 'platform_earning'])

            cart.clear()
    except IntegrityError:
        # Two submissions raced on the same UTR
        if Order.objects.filter(utr=utr).exists():
            raise CheckoutError('This UTR has already been used for another order', title='Invalid UTR')
        raise

    logger.info(
        'Order %s placed by user %s: %d sample(s), Rs.%s, UTR %s',
        order.order_number, user.pk, len(samples), order.amount, order.utr,
    )
    send_order_confirmation(order)
    return order


def send_order_confirmation(order):
    """Mail the buyer a receipt with one download link per sample."""
    lines = []
    for item in order.items.all():
        if item.sample_id is None:
            continue
        path = reverse('core_api:download', kwargs={'pk': order.pk, 'sample_id': item.sample_id})
        lines.append(f'  - {item.sample_title}: {settings.SITE_URL}{path}')

    send_mail(
        subject=f'Your LusionBeatz order {order.order_number}',
        message=(
            f'Hi {order.buyer.name or order.buyer.email},\n\n'
            f'Thank you for your purchase! We received UTR {order.utr} '
            f'for Rs.{order.amount:.2f}.\n\n'
            'Download your samples:\n' + '\n'.join(lines) + '\n\n'
            'You can also find them under Purchases in your dashboard.'
        ),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[order.buyer.email],
    )


# =============================================================================
# STEP MACHINE
# =============================================================================

class CheckoutFlow:
    """
    The buyer's position in the checkout, stored in their session.

    Usage:
        flow = CheckoutFlow(request)
        flow.mark_paid()        # "I have paid"
        order = flow.submit(utr)
    """

    PAYMENT = 'payment'
    UTR = 'utr'
    STEPS = (PAYMENT, UTR)

    SESSION_KEY = 'checkout_step'

    def __init__(self, request):
        self.request = request
        self.session = request.session

    @property
    def step(self):
        step = self.session.get(self.SESSION_KEY, self.PAYMENT)
        return step if step in self.STEPS else self.PAYMENT

    def _set_step(self, step):
        self.session[self.SESSION_KEY] = step

    def mark_paid(self):
        """payment -> utr"""
        self._set_step(self.UTR)

    def back(self):
        """utr -> payment"""
        self._set_step(self.PAYMENT)

    def reset(self):
        self.session.pop(self.SESSION_KEY, None)

    def submit(self, utr):
        """
        Submit the UTR and create the order.

        A UTR shorter than UTR_MIN_LENGTH is refused here and the step stays
        on 'utr'. Otherwise the value goes to place_order() unchanged.
        """
        if self.step != self.UTR:
            raise CheckoutError('Please complete the UPI payment first')
        if not utr or len(utr) < settings.UTR_MIN_LENGTH:
            raise CheckoutError('Please enter a valid UTR number', title='Invalid UTR')

        order = place_order(self.request.user, utr)
        self.reset()
        return order
