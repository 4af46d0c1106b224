"""
==============================================================================
CORE APP - VIEWS
==============================================================================
Views for the catalog, cart, checkout and purchases.

JSON API (mounted under /api/):
    - Samples: list, detail, upload, my uploads
    - Cart: view, add, remove
    - Orders: create (UTR checkout), my purchases, download

Pages:
    - home, loops, oneshots: Catalog
    - cart_view / cart_add / cart_remove
    - checkout: The payment -> UTR step machine
    - sample_upload: Dashboard upload form target

The Checkout page implements the manual UPI workflow:
    1. Empty cart -> redirect to the catalog
    2. 'payment' step shows the UPI ID and the total
    3. "I have paid" moves to the 'utr' step
    4. A valid UTR creates the order and lands on Dashboard > Purchases

Author: LusionBeatz Development Team
==============================================================================
"""

import logging

from django.conf import settings
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.http import FileResponse, Http404, JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_GET, require_POST

from accounts.decorators import api_login_required
from .cart import CartError, add_to_cart, get_cart, remove_from_cart
from .checkout import CheckoutError, CheckoutFlow, place_order
from .forms import SampleUploadForm
from .http import (
    BadRequest, first_form_error, form_error_response, json_error, parse_json_body, require_id,
)
from .models import Order, Sample
from .serializers import serialize_cart, serialize_order, serialize_sample

logger = logging.getLogger('lusionbeatz.core')


def catalog_queryset(sample_type=None, genre=None):
    """Approved samples, newest first, optionally filtered."""
    samples = Sample.objects.filter(status='approved').select_related('creator')
    if sample_type:
        samples = samples.filter(sample_type=sample_type)
    if genre:
        samples = samples.filter(genre__iexact=genre)
    return samples.order_by('-created_at')


def safe_next(request, default):
    """The posted ``next`` path when it points back to this site."""
    next_url = request.POST.get('next')
    if next_url and url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
        return next_url
    return default


def create_sample(user, form):
    sample = form.save(commit=False)
    sample.creator = user
    sample.status = 'pending'
    sample.save()
    logger.info('User %s uploaded sample %s (%s)', user.pk, sample.pk, sample.title)
    return sample


# =============================================================================
# SAMPLE API
# =============================================================================

@require_GET
def api_sample_list(request):
    """
    Catalog listing.

    Query parameters: ``type`` (loop/oneshot), ``genre``. Only approved
    samples are ever listed, whatever ``status`` the client asks for.
    """
    sample_type = request.GET.get('type')
    if sample_type and sample_type not in dict(Sample.TYPE_CHOICES):
        return json_error('Unknown sample type.')

    samples = catalog_queryset(sample_type, request.GET.get('genre'))
    return JsonResponse([serialize_sample(sample) for sample in samples], safe=False)


@require_GET
def api_sample_detail(request, pk):
    """Approved samples are public; others only for their creator or an admin."""
    sample = Sample.objects.select_related('creator').filter(pk=pk).first()
    user = request.user
    is_owner = sample is not None and user.is_authenticated and (
        sample.creator_id == user.pk or user.role == 'admin'
    )
    if sample is None or (not sample.is_approved() and not is_owner):
        return json_error('Sample not found', status=404)
    return JsonResponse(serialize_sample(sample, include_status=is_owner))


@require_POST
@api_login_required
def api_sample_upload(request):
    """Multipart upload; the sample waits for admin approval."""
    if not request.user.can_upload():
        return json_error('Only approved creators can upload samples.', status=403)

    form = SampleUploadForm(request.POST, request.FILES)
    if not form.is_valid():
        return form_error_response(form)

    sample = create_sample(request.user, form)
    return JsonResponse(serialize_sample(sample, include_status=True), status=201)


@require_GET
@api_login_required
def api_my_uploads(request):
    uploads = Sample.objects.filter(creator=request.user).select_related('creator')
    return JsonResponse(
        [serialize_sample(sample, include_status=True) for sample in uploads.order_by('-created_at')],
        safe=False,
    )


# =============================================================================
# CART API
# =============================================================================

@require_GET
@api_login_required
def api_cart(request):
    return JsonResponse(serialize_cart(get_cart(request.user)))


@require_POST
@api_login_required
def api_cart_add(request):
    try:
        sample_id = require_id(parse_json_body(request), 'sampleId')
        cart, _ = add_to_cart(request.user, sample_id)
    except BadRequest as exc:
        return json_error(exc.message, exc.status)
    except CartError as exc:
        return json_error(exc.message, exc.status)
    return JsonResponse(serialize_cart(cart))


@require_POST
@api_login_required
def api_cart_remove(request):
    try:
        sample_id = require_id(parse_json_body(request), 'sampleId')
    except BadRequest as exc:
        return json_error(exc.message, exc.status)
    remove_from_cart(request.user, sample_id)
    return JsonResponse(serialize_cart(get_cart(request.user)))


# =============================================================================
# ORDER API
# =============================================================================

@require_POST
@api_login_required
def api_order_create(request):
    """
    Create an order from the cart with the submitted UTR.

    Any failure answers 400 with a message and leaves the cart untouched.
    """
    try:
        payload = parse_json_body(request)
    except BadRequest as exc:
        return json_error(exc.message, exc.status)

    utr = payload.get('utr')
    if not isinstance(utr, str):
        return json_error('Please enter a valid UTR number')

    try:
        order = place_order(request.user, utr)
    except CheckoutError as exc:
        return json_error(exc.message, status=400)

    return JsonResponse(serialize_order(order), status=201)


@require_GET
@api_login_required
def api_my_purchases(request):
    orders = (
        Order.objects.filter(buyer=request.user)
        .prefetch_related('items')
        .order_by('-created_at')
    )
    return JsonResponse([serialize_order(order) for order in orders], safe=False)


@require_GET
@login_required
def download_sample(request, pk, sample_id):
    """
    Stream a purchased sample to its buyer.

    Anyone who is not the buyer gets a 404, so order ids cannot be probed.
    """
    order = get_object_or_404(Order, pk=pk, buyer=request.user)
    item = order.items.filter(sample_id=sample_id).select_related('sample').first()
    if item is None or item.sample is None or not item.sample.audio_file:
        raise Http404('Sample not found in this order')

    sample = item.sample
    extension = sample.audio_file.name.rsplit('.', 1)[-1]
    filename = f"{sample.title}.{extension}"
    logger.info('User %s downloaded sample %s from order %s', request.user.pk, sample.pk, order.order_number)
    return FileResponse(sample.audio_file.open('rb'), as_attachment=True, filename=filename)


# =============================================================================
# CATALOG PAGES
# =============================================================================

def home(request):
    context = {
        'title': 'Home',
        'latest_loops': catalog_queryset('loop')[:8],
        'latest_oneshots': catalog_queryset('oneshot')[:8],
    }
    return render(request, 'core/home.html', context)


def browse(request, sample_type):
    """Loops or one-shots listing."""
    label = dict(Sample.TYPE_CHOICES)[sample_type]
    context = {
        'title': f'Browse {label}s',
        'sample_type': sample_type,
        'samples': catalog_queryset(sample_type, request.GET.get('genre')),
    }
    return render(request, 'core/browse.html', context)


# =============================================================================
# CART PAGES
# =============================================================================

@login_required
def cart_view(request):
    cart = get_cart(request.user)
    samples = cart.samples() if cart else []
    context = {
        'title': 'Shopping Cart',
        'samples': samples,
        'total': sum(sample.price for sample in samples),
    }
    return render(request, 'core/cart.html', context)


@login_required
@require_POST
def cart_add(request, sample_id):
    """Add to cart from a sample card. ``buy_now`` goes straight to the cart."""
    try:
        _, added = add_to_cart(request.user, sample_id)
    except CartError as exc:
        messages.error(request, exc.message)
        return redirect(safe_next(request, 'core:loops'))

    if added:
        messages.success(request, 'Added to cart')
    if request.POST.get('buy_now'):
        return redirect('core:cart')
    return redirect(safe_next(request, 'core:cart'))


@login_required
@require_POST
def cart_remove(request, sample_id):
    if remove_from_cart(request.user, sample_id):
        messages.success(request, 'Removed from cart')
    return redirect('core:cart')


# =============================================================================
# CHECKOUT PAGE
# =============================================================================

@login_required
def checkout(request):
    """
    Manual UPI checkout.

    POST actions:
        paid   - "I have paid": payment -> utr
        back   - utr -> payment
        submit - validate the UTR and place the order
    """
    flow = CheckoutFlow(request)
    cart = get_cart(request.user)

    if cart is None or cart.is_empty():
        flow.reset()
        messages.info(request, 'Your cart is empty')
        return redirect('core:loops')

    utr = ''
    if request.method == 'POST':
        action = request.POST.get('action')

        if action == 'paid':
            flow.mark_paid()
            return redirect('core:checkout')

        if action == 'back':
            flow.back()
            return redirect('core:checkout')

        if action == 'submit':
            utr = request.POST.get('utr', '')
            try:
                flow.submit(utr)
            except CheckoutError as exc:
                messages.error(request, f'{exc.title}: {exc.message}')
            else:
                messages.success(request, 'Order confirmed! Check your email for download links.')
                return redirect(f"{reverse('accounts:dashboard')}?tab=purchases")

    samples = cart.samples()
    context = {
        'title': 'Checkout',
        'step': flow.step,
        'samples': samples,
        'total': sum(sample.price for sample in samples),
        'upi_id': settings.UPI_ID,
        'upi_payee_name': settings.UPI_PAYEE_NAME,
        'utr': utr,
        'utr_max_length': settings.UTR_MAX_LENGTH,
    }
    return render(request, 'core/checkout.html', context)


# =============================================================================
# UPLOAD PAGE
# =============================================================================

@login_required
@require_POST
def sample_upload(request):
    """Dashboard upload form target."""
    upload_tab = f"{reverse('accounts:dashboard')}?tab=upload"

    if not request.user.can_upload():
        messages.error(request, 'Only approved creators can upload samples.')
        return redirect(upload_tab)

    form = SampleUploadForm(request.POST, request.FILES)
    if form.is_valid():
        create_sample(request.user, form)
        messages.success(request, 'Sample uploaded successfully. Pending approval.')
        return redirect(f"{reverse('accounts:dashboard')}?tab=my-uploads")

    messages.error(request, first_form_error(form))
    return redirect(upload_tab)
