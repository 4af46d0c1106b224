"""
==============================================================================
CONSOLE APP - VIEWS
==============================================================================
Admin approval console. Every view requires role 'admin'.

JSON API (mounted under /api/admin/):
    - users, samples, orders, stats
    - approve-user, reject-user, approve-sample, reject-sample (POST)
    - users/<id>, samples/<id> (DELETE)

Pages:
    - console_home: Pending creators/samples, recent orders
    - console_action: POST target of the console buttons

Author: LusionBeatz Development Team
==============================================================================
"""

from django.contrib import messages
from django.http import JsonResponse
from django.shortcuts import redirect, render
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from accounts.decorators import admin_page_required, admin_required
from accounts.models import CustomUser
from accounts.services import serialize_user
from core.http import BadRequest, json_error, parse_id, parse_json_body, require_id
from core.models import Order, Sample
from core.serializers import money, serialize_order, serialize_sample
from . import moderation

# action name -> (function, id field in the payload, success message)
ACTIONS = {
    'approve-user': (moderation.approve_creator, 'userId', 'User approved'),
    'reject-user': (moderation.reject_creator, 'userId', 'User rejected'),
    'approve-sample': (moderation.approve_sample, 'sampleId', 'Sample approved'),
    'reject-sample': (moderation.reject_sample, 'sampleId', 'Sample rejected'),
    'delete-user': (moderation.delete_user, 'userId', 'User deleted'),
    'delete-sample': (moderation.delete_sample, 'sampleId', 'Sample deleted'),
}


# =============================================================================
# JSON API
# =============================================================================

@require_GET
@admin_required
def api_users(request):
    users = CustomUser.objects.select_related('profile').order_by('-created_at')
    return JsonResponse([serialize_user(user) for user in users], safe=False)


@require_GET
@admin_required
def api_samples(request):
    samples = Sample.objects.select_related('creator').order_by('-created_at')
    status = request.GET.get('status')
    if status:
        samples = samples.filter(status=status)
    return JsonResponse(
        [serialize_sample(sample, include_status=True) for sample in samples], safe=False
    )


@require_GET
@admin_required
def api_orders(request):
    orders = Order.objects.select_related('buyer').prefetch_related('items').order_by('-created_at')
    return JsonResponse(
        [serialize_order(order, include_earnings=True, include_buyer=True) for order in orders],
        safe=False,
    )


@require_GET
@admin_required
def api_stats(request):
    stats = moderation.platform_stats()
    for key in ('total_revenue', 'platform_earnings', 'creator_earnings'):
        stats[key] = money(stats[key])
    return JsonResponse({
        'totalUsers': stats['total_users'],
        'pendingCreators': stats['pending_creators'],
        'pendingSamples': stats['pending_samples'],
        'approvedSamples': stats['approved_samples'],
        'totalOrders': stats['total_orders'],
        'totalRevenue': stats['total_revenue'],
        'platformEarnings': stats['platform_earnings'],
        'creatorEarnings': stats['creator_earnings'],
    })


@require_POST
@admin_required
def api_action(request, action):
    """approve-user, reject-user, approve-sample and reject-sample."""
    func, id_field, success = ACTIONS[action]
    try:
        target_id = require_id(parse_json_body(request), id_field)
        result = func(request.user, target_id)
    except BadRequest as exc:
        return json_error(exc.message, exc.status)
    except moderation.ModerationError as exc:
        return json_error(exc.message, exc.status)

    if isinstance(result, CustomUser):
        return JsonResponse({'message': success, 'user': serialize_user(result)})
    return JsonResponse({'message': success, 'sample': serialize_sample(result, include_status=True)})


@require_http_methods(['DELETE'])
@admin_required
def api_delete_user(request, pk):
    try:
        moderation.delete_user(request.user, pk)
    except moderation.ModerationError as exc:
        return json_error(exc.message, exc.status)
    return JsonResponse({'message': 'User deleted'})


@require_http_methods(['DELETE'])
@admin_required
def api_delete_sample(request, pk):
    try:
        moderation.delete_sample(request.user, pk)
    except moderation.ModerationError as exc:
        return json_error(exc.message, exc.status)
    return JsonResponse({'message': 'Sample deleted'})


# =============================================================================
# PAGES
# =============================================================================

@admin_page_required
def console_home(request):
    """
    Admin console page.

    Shows platform totals, creators and samples waiting for a decision,
    and the latest orders with their earnings split.
    """
    context = {
        'title': 'Admin Console',
        'stats': moderation.platform_stats(),
        'pending_creators': moderation.pending_creators(),
        'pending_samples': moderation.pending_samples(),
        'users': CustomUser.objects.order_by('-created_at'),
        'samples': Sample.objects.select_related('creator').order_by('-created_at'),
        'recent_orders': Order.objects.select_related('buyer').order_by('-created_at')[:20],
    }
    return render(request, 'console/console.html', context)


@admin_page_required
@require_POST
def console_action(request, action):
    """Run one moderation action from a console button and go back."""
    if action not in ACTIONS:
        messages.error(request, 'Unknown action.')
        return redirect('console:home')

    func, _, success = ACTIONS[action]
    try:
        target_id = parse_id(request.POST.get('target_id', ''))
    except ValueError:
        messages.error(request, 'Invalid selection.')
        return redirect('console:home')

    try:
        func(request.user, target_id)
    except moderation.ModerationError as exc:
        messages.error(request, exc.message)
    else:
        messages.success(request, success)
    return redirect('console:home')
