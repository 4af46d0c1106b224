"""
JSON representations of marketplace objects.

Keys are camelCase because that is what the browser client reads
(``coverUrl``, ``creatorEarning``, ...). Money is sent as a string with two
decimals so no precision is lost.
"""


def money(value):
    return f"{value:.2f}"


def serialize_sample(sample, include_status=False):
    data = {
        'id': sample.pk,
        'title': sample.title,
        'type': sample.sample_type,
        'genre': sample.genre,
        'bpm': sample.bpm,
        'key': sample.key,
        'price': money(sample.price),
        'description': sample.description,
        'audioUrl': sample.get_audio_url(),
        'coverUrl': sample.get_cover_url(),
        'creatorName': sample.creator.name,
        'createdAt': sample.created_at.isoformat(),
    }
    if include_status:
        data['status'] = sample.status
        data['creatorId'] = sample.creator_id
    return data


def serialize_cart(cart):
    """``{"items": [...], "total": n}``; an absent cart is an empty cart."""
    if cart is None:
        return {'items': [], 'total': 0.0}
    samples = cart.samples()
    total = sum(sample.price for sample in samples)
    return {
        'items': [serialize_sample(sample) for sample in samples],
        'total': float(total),
    }


def serialize_order_item(item):
    return {
        'sampleId': item.sample_id,
        'title': item.sample_title,
        'price': money(item.price),
    }


def serialize_order(order, include_earnings=False, include_buyer=False):
    data = {
        'id': order.pk,
        'orderNumber': order.order_number,
        'amount': money(order.amount),
        'utr': order.utr,
        'samples': [serialize_order_item(item) for item in order.items.all()],
        'createdAt': order.created_at.isoformat(),
    }
    if include_earnings:
        data['creatorEarning'] = money(order.creator_earning)
        data['platformEarning'] = money(order.platform_earning)
    if include_buyer:
        buyer = order.buyer
        data['buyer'] = {'id': buyer.pk, 'email': buyer.email, 'name': buyer.name} if buyer else None
    return data
