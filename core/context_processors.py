"""Template context shared by every page."""

from .models import CartItem


def cart_summary(request):
    """Number of samples in the cart, shown next to the navbar cart icon."""
    user = getattr(request, 'user', None)
    if user is None or not user.is_authenticated:
        return {'cart_count': 0}
    return {'cart_count': CartItem.objects.filter(cart__user=user).count()}
