"""
==============================================================================
CORE APP - ADMIN CONFIGURATION
==============================================================================
Register marketplace models with the Django Admin interface.

Models registered:
    - Sample: Uploaded loops and one-shots (with approve/reject actions)
    - Cart: User carts with their items inline
    - Order: UTR-backed orders with their items inline

Author: LusionBeatz Development Team
==============================================================================
"""

from django.contrib import admin

from console import moderation

from .models import Cart, CartItem, Order, OrderItem, Sample


@admin.register(Sample)
class SampleAdmin(admin.ModelAdmin):
    """Admin configuration for Sample model."""

    list_display = ('title', 'sample_type', 'genre', 'bpm', 'key', 'price',
                    'creator', 'status', 'created_at')
    list_filter = ('status', 'sample_type', 'genre')
    search_fields = ('title', 'genre', 'creator__email')
    ordering = ('-created_at',)
    readonly_fields = ('reviewed_at', 'created_at', 'updated_at')

    fieldsets = (
        ('Basic Information', {
            'fields': ('title', 'sample_type', 'genre', 'bpm', 'key', 'description')
        }),
        ('Files', {
            'fields': ('audio_file', 'cover_image')
        }),
        ('Pricing & Ownership', {
            'fields': ('price', 'creator')
        }),
        ('Moderation', {
            'fields': ('status', 'reviewed_at', 'created_at', 'updated_at')
        }),
    )

    actions = ['approve_samples', 'reject_samples']

    @admin.action(description='Approve selected samples')
    def approve_samples(self, request, queryset):
        count = 0
        for sample in queryset.exclude(status='approved'):
            moderation.approve_sample(request.user, sample.pk)
            count += 1
        self.message_user(request, f'{count} samples have been approved.')

    @admin.action(description='Reject selected samples')
    def reject_samples(self, request, queryset):
        count = 0
        for sample in queryset.exclude(status='rejected'):
            moderation.reject_sample(request.user, sample.pk)
            count += 1
        self.message_user(request, f'{count} samples have been rejected.')


class CartItemInline(admin.TabularInline):
    model = CartItem
    extra = 0
    readonly_fields = ('added_at',)


@admin.register(Cart)
class CartAdmin(admin.ModelAdmin):
    list_display = ('user', 'updated_at')
    search_fields = ('user__email',)
    inlines = [CartItemInline]


class OrderItemInline(admin.TabularInline):
    """Purchased samples shown inside the order."""
    model = OrderItem
    extra = 0
    readonly_fields = ('sample', 'creator', 'sample_title', 'price',
                       'creator_earning', 'platform_earning')
    can_delete = False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Admin configuration for Order model."""

    list_display = ('order_number', 'buyer', 'amount', 'creator_earning',
                    'platform_earning', 'utr', 'created_at')
    list_filter = ('created_at',)
    search_fields = ('order_number', 'utr', 'buyer__email')
    ordering = ('-created_at',)
    readonly_fields = ('order_number', 'amount', 'creator_earning',
                       'platform_earning', 'created_at', 'updated_at')

    inlines = [OrderItemInline]

    fieldsets = (
        ('Order Information', {
            'fields': ('order_number', 'buyer', 'utr')
        }),
        ('Financial Details', {
            'fields': ('amount', 'creator_earning', 'platform_earning')
        }),
        ('Dates', {
            'fields': ('created_at', 'updated_at')
        }),
    )
