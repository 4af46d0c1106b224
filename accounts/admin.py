"""
==============================================================================
ACCOUNTS APP - ADMIN CONFIGURATION
==============================================================================
Register users, payout profiles and OTPs with the Django Admin interface.

The day-to-day creator approvals happen in the console (/console/); the
actions here cover the same moderation for superusers working in /admin/.

Author: LusionBeatz Development Team
==============================================================================
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from console import moderation

from .models import CustomUser, EmailOTP, Profile


class ProfileInline(admin.StackedInline):
    """Payout details edited on the user page."""
    model = Profile
    can_delete = False
    verbose_name_plural = 'Payout details'
    fk_name = 'user'

    fieldsets = (
        ('Bank Account', {
            'fields': ('holder_name', 'account_number', 'ifsc')
        }),
        ('UPI & Contact', {
            'fields': ('upi_id', 'phone')
        }),
    )


@admin.register(CustomUser)
class CustomUserAdmin(UserAdmin):
    """
    Custom admin configuration for CustomUser model.

    Extends Django's built-in UserAdmin with role, verification and
    creator approval.
    """

    list_display = ('email', 'name', 'role', 'is_verified', 'approved_creator',
                    'is_active', 'date_joined')

    list_display_links = ('email', 'name')

    list_filter = ('role', 'is_verified', 'approved_creator', 'is_active', 'date_joined')

    search_fields = ('email', 'name', 'username')

    ordering = ('-date_joined',)

    inlines = [ProfileInline]

    fieldsets = (
        (None, {
            'fields': ('username', 'password')
        }),
        ('Personal Information', {
            'fields': ('name', 'email')
        }),
        ('Role & Verification', {
            'fields': ('role', 'is_verified', 'approved_creator'),
            'description': 'Only approved creators can upload samples.'
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',)
        }),
        ('Important Dates', {
            'fields': ('last_login', 'date_joined'),
            'classes': ('collapse',)
        }),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('username', 'email', 'name', 'password1', 'password2', 'role')
        }),
    )

    actions = ['approve_creators', 'revoke_creators']

    @admin.action(description='Approve selected users as creators')
    def approve_creators(self, request, queryset):
        count = 0
        for user in queryset.filter(is_verified=True):
            moderation.approve_creator(request.user, user.pk)
            count += 1
        self.message_user(request, f'{count} creators have been approved.')

    @admin.action(description='Revoke creator approval')
    def revoke_creators(self, request, queryset):
        count = 0
        for user in queryset:
            moderation.reject_creator(request.user, user.pk)
            count += 1
        self.message_user(request, f'{count} creators have been revoked.')


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ('user', 'holder_name', 'upi_id', 'ifsc', 'phone', 'updated_at')
    search_fields = ('user__email', 'holder_name', 'upi_id')
    ordering = ('-created_at',)
    readonly_fields = ('created_at', 'updated_at')


@admin.register(EmailOTP)
class EmailOTPAdmin(admin.ModelAdmin):
    list_display = ('user', 'is_used', 'expires_at', 'created_at')
    list_filter = ('is_used',)
    search_fields = ('user__email',)
    readonly_fields = ('code', 'created_at')
