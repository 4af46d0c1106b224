"""
==============================================================================
CORE APP - FORMS
==============================================================================
Forms for sample uploads and checkout, plus the pricing helpers.

Forms:
    - SampleUploadForm: Creator uploads (audio + optional cover)
    - UTRForm: Transaction reference entered after the UPI transfer

Helpers:
    - split_earnings: Divide a sale between creator and platform
    - normalize_utr: Clean up a UTR before it is stored

Author: LusionBeatz Development Team
==============================================================================
"""

from decimal import Decimal, ROUND_HALF_UP

from django import forms
from django.conf import settings
from django.core.exceptions import ValidationError

from .models import Sample

PAISE = Decimal('0.01')


class SampleUploadForm(forms.ModelForm):
    """
    Form for uploading a sample (approved creators only).

    The upload starts in 'pending' status; an admin approves it from the
    console before it is listed.
    """

    class Meta:
        model = Sample
        fields = [
            'title', 'sample_type', 'genre', 'bpm', 'key',
            'price', 'description', 'audio_file', 'cover_image',
        ]
        widgets = {
            'title': forms.TextInput(attrs={
                'class': 'form-control',
                'placeholder': 'Epic Trap Beat',
            }),
            'sample_type': forms.Select(attrs={
                'class': 'form-select',
            }),
            'genre': forms.TextInput(attrs={
                'class': 'form-control',
                'placeholder': 'Hip Hop',
            }),
            'bpm': forms.NumberInput(attrs={
                'class': 'form-control',
                'placeholder': '140',
            }),
            'key': forms.TextInput(attrs={
                'class': 'form-control',
                'placeholder': 'C Minor',
            }),
            'price': forms.NumberInput(attrs={
                'class': 'form-control',
                'min': '0',
                'step': '1',
                'placeholder': '499',
            }),
            'description': forms.Textarea(attrs={
                'class': 'form-control',
                'rows': 3,
                'placeholder': 'Describe your sample...',
            }),
            'audio_file': forms.FileInput(attrs={
                'class': 'form-control',
                'accept': 'audio/*',
            }),
            'cover_image': forms.FileInput(attrs={
                'class': 'form-control',
                'accept': 'image/*',
            }),
        }

    def clean_title(self):
        title = self.cleaned_data.get('title', '').strip()
        if not title:
            raise ValidationError('Title is required.')
        return title

    def clean_audio_file(self):
        """Reject oversized uploads before they reach storage."""
        audio = self.cleaned_data.get('audio_file')
        if audio and audio.size > settings.MAX_AUDIO_UPLOAD_SIZE:
            limit_mb = settings.MAX_AUDIO_UPLOAD_SIZE // (1024 * 1024)
            raise ValidationError(f'Audio file must be smaller than {limit_mb} MB.')
        return audio


class UTRForm(forms.Form):
    """
    UTR entered after paying the platform UPI ID.

    Only the length is checked here. Whether the transfer really happened is
    decided when the order is reviewed, not by the form.
    """

    utr = forms.CharField(
        strip=False,
        widget=forms.TextInput(attrs={
            'class': 'form-control font-monospace',
            'placeholder': '123456789012',
            'maxlength': settings.UTR_MAX_LENGTH,
            'autocomplete': 'off',
        })
    )

    def clean_utr(self):
        utr = normalize_utr(self.cleaned_data.get('utr', ''))
        if len(utr) < settings.UTR_MIN_LENGTH:
            raise ValidationError('Please enter a valid UTR number')
        if len(utr) > settings.UTR_MAX_LENGTH:
            raise ValidationError(
                f'UTR cannot be longer than {settings.UTR_MAX_LENGTH} characters'
            )
        return utr


def normalize_utr(utr):
    """
    Strip surrounding whitespace. The reference itself is kept verbatim
    (no case folding, no removal of inner characters).
    """
    return (utr or '').strip()


def split_earnings(price, rate=None):
    """
    Split a sale between the platform and the creator.

    Args:
        price (Decimal): Sale price in INR
        rate (Decimal): Platform share (defaults to PLATFORM_COMMISSION_RATE)

    Returns:
        tuple: (creator_earning, platform_earning), both rounded to paise,
        always summing exactly to ``price``

    Example (20% commission):
        ₹499.00 -> creator ₹399.20, platform ₹99.80
    """
    if rate is None:
        rate = settings.PLATFORM_COMMISSION_RATE
    price = Decimal(price).quantize(PAISE)
    platform = (price * Decimal(rate)).quantize(PAISE, rounding=ROUND_HALF_UP)
    return price - platform, platform
