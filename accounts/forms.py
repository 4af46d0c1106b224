"""
==============================================================================
ACCOUNTS APP - FORMS
==============================================================================
Forms for signup, login, email verification and dashboard profile edits.

The same forms validate both the JSON API payloads and the HTML pages, so
the rules (name >= 2 characters, password >= 6 characters, 6-digit OTP) live
in one place.

Forms:
    - SignupForm: New account (name, email, password)
    - LoginForm: Email + password
    - VerifyOTPForm / ResendOTPForm: Email verification
    - ProfileForm: Display name
    - BankDetailsForm: Creator payout details

Author: LusionBeatz Development Team
==============================================================================
"""

import re

from django import forms
from django.conf import settings
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError

from .models import CustomUser, Profile


class SignupForm(forms.Form):
    """
    Registration form.

    Creates the account as unverified; the view mails the OTP.
    """

    name = forms.CharField(
        min_length=2,
        max_length=150,
        error_messages={'min_length': 'Name must be at least 2 characters'},
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': 'John Doe',
        })
    )

    email = forms.EmailField(
        error_messages={'invalid': 'Invalid email address'},
        widget=forms.EmailInput(attrs={
            'class': 'form-control',
            'placeholder': 'you@example.com',
        })
    )

    password = forms.CharField(
        min_length=6,
        error_messages={'min_length': 'Password must be at least 6 characters'},
        widget=forms.PasswordInput(attrs={
            'class': 'form-control',
        })
    )

    def clean_email(self):
        """Emails are stored lower-case and must be unique."""
        email = self.cleaned_data['email'].strip().lower()
        if CustomUser.objects.filter(email__iexact=email).exists():
            raise ValidationError('Email already registered')
        return email

    def clean_password(self):
        password = self.cleaned_data['password']
        validate_password(password)
        return password

    def save(self):
        data = self.cleaned_data
        return CustomUser.objects.create_user(
            username=data['email'],
            email=data['email'],
            password=data['password'],
            name=data['name'].strip(),
        )


class LoginForm(forms.Form):
    """Email/password login; authentication happens in the view."""

    email = forms.EmailField(
        widget=forms.EmailInput(attrs={
            'class': 'form-control',
            'placeholder': 'you@example.com',
            'autofocus': True,
        })
    )

    password = forms.CharField(
        widget=forms.PasswordInput(attrs={
            'class': 'form-control',
        })
    )

    def clean_email(self):
        return self.cleaned_data['email'].strip().lower()


class ResendOTPForm(forms.Form):
    email = forms.EmailField()

    def clean_email(self):
        return self.cleaned_data['email'].strip().lower()


class VerifyOTPForm(ResendOTPForm):
    """Email plus the numeric code from the verification mail."""

    otp = forms.CharField(
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'inputmode': 'numeric',
            'autocomplete': 'one-time-code',
        })
    )

    def clean_otp(self):
        otp = self.cleaned_data['otp'].strip()
        if not re.fullmatch(r'\d{%d}' % settings.OTP_LENGTH, otp):
            raise ValidationError(f'Enter the {settings.OTP_LENGTH}-digit code')
        return otp


class ProfileForm(forms.ModelForm):
    """Only the display name is editable; the email is the login."""

    class Meta:
        model = CustomUser
        fields = ['name']
        widgets = {
            'name': forms.TextInput(attrs={'class': 'form-control'}),
        }

    def clean_name(self):
        name = self.cleaned_data['name'].strip()
        if len(name) < 2:
            raise ValidationError('Name must be at least 2 characters')
        return name


class BankDetailsForm(forms.ModelForm):
    """
    Creator payout details.

    All fields are optional, but whatever is entered must be well-formed.
    """

    class Meta:
        model = Profile
        fields = ['holder_name', 'upi_id', 'account_number', 'ifsc', 'phone']
        widgets = {
            'holder_name': forms.TextInput(attrs={'class': 'form-control'}),
            'upi_id': forms.TextInput(attrs={
                'class': 'form-control',
                'placeholder': 'yourname@okaxis',
            }),
            'account_number': forms.TextInput(attrs={'class': 'form-control'}),
            'ifsc': forms.TextInput(attrs={
                'class': 'form-control',
                'placeholder': 'SBIN0001234',
            }),
            'phone': forms.TextInput(attrs={
                'class': 'form-control',
                'placeholder': '+91-9876543210',
            }),
        }

    def clean_upi_id(self):
        upi_id = self.cleaned_data.get('upi_id', '').strip()
        if upi_id and not re.fullmatch(r'[\w.\-]{2,}@[A-Za-z]{2,}', upi_id):
            raise ValidationError('Invalid UPI ID format.')
        return upi_id

    def clean_account_number(self):
        number = self.cleaned_data.get('account_number', '').replace(' ', '')
        if number and not re.fullmatch(r'\d{9,18}', number):
            raise ValidationError('Account number must be 9 to 18 digits.')
        return number

    def clean_ifsc(self):
        """IFSC format: 4 letters, a zero, then 6 letters or digits."""
        ifsc = self.cleaned_data.get('ifsc', '').strip().upper()
        if ifsc and not re.fullmatch(r'[A-Z]{4}0[A-Z0-9]{6}', ifsc):
            raise ValidationError('Invalid IFSC code format.')
        return ifsc


# Wire (camelCase) field names used by the dashboard for bank details
BANK_DETAILS_FIELD_MAP = {
    'holderName': 'holder_name',
    'upiId': 'upi_id',
    'accountNumber': 'account_number',
    'ifsc': 'ifsc',
    'phone': 'phone',
}


def bank_details_from_payload(payload, profile):
    """
    Map a camelCase JSON payload onto form data, keeping current values for
    fields the client did not send (PATCH semantics).
    """
    data = {}
    for wire_name, field_name in BANK_DETAILS_FIELD_MAP.items():
        if wire_name in payload:
            data[field_name] = payload[wire_name] or ''
        else:
            data[field_name] = getattr(profile, field_name)
    return data
