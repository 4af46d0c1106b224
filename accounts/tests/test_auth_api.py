"""Tests for the signup / OTP / login JSON API."""

import json
from datetime import timedelta

import pytest
from django.core import mail
from django.urls import reverse
from django.utils import timezone

from accounts.models import CustomUser, EmailOTP


def post_json(client, url, payload):
    return client.post(url, data=json.dumps(payload), content_type="application/json")


def latest_code(email):
    return EmailOTP.objects.filter(user__email=email, is_used=False).latest("created_at").code


# =============================================================================
# Signup
# =============================================================================


@pytest.mark.django_db
class TestSignup:
    """Tests for POST /api/auth/signup"""

    def test_signup_creates_unverified_user_and_mails_code(self, client):
        response = post_json(client, reverse("accounts_api:signup"), {
            "name": "Asha",
            "email": "Asha@Example.com",
            "password": "beats123",
        })

        assert response.status_code == 201
        user = CustomUser.objects.get(email="asha@example.com")
        assert user.is_verified is False
        assert user.username == user.email
        assert len(mail.outbox) == 1
        assert latest_code(user.email) in mail.outbox[0].body

    def test_duplicate_email_is_rejected(self, client, buyer):
        response = post_json(client, reverse("accounts_api:signup"), {
            "name": "Again",
            "email": buyer.email,
            "password": "beats123",
        })

        assert response.status_code == 400
        assert response.json()["message"] == "Email already registered"

    def test_short_password_is_rejected(self, client):
        response = post_json(client, reverse("accounts_api:signup"), {
            "name": "Asha",
            "email": "asha@example.com",
            "password": "abc",
        })

        assert response.status_code == 400
        assert "at least 6" in response.json()["message"]
        assert not CustomUser.objects.filter(email="asha@example.com").exists()

    def test_invalid_json_body(self, client):
        response = client.post(reverse("accounts_api:signup"), data="{not json", content_type="application/json")

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid JSON body."


# =============================================================================
# OTP verification
# =============================================================================


@pytest.mark.django_db
class TestVerifyOTP:
    """Tests for POST /api/auth/verify-otp and /api/auth/resend-otp"""

    @pytest.fixture
    def pending(self, make_user):
        from accounts.services import issue_otp

        user = make_user("new@example.com", is_verified=False)
        issue_otp(user)
        return user

    def test_correct_code_verifies_email(self, client, pending):
        response = post_json(client, reverse("accounts_api:verify_otp"), {
            "email": pending.email,
            "otp": latest_code(pending.email),
        })

        assert response.status_code == 200
        assert response.json()["user"]["verified"] is True
        pending.refresh_from_db()
        assert pending.is_verified

    def test_wrong_code_is_rejected(self, client, pending):
        code = latest_code(pending.email)
        wrong = "000000" if code != "000000" else "111111"

        response = post_json(client, reverse("accounts_api:verify_otp"), {
            "email": pending.email,
            "otp": wrong,
        })

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid or expired OTP"

    def test_expired_code_is_rejected(self, client, pending):
        code = latest_code(pending.email)
        EmailOTP.objects.filter(user=pending).update(expires_at=timezone.now() - timedelta(minutes=1))

        response = post_json(client, reverse("accounts_api:verify_otp"), {
            "email": pending.email,
            "otp": code,
        })

        assert response.status_code == 400

    def test_resend_invalidates_previous_code(self, client, pending):
        old_otp = EmailOTP.objects.get(user=pending)

        response = post_json(client, reverse("accounts_api:resend_otp"), {"email": pending.email})

        assert response.status_code == 200
        assert EmailOTP.objects.filter(user=pending, is_used=False).count() == 1
        old_otp.refresh_from_db()
        assert old_otp.is_used

    def test_resend_for_verified_user(self, client, buyer):
        response = post_json(client, reverse("accounts_api:resend_otp"), {"email": buyer.email})

        assert response.status_code == 400
        assert response.json()["message"] == "Email is already verified. Please log in."

    def test_resend_for_unknown_email(self, client, db):
        response = post_json(client, reverse("accounts_api:resend_otp"), {"email": "ghost@example.com"})

        assert response.status_code == 400
        assert response.json()["message"] == "No account found for this email"


# =============================================================================
# Login / session
# =============================================================================


@pytest.mark.django_db
class TestLogin:
    """Tests for POST /api/auth/login and GET /api/auth/me"""

    def test_login_with_email_and_password(self, client, buyer):
        response = post_json(client, reverse("accounts_api:login"), {
            "email": buyer.email,
            "password": "testpass123",
        })

        assert response.status_code == 200
        assert response.json()["user"]["email"] == buyer.email

        me = client.get(reverse("accounts_api:me"))
        assert me.status_code == 200
        assert me.json()["id"] == buyer.pk

    def test_wrong_password(self, client, buyer):
        response = post_json(client, reverse("accounts_api:login"), {
            "email": buyer.email,
            "password": "nope-nope",
        })

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"

    def test_unverified_user_cannot_log_in(self, client, make_user):
        user = make_user("pending@example.com", is_verified=False)

        response = post_json(client, reverse("accounts_api:login"), {
            "email": user.email,
            "password": "testpass123",
        })

        assert response.status_code == 403

    def test_me_requires_login(self, client, db):
        response = client.get(reverse("accounts_api:me"))

        assert response.status_code == 401
        assert response.json()["message"] == "Not authenticated"

    def test_logout_ends_session(self, buyer_client):
        buyer_client.post(reverse("accounts_api:logout"))

        assert buyer_client.get(reverse("accounts_api:me")).status_code == 401
