"""Tests for profile / bank details editing and the dashboard pages."""

import json

import pytest
from django.urls import reverse


def patch_json(client, url, payload):
    return client.patch(url, data=json.dumps(payload), content_type="application/json")


# =============================================================================
# Profile & bank details API
# =============================================================================


@pytest.mark.django_db
class TestProfileAPI:
    """Tests for PATCH /api/users/profile and /api/users/bank-details"""

    def test_update_name(self, buyer_client, buyer):
        response = patch_json(buyer_client, reverse("accounts_api:profile"), {"name": "Asha K"})

        assert response.status_code == 200
        assert response.json()["name"] == "Asha K"
        buyer.refresh_from_db()
        assert buyer.name == "Asha K"

    def test_email_cannot_be_changed(self, buyer_client, buyer):
        patch_json(buyer_client, reverse("accounts_api:profile"), {"name": "Asha", "email": "x@example.com"})

        buyer.refresh_from_db()
        assert buyer.email == "buyer@example.com"

    def test_profile_requires_login(self, client, db):
        response = patch_json(client, reverse("accounts_api:profile"), {"name": "Someone"})

        assert response.status_code == 401

    def test_bank_details_partial_update(self, buyer_client, buyer):
        patch_json(buyer_client, reverse("accounts_api:bank_details"), {
            "holderName": "Asha Buyer",
            "upiId": "asha@okaxis",
        })

        response = patch_json(buyer_client, reverse("accounts_api:bank_details"), {
            "ifsc": "sbin0001234",
            "accountNumber": "123456789012",
        })

        assert response.status_code == 200
        details = response.json()["bankDetails"]
        assert details["holderName"] == "Asha Buyer"
        assert details["upiId"] == "asha@okaxis"
        assert details["ifsc"] == "SBIN0001234"
        assert details["accountNumber"] == "123456789012"

    @pytest.mark.parametrize("payload, message", [
        ({"upiId": "not-a-upi"}, "Invalid UPI ID format."),
        ({"ifsc": "1234"}, "Invalid IFSC code format."),
        ({"accountNumber": "12ab"}, "Account number must be 9 to 18 digits."),
    ])
    def test_malformed_bank_details(self, buyer_client, payload, message):
        response = patch_json(buyer_client, reverse("accounts_api:bank_details"), payload)

        assert response.status_code == 400
        assert response.json()["message"] == message


# =============================================================================
# Pages
# =============================================================================


@pytest.mark.django_db
class TestAccountPages:

    def test_dashboard_requires_login(self, client):
        response = client.get(reverse("accounts:dashboard"))

        assert response.status_code == 302
        assert reverse("accounts:login") in response.url

    def test_dashboard_tabs(self, buyer_client):
        response = buyer_client.get(reverse("accounts:dashboard") + "?tab=purchases")

        assert response.status_code == 200
        assert response.context["active_tab"] == "purchases"

    def test_unknown_tab_falls_back_to_profile(self, buyer_client):
        response = buyer_client.get(reverse("accounts:dashboard") + "?tab=nope")

        assert response.context["active_tab"] == "profile"

    def test_upload_form_only_for_approved_creators(self, client, buyer, creator):
        client.force_login(buyer)
        assert client.get(reverse("accounts:dashboard")).context["upload_form"] is None

        client.force_login(creator)
        assert client.get(reverse("accounts:dashboard")).context["upload_form"] is not None

    def test_login_page_redirects_unverified_user_to_verify(self, client, make_user):
        make_user("pending@example.com", is_verified=False)

        response = client.post(reverse("accounts:login"), {
            "email": "pending@example.com",
            "password": "testpass123",
        })

        assert response.status_code == 302
        assert response.url.startswith(reverse("accounts:verify"))

    def test_login_ignores_offsite_next(self, client, buyer):
        response = client.post(reverse("accounts:login") + "?next=https://evil.example.com/", {
            "email": buyer.email,
            "password": "testpass123",
        })

        assert response.status_code == 302
        assert response.url == reverse("accounts:dashboard")

    def test_signup_page_sends_user_to_verification(self, client, db):
        response = client.post(reverse("accounts:signup"), {
            "name": "Ravi",
            "email": "ravi@example.com",
            "password": "beats123",
        })

        assert response.status_code == 302
        assert "email=ravi%40example.com" in response.url
