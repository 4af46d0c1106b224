"""Tests for the PDF reports."""

import pytest
from django.urls import reverse

from core.cart import add_to_cart
from core.checkout import place_order


@pytest.fixture
def order(buyer, sample):
    add_to_cart(buyer, sample.pk)
    return place_order(buyer, "123456789012")


@pytest.mark.django_db
class TestReceipt:
    """Tests for /reports/receipt/<order_id>/"""

    def test_buyer_gets_pdf(self, buyer_client, order):
        response = buyer_client.get(reverse("reports:receipt", args=[order.pk]))

        assert response.status_code == 200
        assert response["Content-Type"] == "application/pdf"
        assert response.content.startswith(b"%PDF")
        assert order.order_number in response["Content-Disposition"]

    def test_admin_can_view_any_receipt(self, admin_client, order):
        response = admin_client.get(reverse("reports:receipt", args=[order.pk]))

        assert response.status_code == 200

    def test_other_user_is_denied(self, client, make_user, order):
        client.force_login(make_user("other@example.com"))

        response = client.get(reverse("reports:receipt", args=[order.pk]))

        assert response.status_code == 403


@pytest.mark.django_db
class TestEarningsSummary:
    """Tests for /reports/earnings-summary/"""

    def test_admin_gets_pdf(self, admin_client, order):
        response = admin_client.get(reverse("reports:earnings_summary"))

        assert response.status_code == 200
        assert response.content.startswith(b"%PDF")

    def test_empty_platform(self, admin_client):
        response = admin_client.get(reverse("reports:earnings_summary"))

        assert response.status_code == 200

    def test_regular_user_is_denied(self, buyer_client):
        response = buyer_client.get(reverse("reports:earnings_summary"))

        assert response.status_code == 403
