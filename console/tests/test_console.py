"""Tests for the admin console API and page."""

import json

import pytest
from django.urls import reverse

from accounts.models import CustomUser
from core.cart import add_to_cart, get_cart
from core.checkout import place_order
from core.models import Sample


def post_json(client, url, payload):
    return client.post(url, data=json.dumps(payload), content_type="application/json")


# =============================================================================
# Access control
# =============================================================================


@pytest.mark.django_db
class TestAdminOnly:
    """Every console endpoint is refused to non-admins."""

    GET_ENDPOINTS = ["users", "samples", "orders", "stats"]
    POST_ENDPOINTS = ["approve_user", "reject_user", "approve_sample", "reject_sample"]

    @pytest.mark.parametrize("name", GET_ENDPOINTS)
    def test_anonymous_gets_401(self, client, name):
        response = client.get(reverse(f"console_api:{name}"))

        assert response.status_code == 401

    @pytest.mark.parametrize("name", GET_ENDPOINTS)
    def test_regular_user_gets_403(self, buyer_client, name):
        response = buyer_client.get(reverse(f"console_api:{name}"))

        assert response.status_code == 403
        assert response.json()["message"] == "Access denied. Admins only."

    @pytest.mark.parametrize("name", POST_ENDPOINTS)
    def test_regular_user_cannot_moderate(self, buyer_client, buyer, sample, name):
        response = post_json(buyer_client, reverse(f"console_api:{name}"), {
            "userId": buyer.pk,
            "sampleId": sample.pk,
        })

        assert response.status_code == 403
        sample.refresh_from_db()
        assert sample.status == "approved"

    def test_approved_creator_is_not_an_admin(self, client, creator, sample):
        client.force_login(creator)

        response = client.delete(reverse("console_api:delete_sample", args=[sample.pk]))

        assert response.status_code == 403
        assert Sample.objects.filter(pk=sample.pk).exists()

    def test_console_page_redirects_non_admin_home(self, buyer_client):
        response = buyer_client.get(reverse("console:home"))

        assert response.status_code == 302
        assert response.url == reverse("core:home")

    def test_console_page_action_refused_to_non_admin(self, buyer_client, make_sample):
        pending = make_sample(status="pending")

        buyer_client.post(reverse("console:action", args=["approve-sample"]), {"target_id": pending.pk})

        pending.refresh_from_db()
        assert pending.status == "pending"

    def test_console_link_hidden_from_non_admin(self, buyer_client):
        response = buyer_client.get(reverse("core:home"))

        assert reverse("console:home") not in response.content.decode()


# =============================================================================
# Moderation
# =============================================================================


@pytest.mark.django_db
class TestModeration:

    def test_approve_pending_creator(self, admin_client, make_user):
        applicant = make_user("applicant@example.com")

        response = post_json(admin_client, reverse("console_api:approve_user"), {"userId": applicant.pk})

        assert response.status_code == 200
        assert response.json()["user"]["approvedCreator"] is True
        applicant.refresh_from_db()
        assert applicant.can_upload()

    def test_unverified_user_cannot_be_approved(self, admin_client, make_user):
        applicant = make_user("applicant@example.com", is_verified=False)

        response = post_json(admin_client, reverse("console_api:approve_user"), {"userId": applicant.pk})

        assert response.status_code == 400

    def test_reject_creator(self, admin_client, creator):
        post_json(admin_client, reverse("console_api:reject_user"), {"userId": creator.pk})

        creator.refresh_from_db()
        assert creator.approved_creator is False

    def test_approve_sample_lists_it(self, admin_client, make_sample):
        pending = make_sample(status="pending")

        response = post_json(admin_client, reverse("console_api:approve_sample"), {"sampleId": pending.pk})

        assert response.json()["sample"]["status"] == "approved"
        pending.refresh_from_db()
        assert pending.reviewed_at is not None

    def test_reject_sample_removes_it_from_carts(self, admin_client, buyer, sample):
        add_to_cart(buyer, sample.pk)

        post_json(admin_client, reverse("console_api:reject_sample"), {"sampleId": sample.pk})

        sample.refresh_from_db()
        assert sample.status == "rejected"
        assert get_cart(buyer).is_empty()

    def test_unknown_sample(self, admin_client):
        response = post_json(admin_client, reverse("console_api:approve_sample"), {"sampleId": 424242})

        assert response.status_code == 404

    def test_admin_cannot_delete_self(self, admin_client, admin_user):
        response = admin_client.delete(reverse("console_api:delete_user", args=[admin_user.pk]))

        assert response.status_code == 400
        assert CustomUser.objects.filter(pk=admin_user.pk).exists()

    def test_delete_user(self, admin_client, buyer):
        response = admin_client.delete(reverse("console_api:delete_user", args=[buyer.pk]))

        assert response.status_code == 200
        assert not CustomUser.objects.filter(pk=buyer.pk).exists()

    def test_deleted_buyer_keeps_orders_and_revenue(self, admin_client, buyer, sample):
        add_to_cart(buyer, sample.pk)
        order = place_order(buyer, "123456789012")

        admin_client.delete(reverse("console_api:delete_user", args=[buyer.pk]))

        order.refresh_from_db()
        assert order.buyer is None
        stats = admin_client.get(reverse("console_api:stats")).json()
        assert stats["totalRevenue"] == "100.00"
        orders = admin_client.get(reverse("console_api:orders")).json()
        assert orders[0]["buyer"] is None
        assert admin_client.get(reverse("console:home")).status_code == 200
        assert admin_client.get(reverse("reports:receipt", args=[order.pk])).status_code == 200

    def test_ids_beyond_primary_key_range_are_refused(self, admin_client):
        response = admin_client.delete(reverse("console_api:delete_user", args=[99999999999999999999]))
        assert response.status_code == 404

        response = post_json(admin_client, reverse("console_api:approve_sample"), {"sampleId": 99999999999999999999})
        assert response.status_code == 400

    def test_deleted_sample_keeps_order_history(self, admin_client, buyer, sample):
        add_to_cart(buyer, sample.pk)
        order = place_order(buyer, "123456789012")

        admin_client.delete(reverse("console_api:delete_sample", args=[sample.pk]))

        item = order.items.get()
        assert item.sample is None
        assert item.sample_title == "Trap Loop"

    def test_orders_include_earnings_and_buyer(self, admin_client, buyer, sample):
        add_to_cart(buyer, sample.pk)
        place_order(buyer, "123456789012")

        orders = admin_client.get(reverse("console_api:orders")).json()

        assert orders[0]["platformEarning"] == "20.00"
        assert orders[0]["creatorEarning"] == "80.00"
        assert orders[0]["buyer"]["email"] == buyer.email

    def test_stats(self, admin_client, buyer, sample, make_sample):
        make_sample(title="Waiting", status="pending")
        add_to_cart(buyer, sample.pk)
        place_order(buyer, "123456789012")

        stats = admin_client.get(reverse("console_api:stats")).json()

        assert stats["pendingSamples"] == 1
        assert stats["totalOrders"] == 1
        assert stats["totalRevenue"] == "100.00"
        assert stats["platformEarnings"] == "20.00"


# =============================================================================
# Console page
# =============================================================================


@pytest.mark.django_db
class TestConsolePage:

    def test_page_lists_pending_items(self, admin_client, make_user, make_sample):
        applicant = make_user("applicant@example.com")
        pending = make_sample(title="Waiting", status="pending")

        response = admin_client.get(reverse("console:home"))

        assert response.status_code == 200
        assert applicant in response.context["pending_creators"]
        assert pending in response.context["pending_samples"]

    def test_button_approves_sample(self, admin_client, make_sample):
        pending = make_sample(status="pending")

        response = admin_client.post(
            reverse("console:action", args=["approve-sample"]), {"target_id": pending.pk}
        )

        assert response.status_code == 302
        pending.refresh_from_db()
        assert pending.status == "approved"

    def test_unknown_action(self, admin_client):
        response = admin_client.post(reverse("console:action", args=["explode"]), {"target_id": 1})

        assert response.status_code == 302
