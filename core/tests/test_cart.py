"""Tests for cart operations and the cart API / pages."""

import json

import pytest
from django.urls import reverse

from core.cart import CartError, add_to_cart, get_cart, remove_from_cart
from core.checkout import place_order


def post_json(client, url, payload):
    return client.post(url, data=json.dumps(payload), content_type="application/json")


# =============================================================================
# Cart operations
# =============================================================================


@pytest.mark.django_db
class TestCartOperations:

    def test_add_creates_cart_on_first_use(self, buyer, sample):
        assert get_cart(buyer) is None

        cart, added = add_to_cart(buyer, sample.pk)

        assert added is True
        assert cart.samples() == [sample]

    def test_adding_twice_keeps_one_entry(self, buyer, sample):
        add_to_cart(buyer, sample.pk)
        cart, added = add_to_cart(buyer, sample.pk)

        assert added is False
        assert cart.items.count() == 1

    def test_pending_sample_cannot_be_added(self, buyer, make_sample):
        pending = make_sample(title="Pending", status="pending")

        with pytest.raises(CartError) as exc:
            add_to_cart(buyer, pending.pk)

        assert exc.value.status == 404

    def test_creator_cannot_buy_own_sample(self, creator, sample):
        with pytest.raises(CartError, match="your own sample"):
            add_to_cart(creator, sample.pk)

    def test_purchased_sample_cannot_be_added_again(self, buyer, sample):
        add_to_cart(buyer, sample.pk)
        place_order(buyer, "123456789012")

        with pytest.raises(CartError, match="already own"):
            add_to_cart(buyer, sample.pk)

    def test_remove_missing_sample_is_a_no_op(self, buyer, sample):
        assert remove_from_cart(buyer, sample.pk) is False

        add_to_cart(buyer, sample.pk)
        assert remove_from_cart(buyer, sample.pk) is True
        assert get_cart(buyer).is_empty()

    def test_total_sums_current_prices(self, buyer, make_sample):
        for price in ("100.00", "49.50"):
            add_to_cart(buyer, make_sample(title=f"S{price}", price=price).pk)

        assert str(get_cart(buyer).total()) == "149.50"


# =============================================================================
# Cart API
# =============================================================================


@pytest.mark.django_db
class TestCartAPI:
    """Tests for /api/cart, /api/cart/add, /api/cart/remove"""

    def test_empty_cart(self, buyer_client):
        response = buyer_client.get(reverse("core_api:cart"))

        assert response.json() == {"items": [], "total": 0.0}

    def test_add_and_remove(self, buyer_client, sample):
        response = post_json(buyer_client, reverse("core_api:cart_add"), {"sampleId": sample.pk})

        assert response.status_code == 200
        assert response.json()["total"] == 100.0
        assert [item["id"] for item in response.json()["items"]] == [sample.pk]

        response = post_json(buyer_client, reverse("core_api:cart_remove"), {"sampleId": sample.pk})
        assert response.json()["items"] == []

    def test_missing_sample_id(self, buyer_client):
        response = post_json(buyer_client, reverse("core_api:cart_add"), {})

        assert response.status_code == 400
        assert response.json()["message"] == "sampleId is required."

    def test_unknown_sample(self, buyer_client):
        response = post_json(buyer_client, reverse("core_api:cart_add"), {"sampleId": 9999})

        assert response.status_code == 404
        assert response.json()["message"] == "Sample not found"

    @pytest.mark.parametrize("sample_id", [99999999999999999999, -1, "abc"])
    def test_out_of_range_sample_id(self, buyer_client, sample_id):
        response = post_json(buyer_client, reverse("core_api:cart_add"), {"sampleId": sample_id})

        assert response.status_code == 400
        assert response.json()["message"] == "sampleId must be a valid id."

    def test_cart_requires_login(self, client, db):
        assert client.get(reverse("core_api:cart")).status_code == 401


# =============================================================================
# Cart pages
# =============================================================================


@pytest.mark.django_db
class TestCartPages:

    def test_buy_now_goes_to_cart(self, buyer_client, sample):
        response = buyer_client.post(reverse("core:cart_add", args=[sample.pk]), {"buy_now": "1"})

        assert response.status_code == 302
        assert response.url == reverse("core:cart")

    def test_add_returns_to_listing(self, buyer_client, sample):
        response = buyer_client.post(reverse("core:cart_add", args=[sample.pk]), {"next": "/loops/"})

        assert response.url == "/loops/"

    def test_offsite_next_is_ignored(self, buyer_client, sample):
        response = buyer_client.post(
            reverse("core:cart_add", args=[sample.pk]), {"next": "https://evil.example.com/"}
        )

        assert response.url == reverse("core:cart")

    def test_cart_page_lists_samples(self, buyer_client, buyer, sample):
        add_to_cart(buyer, sample.pk)

        response = buyer_client.get(reverse("core:cart"))

        assert response.status_code == 200
        assert list(response.context["samples"]) == [sample]
        assert response.context["cart_count"] == 1
        assert sample.title in response.content.decode()
