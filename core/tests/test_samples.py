"""Tests for the catalog, creator uploads and purchase downloads."""

import pytest
from django.urls import reverse

from core.cart import add_to_cart
from core.checkout import place_order
from core.models import Sample


# =============================================================================
# Catalog
# =============================================================================


@pytest.mark.django_db
class TestCatalog:
    """Tests for /api/samples and the browse pages"""

    def test_only_approved_samples_are_listed(self, client, make_sample):
        approved = make_sample(title="Approved")
        make_sample(title="Pending", status="pending")
        make_sample(title="Rejected", status="rejected")

        response = client.get(reverse("core_api:sample_list"))

        assert [s["id"] for s in response.json()] == [approved.pk]
        assert "status" not in response.json()[0]

    def test_filter_by_type(self, client, make_sample):
        make_sample(title="Loop")
        shot = make_sample(title="Shot", sample_type="oneshot")

        response = client.get(reverse("core_api:sample_list"), {"type": "oneshot"})

        assert [s["id"] for s in response.json()] == [shot.pk]

    def test_unknown_type(self, client, db):
        response = client.get(reverse("core_api:sample_list"), {"type": "vocals"})

        assert response.status_code == 400

    def test_pending_sample_detail_hidden_from_public(self, client, make_sample):
        pending = make_sample(status="pending")

        response = client.get(reverse("core_api:sample_detail", args=[pending.pk]))

        assert response.status_code == 404
        assert response.json()["message"] == "Sample not found"

    def test_creator_sees_own_pending_sample(self, client, creator, make_sample):
        pending = make_sample(status="pending")
        client.force_login(creator)

        response = client.get(reverse("core_api:sample_detail", args=[pending.pk]))

        assert response.status_code == 200
        assert response.json()["status"] == "pending"

    def test_browse_pages(self, client, make_sample):
        loop = make_sample(title="Loop")
        shot = make_sample(title="Shot", sample_type="oneshot")

        loops = client.get(reverse("core:loops"))
        oneshots = client.get(reverse("core:oneshots"))

        assert list(loops.context["samples"]) == [loop]
        assert list(oneshots.context["samples"]) == [shot]

    def test_home_page(self, client, sample):
        response = client.get(reverse("core:home"))

        assert response.status_code == 200
        assert sample in response.context["latest_loops"]


# =============================================================================
# Uploads
# =============================================================================


@pytest.mark.django_db
class TestUploads:
    """Tests for /api/samples/upload and the dashboard upload form"""

    def upload_data(self, audio_file, /, **overrides):
        data = {
            "title": "New Loop",
            "sample_type": "loop",
            "genre": "Trap",
            "bpm": "140",
            "key": "C Minor",
            "price": "299",
            "description": "Dark trap loop",
            "audio_file": audio_file("new_loop.wav"),
        }
        data.update(overrides)
        return data

    def test_approved_creator_upload_is_pending(self, client, creator, audio_file):
        client.force_login(creator)

        response = client.post(reverse("core_api:sample_upload"), self.upload_data(audio_file))

        assert response.status_code == 201
        sample = Sample.objects.get(title="New Loop")
        assert sample.status == "pending"
        assert sample.creator == creator

    def test_unapproved_user_cannot_upload(self, buyer_client, audio_file):
        response = buyer_client.post(reverse("core_api:sample_upload"), self.upload_data(audio_file))

        assert response.status_code == 403
        assert not Sample.objects.exists()

    def test_wrong_extension_is_rejected(self, client, creator, audio_file):
        client.force_login(creator)

        response = client.post(
            reverse("core_api:sample_upload"),
            self.upload_data(audio_file, audio_file=audio_file("notes.txt")),
        )

        assert response.status_code == 400
        assert not Sample.objects.exists()

    def test_oversized_audio_is_rejected(self, client, creator, audio_file, settings):
        settings.MAX_AUDIO_UPLOAD_SIZE = 4
        client.force_login(creator)

        response = client.post(reverse("core_api:sample_upload"), self.upload_data(audio_file))

        assert response.status_code == 400

    def test_dashboard_upload_form(self, client, creator, audio_file):
        client.force_login(creator)

        response = client.post(reverse("core:sample_upload"), self.upload_data(audio_file))

        assert response.status_code == 302
        assert response.url.endswith("?tab=my-uploads")
        assert Sample.objects.filter(creator=creator, status="pending").count() == 1

    def test_my_uploads_include_status(self, client, creator, make_sample):
        make_sample(status="pending")
        client.force_login(creator)

        response = client.get(reverse("core_api:my_uploads"))

        assert response.json()[0]["status"] == "pending"


# =============================================================================
# Downloads
# =============================================================================


@pytest.mark.django_db
class TestDownloads:

    @pytest.fixture
    def order(self, buyer, sample):
        add_to_cart(buyer, sample.pk)
        return place_order(buyer, "123456789012")

    def test_buyer_can_download(self, buyer_client, order, sample):
        response = buyer_client.get(
            reverse("core_api:download", kwargs={"pk": order.pk, "sample_id": sample.pk})
        )

        assert response.status_code == 200
        assert 'filename="Trap Loop.wav"' in response["Content-Disposition"]

    def test_other_users_get_404(self, client, make_user, order, sample):
        client.force_login(make_user("snoop@example.com"))

        response = client.get(
            reverse("core_api:download", kwargs={"pk": order.pk, "sample_id": sample.pk})
        )

        assert response.status_code == 404

    def test_sample_not_in_order(self, buyer_client, order, make_sample):
        other = make_sample(title="Other")

        response = buyer_client.get(
            reverse("core_api:download", kwargs={"pk": order.pk, "sample_id": other.pk})
        )

        assert response.status_code == 404
