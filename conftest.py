"""Shared pytest fixtures for the LusionBeatz apps."""

from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile


User = get_user_model()

PASSWORD = "testpass123"


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    """Keep uploaded files out of the project directory."""
    settings.MEDIA_ROOT = tmp_path / "media"
    return settings.MEDIA_ROOT


def audio_upload(name="beat.wav", content=b"RIFF0000WAVEfmt "):
    return SimpleUploadedFile(name, content, content_type="audio/wav")


@pytest.fixture
def make_user(db):
    """Factory for users that log in with their email."""

    def _make_user(email, name="Test User", **extra):
        extra.setdefault("is_verified", True)
        return User.objects.create_user(
            username=email,
            email=email,
            password=PASSWORD,
            name=name,
            **extra,
        )

    return _make_user


@pytest.fixture
def buyer(make_user):
    """A verified buyer."""
    return make_user("buyer@example.com", name="Asha Buyer")


@pytest.fixture
def creator(make_user):
    """A verified creator approved to upload."""
    return make_user("creator@example.com", name="Beat Maker", approved_creator=True)


@pytest.fixture
def admin_user(make_user):
    """A platform admin."""
    return make_user("admin@example.com", name="Admin", role="admin", is_staff=True)


@pytest.fixture
def make_sample(db, creator):
    """Factory for samples; approved unless told otherwise."""
    from core.models import Sample

    def _make_sample(title="Trap Loop", price="100.00", status="approved", **extra):
        extra.setdefault("creator", creator)
        extra.setdefault("sample_type", "loop")
        return Sample.objects.create(
            title=title,
            price=Decimal(price),
            status=status,
            audio_file=audio_upload(f"{title.lower().replace(' ', '_')}.wav"),
            **extra,
        )

    return _make_sample


@pytest.fixture
def sample(make_sample):
    """An approved loop priced at Rs.100."""
    return make_sample()


@pytest.fixture
def buyer_client(client, buyer):
    client.force_login(buyer)
    return client


@pytest.fixture
def admin_client(client, admin_user):
    """Django test client logged in as the platform admin (overrides pytest-django's)."""
    client.force_login(admin_user)
    return client


@pytest.fixture
def audio_file():
    """Factory for an uploaded .wav file."""
    return audio_upload
