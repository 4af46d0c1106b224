"""Tests for the earnings split and UTR validation helpers."""

from decimal import Decimal

import pytest

from core.forms import UTRForm, normalize_utr, split_earnings


class TestSplitEarnings:

    @pytest.mark.parametrize("price, creator, platform", [
        ("499.00", "399.20", "99.80"),
        ("100.00", "80.00", "20.00"),
        ("0.00", "0.00", "0.00"),
        # 0.006 rounds half up to one paisa
        ("0.03", "0.02", "0.01"),
    ])
    def test_default_commission(self, price, creator, platform):
        assert split_earnings(Decimal(price)) == (Decimal(creator), Decimal(platform))

    def test_shares_always_add_up_to_price(self):
        for paise in range(0, 1000, 7):
            price = Decimal(paise) / 100
            creator_share, platform_share = split_earnings(price)
            assert creator_share + platform_share == price

    def test_custom_rate(self):
        assert split_earnings(Decimal("200"), rate=Decimal("0.10")) == (Decimal("180.00"), Decimal("20.00"))

    def test_commission_setting_is_used(self, settings):
        settings.PLATFORM_COMMISSION_RATE = Decimal("0.50")

        assert split_earnings(Decimal("10.00")) == (Decimal("5.00"), Decimal("5.00"))


class TestUTRForm:

    def test_surrounding_whitespace_is_stripped(self):
        form = UTRForm({"utr": "  123456789012 "})

        assert form.is_valid()
        assert form.cleaned_data["utr"] == "123456789012"

    @pytest.mark.parametrize("utr", ["", "12345", "      ", " 1234 "])
    def test_too_short(self, utr):
        form = UTRForm({"utr": utr})

        assert not form.is_valid()

    def test_too_long(self):
        form = UTRForm({"utr": "1" * 21})

        assert not form.is_valid()

    def test_inner_characters_are_kept(self):
        assert normalize_utr(" AB12-34cd ") == "AB12-34cd"


class TestTemplateFilters:

    def test_inr(self):
        from core.templatetags.marketplace_filters import inr

        assert inr(Decimal("1499")) == "₹1,499.00"
        assert inr("oops") == "₹0.00"

    def test_mask_account(self):
        from core.templatetags.marketplace_filters import mask_account

        assert mask_account("123456789012") == "••••••••9012"
        assert mask_account("") == ""
