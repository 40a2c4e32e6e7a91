"""Tests for the order tag codec (ordering/codec.py)."""

from __future__ import annotations

import pytest

from implicit_order.ordering.codec import OrderTag, decode, encode


class TestDecode:
    def test_two_digit_prefix(self) -> None:
        assert decode("[07] Buy milk") == OrderTag(7)
        assert decode("[99] Last") == OrderTag(99)
        assert decode("[00] First") == OrderTag(0)

    def test_single_digit_prefix(self) -> None:
        assert decode("[7] Buy milk") == OrderTag(7)

    def test_no_prefix_is_absent(self) -> None:
        assert decode("Buy milk") is None
        assert decode("") is None

    def test_prefix_must_be_at_start(self) -> None:
        assert decode(" [07] Buy milk") is None
        assert decode("Buy [07] milk") is None

    def test_malformed_tokens_are_absent(self) -> None:
        assert decode("[100] Too big") is None
        assert decode("[-1] Negative") is None
        assert decode("[ab] Letters") is None
        assert decode("[] Empty") is None


class TestEncode:
    def test_prepends_when_untagged(self) -> None:
        assert encode("Buy milk", 7) == "[07] Buy milk"

    def test_replaces_existing_token(self) -> None:
        assert encode("[03] Buy milk", 12) == "[12] Buy milk"

    def test_replaces_single_digit_and_dash_tokens(self) -> None:
        assert encode("[3] Buy milk", 12) == "[12] Buy milk"
        assert encode("[-1] Buy milk", 5) == "[05] Buy milk"

    def test_rest_of_text_is_verbatim(self) -> None:
        text = "[03]  spaced [04] inner  "
        assert encode(text, 40) == "[40]  spaced [04] inner  "

    def test_idempotent(self) -> None:
        once = encode("Buy milk", 42)
        assert encode(once, 42) == once

    def test_accepts_order_tag(self) -> None:
        assert encode("Buy milk", OrderTag(1)) == "[01] Buy milk"

    def test_rejects_out_of_range(self) -> None:
        with pytest.raises(ValueError):
            encode("Buy milk", 100)
        with pytest.raises(ValueError):
            encode("Buy milk", -1)


class TestRoundTrip:
    @pytest.mark.parametrize("text", ["Buy milk", "[03] Buy milk", "[7] x", ""])
    def test_decode_of_encode(self, text: str) -> None:
        for value in (0, 1, 9, 10, 50, 98, 99):
            assert decode(encode(text, value)) == OrderTag(value)


class TestOrderTag:
    def test_str_is_zero_padded(self) -> None:
        assert str(OrderTag(5)) == "[05]"

    def test_ordering(self) -> None:
        assert OrderTag(3) < OrderTag(10)

    def test_rejects_non_int(self) -> None:
        with pytest.raises(TypeError):
            OrderTag("5")  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            OrderTag(True)
