"""Unit tests for the base-36 keysound id codec."""

import pytest

from bmskeys.errors import KeysoundIdError
from bmskeys.keysound_id import MAX_ID, decode, encode, parse_id_list


def test_decode_simple_tokens() -> None:
    assert decode("00") == 0
    assert decode("01") == 1
    assert decode("0Z") == 35
    assert decode("10") == 36
    assert decode("ZZ") == 1295


def test_decode_is_case_insensitive() -> None:
    assert decode("s2") == decode("S2") == 28 * 36 + 2


def test_decode_accepts_any_length() -> None:
    assert decode("Z") == 35
    assert decode("100") == 1296


@pytest.mark.parametrize("token", ["", "0$", " 1", "+1", "1_0", "-1", "é1"])
def test_decode_rejects_non_alphanumeric(token: str) -> None:
    with pytest.raises(KeysoundIdError):
        decode(token)


def test_decode_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        decode("!!")


def test_encode_pads_to_two_characters() -> None:
    assert encode(0) == "00"
    assert encode(7) == "07"
    assert encode(35) == "0Z"
    assert encode(MAX_ID) == "ZZ"


def test_encode_is_upper_case() -> None:
    assert encode(decode("s2")) == "S2"


@pytest.mark.parametrize("keysound_id", [-1, MAX_ID + 1, 5000])
def test_encode_rejects_out_of_range(keysound_id: int) -> None:
    with pytest.raises(KeysoundIdError):
        encode(keysound_id)


def test_every_id_round_trips() -> None:
    for keysound_id in range(MAX_ID + 1):
        token = encode(keysound_id)
        assert len(token) == 2
        assert decode(token) == keysound_id


def test_parse_id_list_strips_and_skips_blanks() -> None:
    assert parse_id_list("0B, 0c,,0D ") == [11, 12, 13]


def test_parse_id_list_rejects_bad_token() -> None:
    with pytest.raises(KeysoundIdError):
        parse_id_list("0B,??")
