import pytest

from services.extraction import luhn15, luhn_check_digit


VALID_IMEIS = [
    "490154203237518",
    "359605068234106",
    "356938035643809",
    "000000000000000",
]

INVALID_IMEIS = [
    "490154203237519",
    "359605068234107",
    "356938035643808",
    "123456789012345",
]


@pytest.mark.parametrize("imei", VALID_IMEIS)
def test_known_valid_imeis(imei):
    assert luhn15(imei) is True


@pytest.mark.parametrize("imei", INVALID_IMEIS)
def test_known_invalid_imeis(imei):
    assert luhn15(imei) is False


@pytest.mark.parametrize("value", ["", "49015420323751", "4901542032375180", "49015420323751A", "４９０１５４２０３２３７５１８"])
def test_rejects_anything_but_fifteen_ascii_digits(value):
    assert luhn15(value) is False


def test_check_digit_matches_validator():
    for body in ("49015420323751", "35960506823410", "01234567890123", "99999999999999"):
        imei = body + luhn_check_digit(body)
        assert luhn15(imei)
        wrong = body + str((int(imei[-1]) + 1) % 10)
        assert not luhn15(wrong)


def test_check_digit_rejects_bad_body():
    with pytest.raises(ValueError):
        luhn_check_digit("1234")

