import pytest

from apps.currency.denominations import Denomination, is_valid_denomination
from apps.currency.formatting import format_rupiah, amount_to_words, denomination_text


class TestFormatRupiah:
    """Test id-ID currency formatting."""

    @pytest.mark.parametrize('amount,expected', [
        (0, 'Rp 0'),
        (1000, 'Rp 1.000'),
        (50000, 'Rp 50.000'),
        (120000, 'Rp 120.000'),
        (1500000, 'Rp 1.500.000'),
    ])
    def test_format(self, amount, expected):
        assert format_rupiah(amount) == expected


class TestAmountToWords:
    """Test Indonesian numeral rendering."""

    @pytest.mark.parametrize('amount,expected', [
        (0, 'nol rupiah'),
        (1000, 'seribu rupiah'),
        (2000, 'dua ribu rupiah'),
        (11000, 'sebelas ribu rupiah'),
        (50000, 'lima puluh ribu rupiah'),
        (100000, 'seratus ribu rupiah'),
        (120000, 'seratus dua puluh ribu rupiah'),
        (175500, 'seratus tujuh puluh lima ribu lima ratus rupiah'),
        (1000000, 'satu juta rupiah'),
        (1500000, 'satu juta lima ratus ribu rupiah'),
        (2345000, 'dua juta tiga ratus empat puluh lima ribu rupiah'),
        (1000000000, 'satu milyar rupiah'),
    ])
    def test_words(self, amount, expected):
        assert amount_to_words(amount) == expected

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            amount_to_words(-1000)

    def test_every_denomination_has_text(self):
        assert denomination_text(Denomination.RP_20000) == 'dua puluh ribu rupiah'
        for value in Denomination.values:
            assert denomination_text(value).endswith(' rupiah')


class TestDenominations:

    def test_fixed_set(self):
        assert sorted(Denomination.values) == [1000, 2000, 5000, 10000, 20000, 50000, 100000]

    @pytest.mark.parametrize('value', [0, -1000, 500, 75000, '50000', 50000.0, True, None])
    def test_invalid_values(self, value):
        assert not is_valid_denomination(value)

    def test_valid_value(self):
        assert is_valid_denomination(50000)
