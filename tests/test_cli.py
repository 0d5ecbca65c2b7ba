# tests/test_cli.py
import pytest

from cli import parse_price

def test_parse_price_accepts_amounts():
    assert parse_price("10") == 10
    assert isinstance(parse_price("10"), int)
    assert parse_price("12.5") == 12.5
    assert parse_price(" $1,200.00 ") == 1200
    assert parse_price("0") == 0

@pytest.mark.parametrize("raw", ["-1", "abc", "", "inf", "nan", "1e400"])
def test_parse_price_rejects_bad_input(raw):
    with pytest.raises(ValueError):
        parse_price(raw)
