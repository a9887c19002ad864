from hypothesis import given
from hypothesis import strategies as st

from Lexid.base32 import ALPHABET, is_canonical
from Lexid.ulid import MAX_TIMESTAMP, Ulid, compare

raw_16 = st.binary(min_size=16, max_size=16)
timestamps = st.integers(min_value=0, max_value=MAX_TIMESTAMP)
randomness = st.binary(min_size=10, max_size=10)


@given(raw_16)
def test_bytes_and_text_survive_round_trip(b: bytes):
    u = Ulid.from_bytes(b)
    assert u.to_bytes() == b
    text = str(u)
    assert len(text) == 26
    assert all(ch in ALPHABET for ch in text)
    assert is_canonical(text)
    assert Ulid.parse(text) == u


@given(timestamps, randomness, timestamps, randomness)
def test_order_is_timestamp_then_randomness(ta: int, ra: bytes, tb: int, rb: bytes):
    a = Ulid.new(ta, ra)
    b = Ulid.new(tb, rb)
    if ta != tb:
        expected = -1 if ta < tb else 1
    else:
        expected = (ra > rb) - (ra < rb)
    assert compare(a, b) == expected
    # text order agrees with value order
    assert ((str(a) > str(b)) - (str(a) < str(b))) == expected


@given(raw_16, raw_16)
def test_equal_values_hash_equal(x: bytes, y: bytes):
    a, b = Ulid(x), Ulid(y)
    if a == b:
        assert hash(a) == hash(b)
    assert (a == b) == (x == y)
