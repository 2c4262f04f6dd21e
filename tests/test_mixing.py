import hashlib

from sha256crypt.mixing import digest, dispatch, mixer, multiply_bytes, repeat_bytes


def test_digest_hashes_concatenated_spans():
    assert digest(b"ab", b"", b"c") == hashlib.sha256(b"abc").digest()


def test_digest_of_no_spans_is_empty_hash():
    assert digest() == hashlib.sha256(b"").digest()


def test_repeat_bytes_cycles_and_truncates():
    assert repeat_bytes(b"abc", 7) == b"abcabca"
    assert repeat_bytes(b"abc", 2) == b"ab"
    assert repeat_bytes(b"abc", 0) == b""


def test_repeat_bytes_longer_than_digest():
    block = bytes(range(32))
    assert repeat_bytes(block, 70) == block * 2 + block[:6]


def test_multiply_bytes():
    assert multiply_bytes(b"pw", 3) == [b"pw", b"pw", b"pw"]
    assert multiply_bytes(b"pw", 0) == []


def test_mixer_walks_bits_from_lsb():
    # 5 == 0b101
    assert mixer(5, b"B", b"pwd") == [b"B", b"pwd", b"B"]
    assert mixer(12, b"B", b"pwd") == [b"pwd", b"pwd", b"B", b"B"]
    assert mixer(0, b"B", b"pwd") == []


def test_dispatch_round_zero():
    assert dispatch(0, b"C", b"P", b"S") == [b"C", b"P"]


def test_dispatch_odd_round_opens_with_password_sequence():
    assert dispatch(1, b"C", b"P", b"S") == [b"P", b"S", b"P", b"C"]


def test_dispatch_skips_salt_on_multiples_of_three():
    assert dispatch(3, b"C", b"P", b"S") == [b"P", b"P", b"C"]


def test_dispatch_skips_password_on_multiples_of_seven():
    assert dispatch(14, b"C", b"P", b"S") == [b"C", b"S", b"P"]
    assert dispatch(21, b"C", b"P", b"S") == [b"P", b"C"]
