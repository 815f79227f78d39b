import random

import pytest

from saltybox.varmor import ArmorError, unwrap, wrap

ALL_BYTES_WRAPPED = (
    "saltybox1:AAECAwQFBgcICQoLDA0ODxAREhMUFRYXGBkaGxwdHh8gISIjJCUmJygpKissLS4vMDEy"
    "MzQ1Njc4OTo7PD0-P0BBQkNERUZHSElKS0xNTk9QUVJTVFVWV1hZWltcXV5fYGFiY2RlZmdoaWpr"
    "bG1ub3BxcnN0dXZ3eHl6e3x9fn-AgYKDhIWGh4iJiouMjY6PkJGSk5SVlpeYmZqbnJ2en6ChoqOk"
    "paanqKmqq6ytrq-wsbKztLW2t7i5uru8vb6_wMHCw8TFxsfIycrLzM3Oz9DR0tPU1dbX2Nna29zd"
    "3t_g4eLj5OXm5-jp6uvs7e7v8PHy8_T19vf4-fr7_P3-_w"
)


@pytest.mark.parametrize("text", ["", "test"])
def test_preserves_strings(text):
    assert unwrap(wrap(text.encode())).decode() == text


def test_preserves_random_bytes():
    data = random.Random(0).randbytes(100000)
    assert unwrap(wrap(data)) == data


def test_truncated():
    with pytest.raises(ArmorError) as excinfo:
        unwrap("")
    assert str(excinfo.value) == "input size smaller than magic marker; likely truncated"


def test_wrong_version():
    with pytest.raises(ArmorError) as excinfo:
        unwrap("saltybox999999:...")
    assert str(excinfo.value) == "input claims to be saltybox, but not a version we support"


def test_not_saltybox():
    with pytest.raises(ArmorError) as excinfo:
        unwrap("something not looking like saltybox data")
    assert str(excinfo.value) == "input unrecognized as saltybox data"


def test_all_byte_values():
    all_bytes = bytes(range(256))
    assert unwrap(wrap(all_bytes)) == all_bytes
    assert wrap(all_bytes) == ALL_BYTES_WRAPPED


def test_wrap_has_no_padding_or_whitespace():
    wrapped = wrap(b"a")
    assert wrapped == "saltybox1:YQ"


@pytest.mark.parametrize(
    "armored",
    ["saltybox1:!!!!", "saltybox1:AA==", "saltybox1:A", "saltybox1:ab+/", "saltybox1:YQ YQ"],
)
def test_invalid_base64(armored):
    with pytest.raises(ArmorError, match="^base64 decoding failed"):
        unwrap(armored)


def test_empty_body():
    assert unwrap("saltybox1:") == b""