from gravsphincs.debug import format_bytes, format_int, format_ints


def test_format_bytes_short():
    assert format_bytes("x", bytes(range(3))) == "x (3):\n000102\n\n"


def test_format_bytes_wraps_every_32_bytes():
    data = bytes(range(33))
    lines = format_bytes("label", data).split("\n")
    assert lines[0] == "label (33):"
    assert lines[1] == bytes(range(32)).hex()
    assert lines[2] == bytes([32]).hex()
    assert lines[3:] == ["", ""]


def test_format_bytes_exact_multiple_has_no_empty_line():
    data = bytes(64)
    lines = format_bytes("z", data).split("\n")
    assert lines[1:3] == [bytes(32).hex(), bytes(32).hex()]
    assert lines[3:] == ["", ""]


def test_format_bytes_empty():
    out = format_bytes("e", b"")
    assert out.startswith("e (0):\n")
    assert out.count("\n") == 3


def test_format_ints():
    assert format_ints("s", [1, 2]) == "s (2):\n1 2 \n\n"


def test_format_ints_counts_generator():
    out = format_ints("g", (i for i in range(4)))
    assert out.split("\n")[0] == "g (4):"
    assert out.split("\n")[1].split() == ["0", "1", "2", "3"]


def test_format_int():
    assert format_int("n", 5) == "n: 5\n\n"


def test_format_int_wraps_negative_as_unsigned():
    assert format_int("n", -1) == f"n: {0xFFFFFFFFFFFFFFFF}\n\n"