import pytest

from gravsphincs.gen_ivs import keypair_from_byte, main, run
from gravsphincs.params import HASH_SIZE, Params
from gravsphincs.sign import crypto_sign_open

TINY = Params(pors_k=2, merkle_h=1, gravity_d=1, gravity_c=0, pors_tau=2)
TINY_ARGS = [
    "--pors-k", "2",
    "--pors-tau", "2",
    "--merkle-h", "1",
    "--gravity-d", "1",
    "--gravity-c", "0",
]


@pytest.fixture(scope="module")
def signed_messages():
    return run(TINY, b"hello")


def test_keypair_from_byte_layout():
    pk, sk = keypair_from_byte(TINY, 0x01)
    assert sk[:2 * HASH_SIZE] == bytes([0x01]) * (2 * HASH_SIZE)
    assert len(sk) == TINY.secret_key_size()
    assert sk[-HASH_SIZE:] == pk


def test_keypair_from_byte_is_deterministic():
    pk_first, sk_first = keypair_from_byte(TINY, 0x00)
    pk_second, sk_second = keypair_from_byte(TINY, 0x00)
    assert len(pk_first) == HASH_SIZE
    assert sk_first[:2 * HASH_SIZE] == bytes(2 * HASH_SIZE)
    assert pk_first == pk_second
    assert sk_first == sk_second


def test_keypair_from_byte_rejects_non_byte():
    with pytest.raises(ValueError):
        keypair_from_byte(TINY, 256)


def test_run_produces_three_valid_signatures(signed_messages):
    assert len(signed_messages) == 3
    assert all(sm.startswith(b"hello") for sm in signed_messages)
    assert len(set(signed_messages)) == 3


def test_run_output_opens_under_fixed_key(signed_messages):
    pk, _ = keypair_from_byte(TINY, 0xFF)
    assert crypto_sign_open(TINY, signed_messages[2], pk) == b"hello"


def test_main_verbose_prints_trace(capsys):
    assert main(TINY_ARGS + ["--verbose", "hi"]) == 0
    out = capsys.readouterr().out
    assert "crypto_sign: H(m) (32):" in out
    assert "crypto_sign: mlen: 2" in out


def test_main_rejects_invalid_params():
    with pytest.raises(SystemExit):
        main(["--pors-k", "0", "--pors-tau", "2"])