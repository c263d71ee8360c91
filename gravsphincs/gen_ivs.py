"""Sign and verify a message under keys derived from fixed bytes, for test vectors."""

from __future__ import annotations

import argparse
import logging
import sys

from gravsphincs.gravity import gravity_genpk, gravity_gensk
from gravsphincs.params import DEFAULT, HASH_SIZE, GravityError, Params
from gravsphincs.sign import crypto_sign, crypto_sign_open

KEY_BYTES = (0x00, 0x01, 0xFF)


def keypair_from_byte(params: Params, value: int) -> tuple[bytes, bytes]:
    """Key pair whose seed and salt are ``value`` repeated; return (pk, sk) bytes."""
    if not 0 <= value <= 0xFF:
        raise ValueError("value must be a byte")
    fill = bytes([value]) * HASH_SIZE
    sk = gravity_gensk(params, fill, fill)
    return gravity_genpk(sk).k, sk.to_bytes()


def run(params: Params, message: bytes) -> list[bytes]:
    """Sign and open ``message`` under each fixed key; return the signed messages."""
    signed = []
    for value in KEY_BYTES:
        pk, sk = keypair_from_byte(params, value)
        try:
            sm = crypto_sign(params, message, sk)
        except GravityError as exc:
            raise GravityError("crypto_sign failed") from exc
        try:
            crypto_sign_open(params, sm, pk)
        except GravityError as exc:
            raise GravityError("crypto_sign_open failed") from exc
        signed.append(sm)
    return signed


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="gravsphincs-gen-ivs",
        description="Sign a message under fixed keys and print intermediate values.",
    )
    parser.add_argument("message", nargs="?", help="message to sign")
    parser.add_argument("--pors-k", type=int, default=DEFAULT.pors_k)
    parser.add_argument("--pors-tau", type=int, default=DEFAULT.pors_tau)
    parser.add_argument("--merkle-h", type=int, default=DEFAULT.merkle_h)
    parser.add_argument("--gravity-d", type=int, default=DEFAULT.gravity_d)
    parser.add_argument("--gravity-c", type=int, default=DEFAULT.gravity_c)
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="print intermediate values"
    )
    args = parser.parse_args(argv)

    try:
        params = Params(
            pors_k=args.pors_k,
            merkle_h=args.merkle_h,
            gravity_d=args.gravity_d,
            gravity_c=args.gravity_c,
            pors_tau=args.pors_tau,
        )
    except ValueError as exc:
        parser.error(str(exc))

    if args.message is not None:
        message = args.message.encode()
    else:
        message = bytes(range(HASH_SIZE))

    package_logger = logging.getLogger("gravsphincs")
    handler = None
    old_level = package_logger.level
    if args.verbose:
        handler = logging.StreamHandler(sys.stdout)
        handler.terminator = ""
        handler.setFormatter(logging.Formatter("%(message)s"))
        package_logger.addHandler(handler)
        package_logger.setLevel(logging.DEBUG)

    try:
        run(params, message)
    except GravityError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    finally:
        if handler is not None:
            package_logger.removeHandler(handler)
            package_logger.setLevel(old_level)
    return 0


if __name__ == "__main__":
    sys.exit(main())