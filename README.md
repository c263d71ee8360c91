# gravsphincs

Gravity-SPHINCS stateless hash-based signatures in pure Python. The scheme is
built from Haraka, SHA-256 and AES-256 in counter mode. The package has these
modules:

- `gravsphincs.params`: the `Params` dataclass, the presets `SMALL`, `MEDIUM`,
  `LARGE` and `DEFAULT` (which is `SMALL`), and the error types
- `gravsphincs.aes`: AES-256-CTR keystream (`aesctr256`, `aesctr256_zeroiv`)
  and a single AES round (`aes_round`)
- `gravsphincs.haraka`: Haraka-256 and Haraka-512, with chained and batched
  variants
- `gravsphincs.hashes`: hash functions on 32-byte values and the `Address`
  type
- `gravsphincs.ltree`: L-tree compression of any number of hashes
- `gravsphincs.wots`: WOTS one-time signatures with an L-tree public key
- `gravsphincs.merkle`: Merkle trees, authentication paths and "octopus"
  multi-paths, and `MerkleSignature`
- `gravsphincs.pors`: PORS and PORST few-time signatures, and
  `OctoporstSignature`
- `gravsphincs.gravity`: the hypertree on top of a cached subtree, with
  `SecretKey`, `PublicKey` and `Signature`
- `gravsphincs.sign`: a `crypto_sign`-style API over byte strings
- `gravsphincs.batch`: Merkle batching of many messages under one root
- `gravsphincs.debug`: text formatting of intermediate values
- `gravsphincs.gen_ivs`: the `gravsphincs-gen-ivs` command

## Parameters

`Params` takes `pors_k` (PORST subset size), `merkle_h` (height of each
hypertree Merkle tree), `gravity_d` (number of hypertree layers),
`gravity_c` (height of the cached top tree) and `pors_tau` (PORST tree
height, default 16), plus an optional `name`. Invalid combinations raise
`ValueError`. `secret_key_size()`, `signature_size()` and the
`public_key_size` property give the byte sizes used by the signing API.

Everything runs in pure Python. With `pors_tau=16` every signature derives
and hashes 65 536 PORS values, and the presets build caches of thousands of
Merkle trees, so they are very slow. Small parameter sets are the practical
choice for experiments and tests.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Usage

```python
from gravsphincs.params import Params, VerificationError
from gravsphincs.sign import crypto_sign_keypair, crypto_sign, crypto_sign_open

params = Params(pors_k=4, merkle_h=2, gravity_d=2, gravity_c=2, pors_tau=6)

pk, sk = crypto_sign_keypair(params)
sm = crypto_sign(params, b"hello", sk)

assert crypto_sign_open(params, sm, pk) == b"hello"
```

`crypto_sign_keypair` returns `(public_key, secret_key)` as bytes, with seed
and salt taken from `os.urandom`. `crypto_sign` returns the message followed
by a fixed-size signature record of `params.signature_size()` bytes.
`crypto_sign_open` returns the message, or raises `VerificationError` if the
signed message is too short, malformed or does not verify; a public key of
the wrong length raises `ValueError`.

All scheme errors derive from `GravityError`:

- `VerificationError` for malformed or invalid signatures
- `BatchError` for a full batch, an empty batch or an index out of range

### Lower-level API

`gravity_gensk(params, seed, salt)` builds a `SecretKey` from a 32-byte seed
and salt; `gravity_genpk(sk)` gives its `PublicKey`. `gravity_sign(sk, msg)`
signs a 32-byte message hash and returns a `Signature`;
`gravity_verify(pk, sign, msg)` returns `None` or raises `VerificationError`.
`Signature.to_bytes()` and `gravity_loadsign(params, data)` convert
signatures to a compact encoding and back (the octopus length follows from
the size). `SecretKey.to_bytes()` and `gravity_loadsk(params, data)` do the
same for secret keys.

### Batching

```python
from gravsphincs.batch import BatchBuffer, batch_compress_auth

buf = BatchBuffer()
i = buf.append(b"first")
buf.append(b"second")
group = buf.group()
auth = group.extract(i)
assert batch_compress_auth(auth, b"first") == group.root
```

A batch holds up to 1024 messages; unused leaves repeat the first message.
`group.root` is a 32-byte hash that can be signed with `gravity_sign`.

### Tracing

`gravsphincs.sign` logs intermediate values (seed, salt, keys, message hash,
lengths) at `DEBUG` level on the `gravsphincs.sign` logger, formatted with
`format_bytes` and `format_int` from `gravsphincs.debug`.

## Test vectors

The `gravsphincs-gen-ivs` command builds three key pairs whose seeds and salts
are filled with the bytes `0x00`, `0x01` and `0xff`. It signs a message with
each key and verifies the result:

```
gravsphincs-gen-ivs
gravsphincs-gen-ivs "some message"
gravsphincs-gen-ivs -v --pors-k 4 --pors-tau 6 --merkle-h 2 --gravity-d 2 --gravity-c 2
```

With no message it signs the 32 bytes `00 01 .. 1f`. The options
`--pors-k`, `--pors-tau`, `--merkle-h`, `--gravity-d` and `--gravity-c` set
the parameters (defaults: the `DEFAULT` preset). `-v`/`--verbose` prints the
traced intermediate values to standard output. The command exits with status
1 and an error message if signing or verification fails.

## What it does not do

There is no command for generating keys or signing and verifying files, and
no key storage: keys and signatures are returned as bytes or objects, and
keeping them is up to the caller.