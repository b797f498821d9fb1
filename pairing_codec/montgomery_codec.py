"""Montgomery-Binary point codec (circom `.zkey` point and field sections).

Each coordinate limb is a W-byte little-endian Montgomery residue; G1 is `x || y` and G2 is
`x0 || x1 || y0 || y1`. All-zero coordinates are the point at infinity.
"""

from concurrent.futures import ThreadPoolExecutor
from functools import partial

from .errors import CodecError, TruncatedInput, UnexpectedTrailingElement, at_index
from .field import fq2_coeffs, n_of
from .types import Checked


def _exact(buf, size, what):  # Whole buffer is exactly `size` bytes.
    buf = bytes(buf)
    if len(buf) < size:
        raise TruncatedInput(f"{what}: expected {size} bytes, got {len(buf)}")
    if len(buf) > size:
        raise UnexpectedTrailingElement(f"{what}: expected {size} bytes, got {len(buf)}")
    return buf


def _limbs(buf, fq, k):  # Split into k Montgomery limbs.
    w = fq.BYTES
    return [fq.from_montgomery_bytes(buf[i * w : (i + 1) * w]) for i in range(k)]


def decode_g1(buf, curve, mode=Checked):
    x, y = _limbs(_exact(buf, curve.g1_uncompressed_size, "G1 point"), curve.fq, 2)
    if x == 0 and y == 0:
        return None
    return curve.check_g1(curve.g1_point(x, y), mode)


def decode_g2(buf, curve, mode=Checked):
    x0, x1, y0, y1 = _limbs(_exact(buf, curve.g2_uncompressed_size, "G2 point"), curve.fq, 4)
    if x0 == 0 and x1 == 0 and y0 == 0 and y1 == 0:
        return None
    return curve.check_g2(curve.g2_point(x0, x1, y0, y1), mode)


def _decode_at(decode_one, curve, mode, item):  # Worker body: decode one chunk, tag errors with its index.
    i, chunk = item
    try:
        return decode_one(chunk, curve, mode)
    except CodecError as e:
        raise at_index(i, e) from e


def _decode_vec(decode_one, size, buf, n, curve, mode, workers):
    """Decode `n` fixed-size points, optionally on a thread pool.

    Results come back in input order (`Executor.map`). The first failing chunk raises out
    of the batch; outstanding chunks are cancelled and no partial result is returned.
    """
    if n < 0:
        raise ValueError("point count must be non-negative")
    buf = _exact(buf, size * n, f"batch of {n} points")
    items = [(i, buf[i * size : (i + 1) * size]) for i in range(n)]
    job = partial(_decode_at, decode_one, curve, mode)
    if n <= 1 or workers == 1:
        return [job(it) for it in items]
    pool = ThreadPoolExecutor(max_workers=workers)
    try:
        return list(pool.map(job, items))
    finally:
        pool.shutdown(wait=True, cancel_futures=True)


def decode_g1_vec(buf, n, curve, mode=Checked, workers=None) -> list:
    return _decode_vec(decode_g1, curve.g1_uncompressed_size, buf, n, curve, mode, workers)


def decode_g2_vec(buf, n, curve, mode=Checked, workers=None) -> list:
    return _decode_vec(decode_g2, curve.g2_uncompressed_size, buf, n, curve, mode, workers)


# Stream helpers over wire.ByteReader.

def read_fq(r, curve):
    return curve.fq.from_montgomery_bytes(r.take(curve.W))


def read_fr(r, curve):
    return curve.fr.from_montgomery_bytes(r.take(curve.fr.BYTES))


def read_fr_zkey(r, curve):  # Scalar that needs the extra reduction (zkey coefficient sections).
    return curve.fr.from_montgomery_bytes_zkey(r.take(curve.fr.BYTES))


def read_g1(r, curve, mode=Checked):
    return decode_g1(r.take(curve.g1_uncompressed_size), curve, mode)


def read_g2(r, curve, mode=Checked):
    return decode_g2(r.take(curve.g2_uncompressed_size), curve, mode)


def read_g1_vec(r, n, curve, mode=Checked, workers=None) -> list:
    return decode_g1_vec(r.take(n * curve.g1_uncompressed_size), n, curve, mode, workers)


def read_g2_vec(r, n, curve, mode=Checked, workers=None) -> list:
    return decode_g2_vec(r.take(n * curve.g2_uncompressed_size), n, curve, mode, workers)


def encode_g1(p, curve) -> bytes:
    if p is None:
        return bytes(curve.g1_uncompressed_size)
    return b"".join(curve.fq(n_of(c)).to_montgomery_bytes() for c in p)


def encode_g2(p, curve) -> bytes:
    if p is None:
        return bytes(curve.g2_uncompressed_size)
    x, y = p
    return b"".join(curve.fq(c).to_montgomery_bytes() for c in fq2_coeffs(x) + fq2_coeffs(y))
