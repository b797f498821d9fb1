"""External binary layouts with big-endian limbs.

Format A is a fixed uncompressed layout: G1 `x || y`, G2 `x1 || x0 || y1 || y0`, and the
identity is never a legal value. Format B (gnark style) puts a 2-bit mode in the top of the
first byte of every point:

    00  uncompressed (2W / 4W bytes, all zero is the identity)
    01  point at infinity (W / 2W bytes, contents ignored)
    10  compressed, lexicographically smallest y
    11  compressed, lexicographically largest y

For G2 the high limb `x1` comes first and carries the flags.
"""

from dataclasses import dataclass, field

from .errors import CodecError, LengthMismatch, NotInSubgroup, NotOnCurve, UnexpectedInfinity, at_index
from .field import fq2_coeffs, fq2_lexicographically_largest, fq2_sqrt, n_of
from .types import Checked
from .wire import ByteReader, ByteWriter

_MASK = 0b11 << 6
_UNCOMPRESSED = 0b00 << 6
_INFINITY = 0b01 << 6
_SMALLEST = 0b10 << 6
_LARGEST = 0b11 << 6


@dataclass
class ExternalVerifyingKey:  # Groth16 verifying key as carried by the external layouts.
    alpha_g1: tuple
    beta_g2: tuple
    gamma_g2: tuple
    delta_g2: tuple
    ic: list = field(default_factory=list)  # one G1 point per public input, plus the constant term


def _limbs_be(data, fq, k):  # k big-endian limbs, each canonical.
    w = fq.BYTES
    return [fq.from_be_bytes(data[i * w : (i + 1) * w]) for i in range(k)]


def _g1_be(p, curve) -> bytes:
    return b"".join(curve.fq(n_of(c)).to_be_bytes() for c in p)


def _g2_be(p, curve) -> bytes:  # x1 || x0 || y1 || y0
    x, y = p
    (x0, x1), (y0, y1) = fq2_coeffs(x), fq2_coeffs(y)
    return b"".join(curve.fq(c).to_be_bytes() for c in (x1, x0, y1, y0))


# Format A (uncompressed, identity rejected).

def read_g1_uncompressed(r, curve, mode=Checked, what="G1 point"):
    x, y = _limbs_be(r.take(curve.g1_uncompressed_size), curve.fq, 2)
    if x == 0 and y == 0:
        raise UnexpectedInfinity(f"{what} is the identity, which this format does not carry")
    return curve.check_g1(curve.g1_point(x, y), mode, what)


def read_g2_uncompressed(r, curve, mode=Checked, what="G2 point"):
    x1, x0, y1, y0 = _limbs_be(r.take(curve.g2_uncompressed_size), curve.fq, 4)
    if x0 == 0 and x1 == 0 and y0 == 0 and y1 == 0:
        raise UnexpectedInfinity(f"{what} is the identity, which this format does not carry")
    return curve.check_g2(curve.g2_point(x0, x1, y0, y1), mode, what)


def decode_g1_uncompressed(buf, curve, mode=Checked):
    r = ByteReader(buf)
    p = read_g1_uncompressed(r, curve, mode)
    r.expect_end("G1 point")
    return p


def decode_g2_uncompressed(buf, curve, mode=Checked):
    r = ByteReader(buf)
    p = read_g2_uncompressed(r, curve, mode)
    r.expect_end("G2 point")
    return p


def encode_g1_uncompressed(p, curve) -> bytes:
    if p is None:
        raise UnexpectedInfinity("the uncompressed external layout cannot encode the identity")
    return _g1_be(p, curve)


def encode_g2_uncompressed(p, curve) -> bytes:
    if p is None:
        raise UnexpectedInfinity("the uncompressed external layout cannot encode the identity")
    return _g2_be(p, curve)


def read_verifying_key_uncompressed(r, curve, mode=Checked) -> ExternalVerifyingKey:
    """Read alpha_g1, beta_g1, beta_g2, gamma_g2, delta_g1, delta_g2, u32 count, count x G1.

    beta_g1 and delta_g1 are parsed (and validated) but not kept.
    """
    alpha = read_g1_uncompressed(r, curve, mode, "alpha_g1")
    read_g1_uncompressed(r, curve, mode, "beta_g1")
    beta = read_g2_uncompressed(r, curve, mode, "beta_g2")
    gamma = read_g2_uncompressed(r, curve, mode, "gamma_g2")
    read_g1_uncompressed(r, curve, mode, "delta_g1")
    delta = read_g2_uncompressed(r, curve, mode, "delta_g2")
    n = r.u32_be()
    ic = []
    for i in range(n):
        try:
            ic.append(read_g1_uncompressed(r, curve, mode, "IC point"))
        except CodecError as e:
            raise at_index(i, e) from e
    return ExternalVerifyingKey(alpha, beta, gamma, delta, ic)


def decode_verifying_key_uncompressed(buf, curve, mode=Checked) -> ExternalVerifyingKey:
    r = ByteReader(buf)
    vk = read_verifying_key_uncompressed(r, curve, mode)
    r.expect_end("verifying key")
    return vk


def encode_verifying_key_uncompressed(vk, curve, beta_g1, delta_g1) -> bytes:  # beta_g1/delta_g1 fill the unkept slots.
    w = ByteWriter()
    w.write(encode_g1_uncompressed(vk.alpha_g1, curve)).write(encode_g1_uncompressed(beta_g1, curve))
    w.write(encode_g2_uncompressed(vk.beta_g2, curve)).write(encode_g2_uncompressed(vk.gamma_g2, curve))
    w.write(encode_g1_uncompressed(delta_g1, curve)).write(encode_g2_uncompressed(vk.delta_g2, curve))
    w.u32_be(len(vk.ic))
    for p in vk.ic:
        w.write(encode_g1_uncompressed(p, curve))
    return w.getvalue()


# Format B (flagged).

def _flag(r):
    return r.peek(1)[0] & _MASK


def _unflag(data):  # Copy with the two mode bits cleared.
    data = bytearray(data)
    data[0] &= ~_MASK & 0xFF
    return bytes(data)


def read_g1_flagged(r, curve, mode=Checked, what="G1 point"):
    flag = _flag(r)
    if flag == _UNCOMPRESSED:
        x, y = _limbs_be(r.take(curve.g1_uncompressed_size), curve.fq, 2)
        if x == 0 and y == 0:
            return None
        return curve.check_g1(curve.g1_point(x, y), mode, what)
    data = r.take(curve.g1_compressed_size)
    if flag == _INFINITY:
        return None
    x = curve.fq.from_be_bytes(_unflag(data))
    y = (x * x * x + n_of(curve.b)).sqrt()
    if y is None:
        raise NotOnCurve(f"{what}: x has no matching y on the {curve.name} curve")
    if y.lexicographically_largest() != (flag == _LARGEST):
        y = -y
    p = curve.g1_point(x, y)
    if not curve.in_subgroup_g1(p):
        raise NotInSubgroup(f"{what} is not in the {curve.name} G1 subgroup")
    return p


def read_g2_flagged(r, curve, mode=Checked, what="G2 point"):
    flag = _flag(r)
    if flag == _UNCOMPRESSED:
        x1, x0, y1, y0 = _limbs_be(r.take(curve.g2_uncompressed_size), curve.fq, 4)
        if x0 == 0 and x1 == 0 and y0 == 0 and y1 == 0:
            return None
        return curve.check_g2(curve.g2_point(x0, x1, y0, y1), mode, what)
    data = r.take(curve.g2_compressed_size)
    if flag == _INFINITY:
        return None
    x1, x0 = _limbs_be(_unflag(data), curve.fq, 2)
    x = curve.fq2([x0.n, x1.n])
    y = fq2_sqrt(x * x * x + curve.b2, curve.fq)
    if y is None:
        raise NotOnCurve(f"{what}: x has no matching y on the {curve.name} twist")
    if fq2_lexicographically_largest(y, curve.fq) != (flag == _LARGEST):
        y = -y
    p = (x, y)
    if not curve.in_subgroup_g2(p):
        raise NotInSubgroup(f"{what} is not in the {curve.name} G2 subgroup")
    return p


def decode_g1_flagged(buf, curve, mode=Checked):
    r = ByteReader(buf)
    p = read_g1_flagged(r, curve, mode)
    r.expect_end("G1 point")
    return p


def decode_g2_flagged(buf, curve, mode=Checked):
    r = ByteReader(buf)
    p = read_g2_flagged(r, curve, mode)
    r.expect_end("G2 point")
    return p


def encode_g1_flagged(p, curve, compressed=True) -> bytes:
    if p is None:
        if not compressed:
            return bytes(curve.g1_uncompressed_size)
        out = bytearray(curve.g1_compressed_size)
        out[0] |= _INFINITY
        return bytes(out)
    if not compressed:
        return _g1_be(p, curve)
    x, y = p
    out = bytearray(curve.fq(n_of(x)).to_be_bytes())
    out[0] |= _LARGEST if curve.fq(n_of(y)).lexicographically_largest() else _SMALLEST
    return bytes(out)


def encode_g2_flagged(p, curve, compressed=True) -> bytes:
    if p is None:
        if not compressed:
            return bytes(curve.g2_uncompressed_size)
        out = bytearray(curve.g2_compressed_size)
        out[0] |= _INFINITY
        return bytes(out)
    if not compressed:
        return _g2_be(p, curve)
    x, y = p
    x0, x1 = fq2_coeffs(x)
    out = bytearray(curve.fq(x1).to_be_bytes() + curve.fq(x0).to_be_bytes())
    out[0] |= _LARGEST if fq2_lexicographically_largest(y, curve.fq) else _SMALLEST
    return bytes(out)


def read_verifying_key_flagged(r, curve, mode=Checked) -> ExternalVerifyingKey:
    """Read the flagged layout of a verifying key.

    Same field order as the uncompressed layout. The count covers one extra trailing G1
    point (the commitment slot), which is read and dropped; a zero count is malformed.
    """
    alpha = read_g1_flagged(r, curve, mode, "alpha_g1")
    read_g1_flagged(r, curve, mode, "beta_g1")
    beta = read_g2_flagged(r, curve, mode, "beta_g2")
    gamma = read_g2_flagged(r, curve, mode, "gamma_g2")
    read_g1_flagged(r, curve, mode, "delta_g1")
    delta = read_g2_flagged(r, curve, mode, "delta_g2")
    n = r.u32_be()
    if n == 0:
        raise LengthMismatch("verifying key: point count must include the commitment slot, got 0")
    points = []
    for i in range(n):
        try:
            points.append(read_g1_flagged(r, curve, mode, "IC point"))
        except CodecError as e:
            raise at_index(i, e) from e
    return ExternalVerifyingKey(alpha, beta, gamma, delta, points[:-1])


def decode_verifying_key_flagged(buf, curve, mode=Checked) -> ExternalVerifyingKey:
    r = ByteReader(buf)
    vk = read_verifying_key_flagged(r, curve, mode)
    r.expect_end("verifying key")
    return vk


def encode_verifying_key_flagged(vk, curve, beta_g1, delta_g1, commitment_g1=None, compressed=True) -> bytes:
    w = ByteWriter()
    w.write(encode_g1_flagged(vk.alpha_g1, curve, compressed)).write(encode_g1_flagged(beta_g1, curve, compressed))
    w.write(encode_g2_flagged(vk.beta_g2, curve, compressed)).write(encode_g2_flagged(vk.gamma_g2, curve, compressed))
    w.write(encode_g1_flagged(delta_g1, curve, compressed)).write(encode_g2_flagged(vk.delta_g2, curve, compressed))
    w.u32_be(len(vk.ic) + 1)
    for p in list(vk.ic) + [commitment_g1]:
        w.write(encode_g1_flagged(p, curve, compressed))
    return w.getvalue()
