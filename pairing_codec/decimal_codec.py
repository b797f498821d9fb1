"""Decimal-JSON point codec (circom / snarkjs artifacts).

Points are projective triples of decimal strings: G1 `[x, y, z]`, G2 `[[x0, x1], [y0, y1],
[z0, z1]]`. Tokens are pulled one at a time in x, y, z order so a short array reports the
first missing coordinate and a long one is rejected before any arithmetic. `z == 0`, or
`x == y == 0`, is the point at infinity in every validation mode; for any other `z` the
point is the affine `(x, y)` and `z` carries no further meaning.

BabyJubJub points are affine pairs `[x, y]` over the BN254 scalar field. The identity
`(0, 1)` is accepted in every mode.
"""

from .babyjubjub import BABYJUBJUB
from .errors import CodecError, InvalidFieldEncoding, LengthMismatch, TruncatedInput, UnexpectedTrailingElement, at_index
from .field import decode_fq12, decode_fq2, encode_fq12, encode_fq2, fq2_is_zero, n_of
from .types import Checked

G1_INFINITY = ("0", "1", "0")  # snarkjs/arkworks zero G1
G2_INFINITY = (("0", "0"), ("1", "0"), ("0", "0"))

_MISSING = object()


def _iter(tokens, what):  # Iterator over an array token; strings and scalars are not arrays.
    if isinstance(tokens, (str, bytes, dict)) or not hasattr(tokens, "__iter__"):
        raise InvalidFieldEncoding(f"{what}: expected an array, got {type(tokens).__name__}")
    return iter(tokens)


def _pull(it, what):  # Next token, or TruncatedInput naming the missing item.
    tok = next(it, _MISSING)
    if tok is _MISSING:
        raise TruncatedInput(f"{what} is missing")
    return tok


def _no_trailing(it, what, n):
    if next(it, _MISSING) is not _MISSING:
        raise UnexpectedTrailingElement(f"{what} must have exactly {n} elements")


def _expect_len(out, expected_len, what):  # Optional count check, run after every element decoded.
    if expected_len is not None and len(out) != expected_len:
        raise LengthMismatch(f"{what}: expected {expected_len} elements, got {len(out)}")
    return out


def decode_g1(tokens, curve, mode=Checked):
    it = _iter(tokens, "G1 point")
    x = curve.fq.from_decimal(_pull(it, "G1 x coordinate"))
    y = curve.fq.from_decimal(_pull(it, "G1 y coordinate"))
    z = curve.fq.from_decimal(_pull(it, "G1 z coordinate"))
    _no_trailing(it, "G1 point", 3)
    if z == 0 or (x == 0 and y == 0):
        return None
    return curve.check_g1(curve.g1_point(x, y), mode)


def decode_g2(tokens, curve, mode=Checked):
    it = _iter(tokens, "G2 point")
    xs = _pull(it, "G2 x coordinate")
    ys = _pull(it, "G2 y coordinate")
    zs = _pull(it, "G2 z coordinate")
    _no_trailing(it, "G2 point", 3)
    x = decode_fq2(xs, curve, "G2 x coordinate")
    y = decode_fq2(ys, curve, "G2 y coordinate")
    z = decode_fq2(zs, curve, "G2 z coordinate")
    if fq2_is_zero(z) or (fq2_is_zero(x) and fq2_is_zero(y)):
        return None
    return curve.check_g2((x, y), mode)


def decode_gt(tokens, curve):  # [c0, c1], each a 3x2 array; GT has no curve checks.
    it = _iter(tokens, "GT element")
    c0 = _pull(it, "GT c0")
    c1 = _pull(it, "GT c1")
    _no_trailing(it, "GT element", 2)
    return decode_fq12([c0, c1], curve, "GT element")


def _decode_seq(decode_one, points, curve, mode, expected_len, what):
    out = []
    for i, tok in enumerate(_iter(points, what)):
        try:
            out.append(decode_one(tok, curve, mode))
        except CodecError as e:
            raise at_index(i, e) from e
    return _expect_len(out, expected_len, what)


def decode_g1_seq(points, curve, mode=Checked, expected_len=None) -> list:
    return _decode_seq(decode_g1, points, curve, mode, expected_len, "G1 sequence")


def decode_g2_seq(points, curve, mode=Checked, expected_len=None) -> list:
    return _decode_seq(decode_g2, points, curve, mode, expected_len, "G2 sequence")


def decode_field_seq(tokens, fq, expected_len=None, what="scalar sequence") -> list:  # ["1", "2", ...] -> [fq, ...]
    out = []
    for i, tok in enumerate(_iter(tokens, what)):
        try:
            out.append(fq.from_decimal(tok))
        except CodecError as e:
            raise at_index(i, e) from e
    return _expect_len(out, expected_len, what)


def decode_scalar_seq(tokens, curve, expected_len=None) -> list:  # Public inputs: ["1", "2", ...] -> [Fr, ...]
    return decode_field_seq(tokens, curve.fr, expected_len)


def encode_scalar_seq(scalars) -> list:
    return [str(n_of(s)) for s in scalars]


def decode_affine_ed(tokens, curve=BABYJUBJUB, mode=Checked):  # [x, y] -> Edwards point; (0, 1) is always accepted.
    it = _iter(tokens, "Edwards point")
    x = curve.fq.from_decimal(_pull(it, "Edwards x coordinate"))
    y = curve.fq.from_decimal(_pull(it, "Edwards y coordinate"))
    _no_trailing(it, "Edwards point", 2)
    return curve.check(curve.point(x, y), mode)


def decode_affine_ed_seq(points, curve=BABYJUBJUB, mode=Checked, expected_len=None) -> list:
    return _decode_seq(decode_affine_ed, points, curve, mode, expected_len, "Edwards sequence")


def encode_affine_ed(p) -> list:
    return [str(n_of(p[0])), str(n_of(p[1]))]


def encode_affine_ed_seq(points) -> list:
    return [encode_affine_ed(p) for p in points]


def encode_g1(p) -> list:  # Affine G1 -> [x, y, "1"], infinity -> ["0", "1", "0"].
    if p is None:
        return list(G1_INFINITY)
    x, y = p
    return [str(n_of(x)), str(n_of(y)), "1"]


def encode_g2(p) -> list:
    if p is None:
        return [list(c) for c in G2_INFINITY]
    x, y = p
    return [encode_fq2(x), encode_fq2(y), ["1", "0"]]


def encode_gt(e, curve) -> list:
    return encode_fq12(e, curve)


def encode_g1_seq(points) -> list:
    return [encode_g1(p) for p in points]


def encode_g2_seq(points) -> list:
    return [encode_g2(p) for p in points]
