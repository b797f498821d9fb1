"""Point compression for on-chain Groth16 verifiers (BN254 2pi.com scheme).

G1 compresses to `x << 1 | sign`, G2 to `((x0 << 2) | (hint << 1) | sign, x1)`. The sign bit
is 0 when `y` equals the square root the verifier recomputes and 1 when it is the negation.
For G2 the verifier's Fq2 root depends on which root of the norm it starts from; `hint`
records that choice so decompression reproduces exactly the same `y_computed`.
"""

from .errors import InvalidFieldEncoding, InvariantViolation, NotInSubgroup, NotOnCurve
from .field import fq2_coeffs, fq2_norm_sqrt, fq2_sqrt, n_of
from .types import Checked


def compress_g1(p, curve) -> int:
    if p is None:
        return 0
    x, y = curve.fq(n_of(p[0])), curve.fq(n_of(p[1]))
    y_computed = (x * x * x + n_of(curve.b)).sqrt()
    if y_computed is None:
        raise InvariantViolation("compress_g1: x has no square root, point was never validated")
    if y == y_computed:
        return x.n << 1
    if y == -y_computed:
        return (x.n << 1) | 1
    raise InvariantViolation("compress_g1: point is not on the curve")


def _field_int(v, p, what):  # Non-negative int below the modulus.
    v = int(v)
    if v < 0 or v >= p:
        raise InvalidFieldEncoding(f"{what} {v} is not a canonical field element")
    return v


def decompress_g1(c, curve, mode=Checked):
    c = int(c)
    if c == 0:
        return None
    if c < 0:
        raise InvalidFieldEncoding(f"compressed G1 value {c} is negative")
    x = curve.fq(_field_int(c >> 1, curve.fq.field_modulus, "compressed G1 x"))
    y = (x * x * x + n_of(curve.b)).sqrt()
    if y is None:
        raise NotOnCurve(f"compressed G1 x={x.n} has no point on the {curve.name} curve")
    if c & 1:
        y = -y
    p = curve.g1_point(x, y)
    if mode.checks and not curve.in_subgroup_g1(p):
        raise NotInSubgroup(f"decompressed G1 point is not in the {curve.name} subgroup")
    return p


def _g2_hint(y_pos, fq):  # Whether the verifier's Fq2 root starts from +d (True) or -d.
    d = fq2_norm_sqrt(y_pos, fq)
    if d is None:
        raise InvariantViolation("compress_g2: x^3 + b2 has a non-square norm, point was never validated")
    return ((fq(fq2_coeffs(y_pos)[0]) + d) / 2).is_square()


def compress_g2(p, curve) -> tuple:
    if p is None:
        return (0, 0)
    x, y = p
    y_pos = x * x * x + curve.b2
    hint = _g2_hint(y_pos, curve.fq)
    y_computed = fq2_sqrt(y_pos, curve.fq, hint)
    if y_computed is None:
        raise InvariantViolation("compress_g2: x^3 + b2 has no square root, point was never validated")
    if y == y_computed:
        sign = 0
    elif y == -y_computed:
        sign = 1
    else:
        raise InvariantViolation("compress_g2: point is not on the twist")
    x0, x1 = fq2_coeffs(x)
    return ((x0 << 2) | (int(hint) << 1) | sign, x1)


def decompress_g2(c, curve, mode=Checked):
    c0, c1 = (int(v) for v in c)
    if c0 == 0 and c1 == 0:
        return None
    if c0 < 0:
        raise InvalidFieldEncoding(f"compressed G2 value {c0} is negative")
    p_mod = curve.fq.field_modulus
    x = curve.fq2([_field_int(c0 >> 2, p_mod, "compressed G2 x0"), _field_int(c1, p_mod, "compressed G2 x1")])
    y = fq2_sqrt(x * x * x + curve.b2, curve.fq, bool(c0 & 2))
    if y is None:
        raise NotOnCurve(f"compressed G2 x has no point on the {curve.name} twist")
    if c0 & 1:
        y = -y
    p = (x, y)
    if mode.checks and not curve.in_subgroup_g2(p):
        raise NotInSubgroup(f"decompressed G2 point is not in the {curve.name} subgroup")
    return p


# Solidity verifier call data.

def prepare_uncompressed_proof(proof) -> list:
    """Eight ints `[ax, ay, bx1, bx0, by1, by0, cx, cy]` for `verifyProof`.

    `proof` is anything with affine `a`, `b`, `c` attributes (e.g. `groth16.Groth16Proof`).
    Infinity is encoded as all-zero coordinates.
    """
    ax, ay = (0, 0) if proof.a is None else (n_of(v) for v in proof.a)
    if proof.b is None:
        bx0 = bx1 = by0 = by1 = 0
    else:
        (bx0, bx1), (by0, by1) = fq2_coeffs(proof.b[0]), fq2_coeffs(proof.b[1])
    cx, cy = (0, 0) if proof.c is None else (n_of(v) for v in proof.c)
    return [ax, ay, bx1, bx0, by1, by0, cx, cy]


def prepare_compressed_proof(proof, curve) -> list:  # Four ints [a, b1, b0, c] for `verifyCompressedProof`.
    b0, b1 = compress_g2(proof.b, curve)
    return [compress_g1(proof.a, curve), b1, b0, compress_g1(proof.c, curve)]


def format_solidity_call(values, public_inputs) -> str:  # "[v0,v1,...],[i0,i1,...]" as pasted into a contract call.
    vs = ",".join(str(int(v)) for v in values)
    ins = ",".join(str(n_of(i)) for i in public_inputs)
    return f"[{vs}],[{ins}]"
