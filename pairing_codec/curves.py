"""Per-curve strategy objects.

Each supported pairing curve is one frozen `PairingCurve` instance bundling its field
classes, `py_ecc` backend modules, tower constant and byte widths. Codecs take the curve
as an argument; nothing here is inferred from data.
"""

from dataclasses import dataclass
from types import ModuleType

from py_ecc import bls12_381, bn128, optimized_bls12_381, optimized_bn128  # affine + projective backends

from .errors import NotInSubgroup, NotOnCurve
from .field import PrimeField, fq2_coeffs, n_of


class BN254Fq(PrimeField):  # BN254 base field.
    field_modulus = bn128.field_modulus
    BYTES = 32


class BN254Fr(PrimeField):  # BN254 scalar field.
    field_modulus = bn128.curve_order
    BYTES = 32


class BLS12381Fq(PrimeField):  # BLS12-381 base field (381-bit, six 64-bit limbs).
    field_modulus = bls12_381.field_modulus
    BYTES = 48


class BLS12381Fr(PrimeField):  # BLS12-381 scalar field.
    field_modulus = bls12_381.curve_order
    BYTES = 32


@dataclass(frozen=True)
class PairingCurve:  # Curve constants, field types and group predicates for one curve.
    name: str
    circom_name: str  # `curve` value in snarkjs JSON
    fq: type  # PrimeField subclass for coordinates
    fr: type  # PrimeField subclass for scalars
    xi0: int  # Fq12 tower non-residue: w^6 = xi0 + u
    g1_cofactor: int
    ecc: ModuleType  # py_ecc affine backend
    opt: ModuleType  # py_ecc projective backend (scalar multiplication)

    @property
    def W(self) -> int:  # Base-field byte width.
        return self.fq.BYTES

    @property
    def r(self) -> int:  # Prime subgroup order.
        return self.fr.field_modulus

    fq_point = property(lambda self: self.ecc.FQ)  # py_ecc Fq type used for G1 coordinates
    fq2 = property(lambda self: self.ecc.FQ2)
    fq12 = property(lambda self: self.ecc.FQ12)
    b = property(lambda self: self.ecc.b)
    b2 = property(lambda self: self.ecc.b2)
    g1 = property(lambda self: self.ecc.G1)
    g2 = property(lambda self: self.ecc.G2)

    g1_compressed_size = property(lambda self: self.W)
    g1_uncompressed_size = property(lambda self: 2 * self.W)
    g2_compressed_size = property(lambda self: 2 * self.W)
    g2_uncompressed_size = property(lambda self: 4 * self.W)

    def g1_point(self, x, y) -> tuple:  # Affine G1 point from canonical ints / field elements.
        return (self.fq_point(n_of(x)), self.fq_point(n_of(y)))

    def g2_point(self, x0, x1, y0, y1) -> tuple:  # Affine G2 point from the four limbs.
        return (self.fq2([n_of(x0), n_of(x1)]), self.fq2([n_of(y0), n_of(y1)]))

    def is_on_curve_g1(self, p) -> bool:
        return self.ecc.is_on_curve(p, self.b)

    def is_on_curve_g2(self, p) -> bool:
        return self.ecc.is_on_curve(p, self.b2)

    def _projective(self, p):  # Affine py_ecc point -> optimized backend (X, Y, Z).
        x, y = p
        if isinstance(x, self.fq2):
            return (self.opt.FQ2(list(fq2_coeffs(x))), self.opt.FQ2(list(fq2_coeffs(y))), self.opt.FQ2.one())
        return (self.opt.FQ(n_of(x)), self.opt.FQ(n_of(y)), self.opt.FQ.one())

    def _in_subgroup(self, p) -> bool:  # [r-1]P == -P, i.e. [r]P is the identity.
        q = self._projective(p)
        return self.opt.eq(self.opt.multiply(q, self.r - 1), self.opt.neg(q))

    def in_subgroup_g1(self, p) -> bool:  # Assumes p is on the curve.
        if p is None or self.g1_cofactor == 1:
            return True
        return self._in_subgroup(p)

    def in_subgroup_g2(self, p) -> bool:  # Assumes p is on the twist.
        return p is None or self._in_subgroup(p)

    def check_g1(self, p, mode, what="G1 point"):  # On-curve then subgroup, when `mode` asks for checks.
        if p is None or not mode.checks:
            return p
        if not self.is_on_curve_g1(p):
            raise NotOnCurve(f"{what} is not on the {self.name} curve")
        if not self.in_subgroup_g1(p):
            raise NotInSubgroup(f"{what} is not in the {self.name} G1 subgroup")
        return p

    def check_g2(self, p, mode, what="G2 point"):
        if p is None or not mode.checks:
            return p
        if not self.is_on_curve_g2(p):
            raise NotOnCurve(f"{what} is not on the {self.name} twist")
        if not self.in_subgroup_g2(p):
            raise NotInSubgroup(f"{what} is not in the {self.name} G2 subgroup")
        return p


BN254 = PairingCurve(
    name="bn254", circom_name="bn128", fq=BN254Fq, fr=BN254Fr, xi0=9, g1_cofactor=1, ecc=bn128, opt=optimized_bn128
)
BLS12_381 = PairingCurve(
    name="bls12_381",
    circom_name="bls12381",
    fq=BLS12381Fq,
    fr=BLS12381Fr,
    xi0=1,
    g1_cofactor=0x396C8C005555E1568C00AAAB0000AAAB,
    ecc=bls12_381,
    opt=optimized_bls12_381,
)

CURVES = {"bn254": BN254, "bn128": BN254, "bls12_381": BLS12_381, "bls12381": BLS12_381}  # accepted names


def curve_by_name(name: str) -> PairingCurve:  # Lookup by our name or the circom/snarkjs name.
    try:
        return CURVES[name.lower()]
    except KeyError:
        raise ValueError(f"unknown curve {name!r}; expected one of {sorted(CURVES)}") from None
