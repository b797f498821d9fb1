"""BabyJubJub, the circom twisted Edwards curve over the BN254 scalar field.

`a*x^2 + y^2 = 1 + d*x^2*y^2` with `a = 168700`, `d = 168696` and cofactor 8. Points are
affine pairs of `BN254Fr` elements and the identity is `(0, 1)`. `py_ecc` has no Edwards
curves, so the group law below is the plain complete addition formula with
double-and-add on top; it only backs the subgroup check.
"""

from dataclasses import dataclass

from .curves import BN254Fr
from .errors import NotInSubgroup, NotOnCurve
from .field import PrimeField, n_of

ORDER = 21888242871839275222246405745257275088614511777268538073601725287587578984328  # full group order


class BabyJubJubFr(PrimeField):  # Scalar field of the prime-order subgroup.
    field_modulus = ORDER // 8
    BYTES = 32


@dataclass(frozen=True)
class EdwardsCurve:  # a*x^2 + y^2 = 1 + d*x^2*y^2 over `fq`.
    name: str
    fq: type  # PrimeField subclass for coordinates
    fr: type  # PrimeField subclass for subgroup scalars
    a: int
    d: int
    cofactor: int
    gx: int  # prime-order subgroup generator
    gy: int

    @property
    def r(self) -> int:  # Prime subgroup order.
        return self.fr.field_modulus

    @property
    def zero(self) -> tuple:
        return self.point(0, 1)

    @property
    def generator(self) -> tuple:
        return self.point(self.gx, self.gy)

    def point(self, x, y) -> tuple:  # Affine point from canonical ints / field elements.
        return (self.fq(n_of(x)), self.fq(n_of(y)))

    def is_zero(self, p) -> bool:
        return p[0] == 0 and p[1] == 1

    def is_on_curve(self, p) -> bool:
        xx, yy = p[0] * p[0], p[1] * p[1]
        return xx * self.a + yy == xx * yy * self.d + 1

    def add(self, p, q) -> tuple:
        (x1, y1), (x2, y2) = p, q
        t = x1 * x2 * y1 * y2 * self.d
        return ((x1 * y2 + y1 * x2) / (t + 1), (y1 * y2 - x1 * x2 * self.a) / (-t + 1))

    def neg(self, p) -> tuple:
        return (-p[0], p[1])

    def multiply(self, p, n: int) -> tuple:  # Double-and-add, n >= 0.
        acc, base = self.zero, p
        while n:
            if n & 1:
                acc = self.add(acc, base)
            base = self.add(base, base)
            n >>= 1
        return acc

    def in_subgroup(self, p) -> bool:  # Assumes p is on the curve.
        return self.is_zero(self.multiply(p, self.r))

    def check(self, p, mode, what="BabyJubJub point"):  # On-curve then subgroup, when `mode` asks for checks.
        if self.is_zero(p) or not mode.checks:
            return p
        if not self.is_on_curve(p):
            raise NotOnCurve(f"{what} is not on the {self.name} curve")
        if not self.in_subgroup(p):
            raise NotInSubgroup(f"{what} is not in the {self.name} prime-order subgroup")
        return p


BABYJUBJUB = EdwardsCurve(
    name="babyjubjub",
    fq=BN254Fr,
    fr=BabyJubJubFr,
    a=168700,
    d=168696,
    cofactor=8,
    gx=5299619240641551281634865583518297030282874472190772894086521144482721001553,  # circomlib Base8
    gy=16950150798460657717958625567821834550301663161624707787222815936182638968203,
)
