"""Prime-field and extension-field codecs.

`PrimeField` extends the `py_ecc` prime-field element with the fixed byte width `W` of one
curve field and the Montgomery constants derived from it, so a single class knows how to
read and write decimal strings, little-endian Montgomery chunks (circom `.zkey`) and
canonical big-endian chunks (gnark-style layouts).

Extension elements are the `py_ecc` types of the configured curve: `FQ2` for the quadratic
extension, a tuple of three `FQ2` for the cubic one, and `FQ12` for GT. The decimal wire
form of GT is the arkworks tower `c0 + c1*w` with `c_i = a + b*v + c*v^2`, `v = w^2` and
`w^6 = xi0 + u`; `fq12_from_tower` / `fq12_to_tower` map between that tower and the
polynomial basis `py_ecc` multiplies in.
"""

from __future__ import annotations

from py_ecc.fields.field_elements import FQ  # py_ecc prime-field element base class

from .errors import InvalidFieldEncoding, LengthMismatch, TruncatedInput, UnexpectedTrailingElement

_DIGITS = frozenset("0123456789")  # ASCII only; str.isdigit() would admit other scripts


def n_of(v) -> int:  # Canonical int of a py_ecc prime-field element (or a plain int).
    return v if isinstance(v, int) else v.n


class PrimeField(FQ):  # py_ecc prime-field element with fixed width and Montgomery constants.
    BYTES = 32  # serialized width W

    def __init_subclass__(cls, **kwargs):  # Precompute Montgomery constants for each concrete field.
        super().__init_subclass__(**kwargs)
        if "field_modulus" not in cls.__dict__:
            return
        p = cls.field_modulus
        cls.R = 1 << (8 * cls.BYTES)  # Montgomery radix (64-bit limbs, W bytes)
        cls.MASK = cls.R - 1
        if p % 2 == 0 or p >= cls.R:
            raise ValueError("field_modulus must be odd and < 2^(8*BYTES)")
        cls.NP = (-pow(p, -1, cls.R)) & cls.MASK
        cls.R1 = cls.R % p
        cls.R2 = (cls.R1 * cls.R1) % p
        cls.S, cls.Q = 0, p - 1  # p - 1 = Q * 2^S, Q odd
        while cls.Q % 2 == 0:
            cls.S, cls.Q = cls.S + 1, cls.Q // 2
        z = 2
        while pow(z, (p - 1) // 2, p) != p - 1:
            z += 1
        cls.Z = pow(z, cls.Q, p)  # 2^S-th root of unity from the least non-residue

    @classmethod
    def _red(cls, t: int) -> int:  # Montgomery reduction: t * R^-1 mod p, for t < p * R.
        m = ((t & cls.MASK) * cls.NP) & cls.MASK
        u = (t + m * cls.field_modulus) >> (8 * cls.BYTES)
        return u - cls.field_modulus if u >= cls.field_modulus else u

    @classmethod
    def _chunk(cls, buf, what):  # Exactly W bytes, else a truncation/trailing error.
        buf = bytes(buf)
        if len(buf) < cls.BYTES:
            raise TruncatedInput(f"{what}: expected {cls.BYTES} bytes, got {len(buf)}")
        if len(buf) > cls.BYTES:
            raise UnexpectedTrailingElement(f"{what}: expected {cls.BYTES} bytes, got {len(buf)}")
        return buf

    @classmethod
    def from_decimal(cls, s) -> "PrimeField":
        """Parse a base-10 string.

        Only non-empty ASCII digit strings are accepted: no sign, whitespace or `0x`
        prefix. Values at or above the modulus are reduced, the same as the `py_ecc`
        constructor and arkworks `from_str`.
        """
        if not isinstance(s, str):
            raise InvalidFieldEncoding(f"expected a decimal string, got {type(s).__name__}")
        if not s or not _DIGITS.issuperset(s):
            raise InvalidFieldEncoding(f"not a decimal field element: {s[:80]!r}")
        try:
            v = int(s)
        except ValueError as e:  # int() digit limit on absurdly long strings
            raise InvalidFieldEncoding(f"decimal field element too long ({len(s)} digits)") from e
        return cls(v)

    def to_decimal(self) -> str:  # Canonical residue in base 10.
        return str(self.n)

    @classmethod
    def from_montgomery_bytes(cls, buf) -> "PrimeField":  # W-byte little-endian Montgomery chunk, one reduction.
        return cls(cls._red(int.from_bytes(cls._chunk(buf, "montgomery field element"), "little")))

    @classmethod
    def from_montgomery_bytes_zkey(cls, buf) -> "PrimeField":  # zkey scalars: Montgomery chunk plus the extra reduction.
        raw = int.from_bytes(cls._chunk(buf, "zkey field element"), "little")
        return cls(cls._red(cls._red(raw)))

    def to_montgomery_bytes(self) -> bytes:  # Inverse of from_montgomery_bytes: a*R mod p, little-endian.
        return ((self.n * self.R1) % self.field_modulus).to_bytes(self.BYTES, "little")

    def to_montgomery_bytes_zkey(self) -> bytes:  # Inverse of from_montgomery_bytes_zkey: a*R^2 mod p.
        return ((self.n * self.R2) % self.field_modulus).to_bytes(self.BYTES, "little")

    @classmethod
    def from_be_bytes(cls, buf) -> "PrimeField":  # Canonical big-endian chunk; values >= p are rejected.
        v = int.from_bytes(cls._chunk(buf, "big-endian field element"), "big")
        if v >= cls.field_modulus:
            raise InvalidFieldEncoding(f"big-endian field element {v} is not below the modulus")
        return cls(v)

    def to_be_bytes(self) -> bytes:  # Canonical big-endian, W bytes.
        return self.n.to_bytes(self.BYTES, "big")

    def is_square(self) -> bool:  # Euler criterion (zero counts as a square).
        p = self.field_modulus
        return self.n == 0 or pow(self.n, (p - 1) // 2, p) == 1

    def sqrt(self):
        """Square root, or None for a non-residue.

        One exponentiation when `p % 4 == 3`; Tonelli-Shanks otherwise (the BN254 scalar
        field, which is also the BabyJubJub base field). The root returned for a given
        input is fixed, which point compression relies on.
        """
        p, a = self.field_modulus, self.n
        if a == 0:
            return type(self)(0)
        if pow(a, (p - 1) // 2, p) != 1:
            return None
        if p % 4 == 3:
            return type(self)(pow(a, (p + 1) // 4, p))
        m, c, t, r = self.S, self.Z, pow(a, self.Q, p), pow(a, (self.Q + 1) // 2, p)
        while t != 1:
            i, t2 = 0, t
            while t2 != 1:
                t2, i = t2 * t2 % p, i + 1
            b = pow(c, 1 << (m - i - 1), p)
            m, c, t, r = i, b * b % p, t * b * b % p, r * b % p
        return type(self)(r)

    def lexicographically_largest(self) -> bool:  # gnark ordering: x > (p - 1) / 2.
        return self.n > (self.field_modulus - 1) // 2


def decode_decimal(s, fq):  # Decimal token -> element of field class `fq`.
    return fq.from_decimal(s)


def encode_decimal(e) -> str:  # Any py_ecc prime-field element (or int residue) -> base-10 string.
    return str(n_of(e))


# Quadratic extension (u^2 = -1 on every supported curve).

def fq2_coeffs(a) -> tuple:  # (c0, c1) canonical ints of a py_ecc FQ2.
    return tuple(n_of(c) for c in a.coeffs)


def fq2_is_zero(a) -> bool:
    return all(c == 0 for c in fq2_coeffs(a))


def fq2_lexicographically_largest(a, fq) -> bool:  # gnark ordering: c1 decides unless zero, then c0.
    c0, c1 = fq2_coeffs(a)
    half = (fq.field_modulus - 1) // 2
    return c0 > half if c1 == 0 else c1 > half


def fq2_norm_sqrt(a, fq):  # sqrt(c0^2 + c1^2) in Fq, None when the norm is a non-residue.
    a0, a1 = (fq(c) for c in fq2_coeffs(a))
    return (a0 * a0 + a1 * a1).sqrt()


def fq2_sqrt(a, fq, hint=None):
    """Square root in Fq2 = Fq[u]/(u^2 + 1), or None.

    For `a = a0 + a1*u` with `a1 != 0` the root is `x0 + x1*u` with
    `x0 = sqrt((a0 +/- d) / 2)`, `d = sqrt(a0^2 + a1^2)`, `x1 = a1 / (2*x0)`. `hint` selects
    the sign of `d` (True: `+d`); when omitted it is taken as `is_square((a0 + d) / 2)`.
    The result is deterministic for a given `(a, hint)`, which is what makes point
    compression invertible.
    """
    fq2 = type(a)
    a0, a1 = (fq(c) for c in fq2_coeffs(a))
    if a1 == 0:
        r = a0.sqrt()
        if r is not None:
            return fq2([r.n, 0])
        r = (-a0).sqrt()
        return None if r is None else fq2([0, r.n])
    d = (a0 * a0 + a1 * a1).sqrt()
    if d is None:
        return None
    half = fq(1) / fq(2)
    if hint is None:
        hint = ((a0 + d) * half).is_square()
    if not hint:
        d = -d
    x0 = ((a0 + d) * half).sqrt()
    if x0 is None or x0 == 0:
        return None
    x1 = a1 / (x0 * 2)
    r = fq2([x0.n, x1.n])
    return r if r * r == a else None


def _cells(tokens, n, what):  # Array token of exact arity n (LengthMismatch otherwise).
    if isinstance(tokens, (str, bytes)) or not isinstance(tokens, (list, tuple)):
        raise InvalidFieldEncoding(f"{what}: expected an array, got {type(tokens).__name__}")
    if len(tokens) != n:
        raise LengthMismatch(f"{what} needs {n} elements, but got {len(tokens)}")
    return tokens


def decode_fq2(tokens, curve, what="Fq2 element"):  # ["c0", "c1"] -> FQ2
    c0, c1 = _cells(tokens, 2, what)
    return curve.fq2([curve.fq.from_decimal(c0).n, curve.fq.from_decimal(c1).n])


def encode_fq2(a) -> list:  # FQ2 -> ["c0", "c1"]
    return [str(c) for c in fq2_coeffs(a)]


def decode_fq6(tokens, curve, what="Fq6 element") -> tuple:  # [[..],[..],[..]] -> (FQ2, FQ2, FQ2)
    cells = _cells(tokens, 3, what)
    return tuple(decode_fq2(c, curve, f"{what} c{i}") for i, c in enumerate(cells))


def encode_fq6(t) -> list:
    return [encode_fq2(c) for c in t]


def fq12_from_tower(c0, c1, curve):  # Tower (Fq6, Fq6) -> py_ecc FQ12 in the polynomial basis.
    p, xi0 = curve.fq.field_modulus, curve.xi0
    ws = [c0[0], c1[0], c0[1], c1[1], c0[2], c1[2]]  # Fq2 coefficient of w^i
    lo, hi = [], []
    for a in ws:
        a0, a1 = fq2_coeffs(a)
        lo.append((a0 - xi0 * a1) % p)
        hi.append(a1)
    return curve.fq12(lo + hi)


def fq12_to_tower(e, curve) -> tuple:  # py_ecc FQ12 -> tower (Fq6, Fq6).
    p, xi0 = curve.fq.field_modulus, curve.xi0
    c = [n_of(x) for x in e.coeffs]
    ws = [curve.fq2([(c[i] + xi0 * c[i + 6]) % p, c[i + 6]]) for i in range(6)]
    return (ws[0], ws[2], ws[4]), (ws[1], ws[3], ws[5])


def decode_fq12(tokens, curve, what="Fq12 element"):  # 2x3x2 decimal cells -> FQ12
    t0, t1 = _cells(tokens, 2, what)
    return fq12_from_tower(decode_fq6(t0, curve, f"{what} c0"), decode_fq6(t1, curve, f"{what} c1"), curve)


def encode_fq12(e, curve) -> list:
    c0, c1 = fq12_to_tower(e, curve)
    return [encode_fq6(c0), encode_fq6(c1)]
