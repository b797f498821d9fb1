import pathlib
import sys
import unittest

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[1]))
from py_ecc import bn128

from pairing_codec import compression as cp
from pairing_codec.curves import BN254
from pairing_codec.errors import InvalidFieldEncoding, InvariantViolation, NotInSubgroup, NotOnCurve
from pairing_codec.field import fq2_sqrt
from pairing_codec.groth16 import Groth16Proof
from pairing_codec.types import Checked, Unchecked


def off_subgroup_g2():
    for x0 in range(1, 64):
        x = BN254.fq2([x0, 1])
        y = fq2_sqrt(x * x * x + BN254.b2, BN254.fq)
        if y is not None:
            return (x, y)
    raise AssertionError("no twist point found")


class CompressG1Tests(unittest.TestCase):
    def test_bijective(self):
        for k in (1, 2, 3, 5, 1 << 40, BN254.r - 1):
            for p in (bn128.multiply(bn128.G1, k), bn128.neg(bn128.multiply(bn128.G1, k))):
                c = cp.compress_g1(p, BN254)
                self.assertEqual(c >> 1, p[0].n)
                self.assertEqual(cp.decompress_g1(c, BN254), p)

    def test_sign_bit(self):
        self.assertEqual(cp.compress_g1(bn128.G1, BN254), 2)  # y = 2 is the root computed for x = 1
        self.assertEqual(cp.compress_g1(bn128.neg(bn128.G1), BN254), 3)

    def test_infinity(self):
        self.assertEqual(cp.compress_g1(None, BN254), 0)
        self.assertIsNone(cp.decompress_g1(0, BN254))

    def test_invalid_input(self):
        with self.assertRaises(InvariantViolation):
            cp.compress_g1(BN254.g1_point(1, 1), BN254)
        with self.assertRaises(InvalidFieldEncoding):
            cp.decompress_g1(BN254.fq.field_modulus << 1, BN254)
        for x in range(1, 64):
            if (BN254.fq(x) ** 3 + 3).sqrt() is None:
                break
        with self.assertRaises(NotOnCurve):
            cp.decompress_g1(x << 1, BN254)


class CompressG2Tests(unittest.TestCase):
    def test_bijective(self):
        for k in (1, 2, 3, 1 << 20):
            for p in (bn128.multiply(bn128.G2, k), bn128.neg(bn128.multiply(bn128.G2, k))):
                c0, c1 = cp.compress_g2(p, BN254)
                self.assertEqual(c0 >> 2, p[0].coeffs[0].n)
                self.assertEqual(c1, p[0].coeffs[1].n)
                self.assertEqual(cp.decompress_g2((c0, c1), BN254), p)

    def test_negation_flips_sign_only(self):
        p = bn128.multiply(bn128.G2, 9)
        a, b = cp.compress_g2(p, BN254), cp.compress_g2(bn128.neg(p), BN254)
        self.assertEqual(a[0] ^ b[0], 1)
        self.assertEqual(a[1], b[1])

    def test_infinity(self):
        self.assertEqual(cp.compress_g2(None, BN254), (0, 0))
        self.assertIsNone(cp.decompress_g2((0, 0), BN254))

    def test_invalid_input(self):
        with self.assertRaises(InvariantViolation):
            cp.compress_g2((bn128.G2[0], bn128.G2[0]), BN254)
        with self.assertRaises(InvalidFieldEncoding):
            cp.decompress_g2((BN254.fq.field_modulus << 2, 0), BN254)

    def test_subgroup_check(self):
        c = cp.compress_g2(off_subgroup_g2(), BN254)
        with self.assertRaises(NotInSubgroup):
            cp.decompress_g2(c, BN254, Checked)
        self.assertEqual(cp.decompress_g2(c, BN254, Unchecked), off_subgroup_g2())


class SolidityCallTests(unittest.TestCase):
    def setUp(self):
        self.proof = Groth16Proof(bn128.multiply(bn128.G1, 3), bn128.multiply(bn128.G2, 4), bn128.multiply(bn128.G1, 5))

    def test_uncompressed(self):
        a, b, c = self.proof.a, self.proof.b, self.proof.c
        vals = cp.prepare_uncompressed_proof(self.proof)
        self.assertEqual(vals[:2], [a[0].n, a[1].n])
        self.assertEqual(vals[2:6], [b[0].coeffs[1].n, b[0].coeffs[0].n, b[1].coeffs[1].n, b[1].coeffs[0].n])
        self.assertEqual(vals[6:], [c[0].n, c[1].n])
        self.assertEqual(cp.prepare_uncompressed_proof(Groth16Proof(None, None, None)), [0] * 8)

    def test_compressed(self):
        vals = cp.prepare_compressed_proof(self.proof, BN254)
        b0, b1 = cp.compress_g2(self.proof.b, BN254)
        self.assertEqual(vals, [cp.compress_g1(self.proof.a, BN254), b1, b0, cp.compress_g1(self.proof.c, BN254)])

    def test_call_format(self):
        self.assertEqual(cp.format_solidity_call([1, 2, 3], [BN254.fr(0), BN254.fr(7)]), "[1,2,3],[0,7]")
        self.assertEqual(cp.format_solidity_call([], []), "[],[]")


if __name__ == "__main__":
    unittest.main()
