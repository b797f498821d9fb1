import random
import pathlib
import sys
import unittest

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[1]))
from py_ecc import bls12_381, bn128

from pairing_codec import decimal_codec as dc
from pairing_codec.curves import BLS12_381, BN254
from pairing_codec.errors import (
    InvalidFieldEncoding,
    LengthMismatch,
    NotInSubgroup,
    NotOnCurve,
    TruncatedInput,
    UnexpectedTrailingElement,
)
from pairing_codec.field import fq2_sqrt
from pairing_codec.types import Checked, Unchecked


class G1Tests(unittest.TestCase):
    def test_round_trip(self):
        for curve, ecc in ((BN254, bn128), (BLS12_381, bls12_381)):
            for k in (1, 2, 12345):
                p = ecc.multiply(ecc.G1, k)
                tokens = dc.encode_g1(p)
                self.assertEqual(tokens[2], "1")
                self.assertEqual(dc.decode_g1(tokens, curve), p)

    def test_infinity_sentinel(self):
        for curve in (BN254, BLS12_381):
            self.assertIsNone(dc.decode_g1(["0", "1", "0"], curve, Checked))
        self.assertIsNone(dc.decode_g1(["0", "0", "1"], BN254, Checked))
        self.assertIsNone(dc.decode_g1(["5", "7", "0"], BN254, Checked))  # z = 0 wins over off-curve coordinates
        self.assertEqual(dc.encode_g1(None), ["0", "1", "0"])

    def test_arity(self):
        with self.assertRaises(TruncatedInput):
            dc.decode_g1(["1", "2"], BN254)
        with self.assertRaises(UnexpectedTrailingElement):
            dc.decode_g1(["1", "2", "1", "3"], BN254)
        with self.assertRaises(InvalidFieldEncoding):
            dc.decode_g1("1,2,1", BN254)
        with self.assertRaises(InvalidFieldEncoding):
            dc.decode_g1(["1", "x", "1"], BN254)

    def test_nonzero_z_is_ignored(self):
        x, y = bn128.multiply(bn128.G1, 3)
        tokens = [str(x.n), str(y.n), "2"]
        self.assertEqual(dc.decode_g1(tokens, BN254, Unchecked), (x, y))
        self.assertEqual(dc.decode_g1(tokens, BN254, Checked), (x, y))

    def test_validation_switch(self):
        with self.assertRaises(NotOnCurve):
            dc.decode_g1(["1", "1", "1"], BN254, Checked)
        p = dc.decode_g1(["1", "1", "1"], BN254, Unchecked)
        self.assertEqual(p, (bn128.FQ(1), bn128.FQ(1)))

    def test_checked_subset_of_unchecked(self):
        p = dc.encode_g1(bn128.multiply(bn128.G1, 99))
        self.assertEqual(dc.decode_g1(p, BN254, Checked), dc.decode_g1(p, BN254, Unchecked))

    def test_sequences(self):
        pts = [bn128.multiply(bn128.G1, k) for k in (1, 2, 3)] + [None]
        enc = dc.encode_g1_seq(pts)
        self.assertEqual(dc.decode_g1_seq(enc, BN254, expected_len=4), pts)
        with self.assertRaises(LengthMismatch):
            dc.decode_g1_seq(enc, BN254, expected_len=3)
        bad = enc[:1] + [["1", "1", "1"]] + enc[2:]
        with self.assertRaises(NotOnCurve) as ctx:
            dc.decode_g1_seq(bad, BN254, expected_len=3)  # element error surfaces before the length check
        self.assertTrue(str(ctx.exception).startswith("[1]"))


class G2Tests(unittest.TestCase):
    def test_round_trip(self):
        for curve, ecc in ((BN254, bn128), (BLS12_381, bls12_381)):
            p = ecc.multiply(ecc.G2, 7)
            tokens = dc.encode_g2(p)
            self.assertEqual(tokens[2], ["1", "0"])
            self.assertEqual(dc.decode_g2(tokens, curve), p)

    def test_infinity_sentinel(self):
        sentinel = [["0", "0"], ["1", "0"], ["0", "0"]]
        self.assertIsNone(dc.decode_g2(sentinel, BN254, Checked))
        self.assertEqual(dc.encode_g2(None), sentinel)
        self.assertEqual(dc.decode_g2_seq([sentinel, dc.encode_g2(bn128.G2)], BN254), [None, bn128.G2])

    def test_arity(self):
        with self.assertRaises(TruncatedInput):
            dc.decode_g2([["1", "2"], ["3", "4"]], BN254)
        with self.assertRaises(UnexpectedTrailingElement):
            dc.decode_g2([["1", "2"], ["3", "4"], ["1", "0"], ["0", "0"]], BN254)
        with self.assertRaises(LengthMismatch) as ctx:
            dc.decode_g2([["1", "2"], ["3", "4", "5"], ["1", "0"]], BN254)
        self.assertIn("y coordinate", str(ctx.exception))

    def test_nonzero_z_is_ignored(self):
        p = bn128.multiply(bn128.G2, 5)
        xs, ys, _ = dc.encode_g2(p)
        self.assertEqual(dc.decode_g2([xs, ys, ["2", "7"]], BN254, Unchecked), p)

    def test_subgroup(self):
        curve = BN254
        for x0 in range(1, 64):
            x = curve.fq2([x0, 1])
            y = fq2_sqrt(x * x * x + curve.b2, curve.fq)
            if y is not None:
                break
        tokens = dc.encode_g2((x, y))
        with self.assertRaises(NotInSubgroup):
            dc.decode_g2(tokens, curve, Checked)
        self.assertEqual(dc.decode_g2(tokens, curve, Unchecked), (x, y))


class GTAndScalarTests(unittest.TestCase):
    def test_gt_round_trip(self):
        rng = random.Random(0)
        p = BN254.fq.field_modulus
        e = BN254.fq12([rng.randrange(p) for _ in range(12)])
        tokens = dc.encode_gt(e, BN254)
        self.assertEqual([len(tokens), len(tokens[0]), len(tokens[0][0])], [2, 3, 2])
        self.assertEqual(dc.decode_gt(tokens, BN254), e)

    def test_gt_arity(self):
        one = dc.encode_gt(BN254.fq12.one(), BN254)
        self.assertEqual(one[0][0], ["1", "0"])
        with self.assertRaises(TruncatedInput):
            dc.decode_gt(one[:1], BN254)
        with self.assertRaises(UnexpectedTrailingElement):
            dc.decode_gt(one + [one[0]], BN254)
        with self.assertRaises(LengthMismatch):
            dc.decode_gt([one[0][:2], one[1]], BN254)

    def test_scalars(self):
        r = BN254.r
        vals = dc.decode_scalar_seq(["0", "1", str(r - 1)], BN254, expected_len=3)
        self.assertEqual([v.n for v in vals], [0, 1, r - 1])
        self.assertEqual(dc.encode_scalar_seq(vals), ["0", "1", str(r - 1)])
        with self.assertRaises(InvalidFieldEncoding) as ctx:
            dc.decode_scalar_seq(["1", "-2"], BN254)
        self.assertTrue(str(ctx.exception).startswith("[1]"))


if __name__ == "__main__":
    unittest.main()
