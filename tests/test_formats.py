import pathlib
import sys
import unittest

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[1]))
from py_ecc import bn128

from pairing_codec import formats
from pairing_codec.curves import BN254
from pairing_codec.errors import UnexpectedInfinity, UnsupportedEncodingMode
from pairing_codec.types import WireFormat


class FormatDispatchTests(unittest.TestCase):
    def test_every_format_round_trips(self):
        p1, p2 = bn128.multiply(bn128.G1, 6), bn128.multiply(bn128.G2, 6)
        for fmt in WireFormat:
            self.assertEqual(formats.decode_g1(fmt, formats.encode_g1(fmt, p1, BN254), BN254), p1, fmt)
            self.assertEqual(formats.decode_g2(fmt, formats.encode_g2(fmt, p2, BN254), BN254), p2, fmt)

    def test_infinity(self):
        for fmt in (WireFormat.DecimalJson, WireFormat.MontgomeryBinary, WireFormat.ExternalFlagged):
            self.assertIsNone(formats.decode_g1(fmt, formats.encode_g1(fmt, None, BN254), BN254), fmt)
        with self.assertRaises(UnexpectedInfinity):
            formats.encode_g1(WireFormat.ExternalUncompressed, None, BN254)

    def test_format_by_value(self):
        enc = formats.encode_g1("decimal-json", bn128.G1, BN254)
        self.assertEqual(enc, ["1", "2", "1"])

    def test_unsupported(self):
        with self.assertRaises(UnsupportedEncodingMode):
            formats.decode_g1("protobuf", b"", BN254)
        with self.assertRaises(UnsupportedEncodingMode):
            formats.decode_gt(WireFormat.MontgomeryBinary, b"", BN254)
        with self.assertRaises(UnsupportedEncodingMode):
            formats.encode_gt(WireFormat.ExternalFlagged, BN254.fq12.one(), BN254)
        e = BN254.fq12.one()
        self.assertEqual(formats.decode_gt(WireFormat.DecimalJson, formats.encode_gt("decimal-json", e, BN254), BN254), e)


if __name__ == "__main__":
    unittest.main()
