from . import decimal_codec, external_codec, montgomery_codec
from .errors import UnsupportedEncodingMode
from .types import Checked, WireFormat

_DECODERS = {  # (format, group) -> decode(data, curve, mode)
    (WireFormat.DecimalJson, 1): decimal_codec.decode_g1,
    (WireFormat.DecimalJson, 2): decimal_codec.decode_g2,
    (WireFormat.MontgomeryBinary, 1): montgomery_codec.decode_g1,
    (WireFormat.MontgomeryBinary, 2): montgomery_codec.decode_g2,
    (WireFormat.ExternalUncompressed, 1): external_codec.decode_g1_uncompressed,
    (WireFormat.ExternalUncompressed, 2): external_codec.decode_g2_uncompressed,
    (WireFormat.ExternalFlagged, 1): external_codec.decode_g1_flagged,
    (WireFormat.ExternalFlagged, 2): external_codec.decode_g2_flagged,
}

_ENCODERS = {  # (format, group) -> encode(point, curve)
    (WireFormat.DecimalJson, 1): lambda p, curve: decimal_codec.encode_g1(p),
    (WireFormat.DecimalJson, 2): lambda p, curve: decimal_codec.encode_g2(p),
    (WireFormat.MontgomeryBinary, 1): montgomery_codec.encode_g1,
    (WireFormat.MontgomeryBinary, 2): montgomery_codec.encode_g2,
    (WireFormat.ExternalUncompressed, 1): external_codec.encode_g1_uncompressed,
    (WireFormat.ExternalUncompressed, 2): external_codec.encode_g2_uncompressed,
    (WireFormat.ExternalFlagged, 1): external_codec.encode_g1_flagged,
    (WireFormat.ExternalFlagged, 2): external_codec.encode_g2_flagged,
}


def _format(fmt):  # WireFormat member or value, else UnsupportedEncodingMode.
    try:
        return WireFormat(fmt)
    except ValueError:
        raise UnsupportedEncodingMode(f"unknown wire format {fmt!r}") from None


def _lookup(table, fmt, group, direction):
    try:
        return table[(_format(fmt), group)]
    except KeyError:
        raise UnsupportedEncodingMode(f"no G{group} {direction} for wire format {fmt!r}") from None


def decode_g1(fmt, data, curve, mode=Checked):  # Decode one G1 point in the caller-selected wire format.
    return _lookup(_DECODERS, fmt, 1, "decoder")(data, curve, mode)


def decode_g2(fmt, data, curve, mode=Checked):
    return _lookup(_DECODERS, fmt, 2, "decoder")(data, curve, mode)


def encode_g1(fmt, p, curve):
    return _lookup(_ENCODERS, fmt, 1, "encoder")(p, curve)


def encode_g2(fmt, p, curve):
    return _lookup(_ENCODERS, fmt, 2, "encoder")(p, curve)


def decode_gt(fmt, data, curve):  # GT only travels as Decimal-JSON.
    if _format(fmt) is not WireFormat.DecimalJson:
        raise UnsupportedEncodingMode(f"no GT decoder for wire format {fmt!r}")
    return decimal_codec.decode_gt(data, curve)


def encode_gt(fmt, e, curve):
    if _format(fmt) is not WireFormat.DecimalJson:
        raise UnsupportedEncodingMode(f"no GT encoder for wire format {fmt!r}")
    return decimal_codec.encode_gt(e, curve)
