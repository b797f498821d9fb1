from . import babyjubjub, compression, decimal_codec, external_codec, formats, montgomery_codec  # codec modules
from .babyjubjub import BABYJUBJUB, EdwardsCurve  # twisted Edwards curve
from .curves import BLS12_381, BN254, PairingCurve, curve_by_name  # curve strategy objects
from .errors import (  # error taxonomy
    CodecError,
    InvalidArtifact,
    InvalidFieldEncoding,
    InvariantViolation,
    LengthMismatch,
    NotInSubgroup,
    NotOnCurve,
    TruncatedInput,
    UnexpectedInfinity,
    UnexpectedTrailingElement,
    UnsupportedEncodingMode,
)
from .groth16 import Groth16Proof, PublicInput, VerificationKey  # snarkjs JSON documents
from .types import Checked, Unchecked, ValidationMode, WireFormat  # per-call selectors

__all__ = [  # public API
    "babyjubjub",
    "compression",
    "decimal_codec",
    "external_codec",
    "formats",
    "montgomery_codec",
    "BABYJUBJUB",
    "EdwardsCurve",
    "BLS12_381",
    "BN254",
    "PairingCurve",
    "curve_by_name",
    "CodecError",
    "InvalidArtifact",
    "InvalidFieldEncoding",
    "InvariantViolation",
    "LengthMismatch",
    "NotInSubgroup",
    "NotOnCurve",
    "TruncatedInput",
    "UnexpectedInfinity",
    "UnexpectedTrailingElement",
    "UnsupportedEncodingMode",
    "Groth16Proof",
    "PublicInput",
    "VerificationKey",
    "Checked",
    "Unchecked",
    "ValidationMode",
    "WireFormat",
]
