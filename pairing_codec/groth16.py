"""circom / snarkjs Groth16 JSON documents: proof, verifying key and public inputs."""

import json
from dataclasses import dataclass, field

from . import decimal_codec
from .curves import BN254, PairingCurve, curve_by_name
from .errors import CodecError, InvalidArtifact
from .external_codec import ExternalVerifyingKey
from .types import Checked


def _loads(text, what):  # JSON text -> dict, malformed JSON is an InvalidArtifact.
    try:
        d = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidArtifact(f"{what}: not valid JSON ({e})") from e
    return d


def _document_curve(d, curve, what) -> PairingCurve:  # Protocol/curve header check; returns the curve to decode with.
    if not isinstance(d, dict):
        raise InvalidArtifact(f"{what}: expected a JSON object, got {type(d).__name__}")
    if d.get("protocol") != "groth16":
        raise InvalidArtifact(f"{what}: protocol must be 'groth16', got {d.get('protocol')!r}")
    name = d.get("curve")
    if not isinstance(name, str):
        raise InvalidArtifact(f"{what}: missing 'curve'")
    try:
        found = curve_by_name(name)
    except ValueError as e:
        raise InvalidArtifact(f"{what}: {e}") from e
    if curve is not None and found is not curve:
        raise InvalidArtifact(f"{what}: document is for {name!r}, expected {curve.circom_name!r}")
    return found


def _field(d, key, what, decode):  # Decode d[key], prefixing any codec error with the key.
    if key not in d:
        raise InvalidArtifact(f"{what}: missing {key!r}")
    try:
        return decode(d[key])
    except InvalidArtifact:
        raise
    except CodecError as e:
        raise type(e)(f"{what}.{key}: {e}") from e


@dataclass
class Groth16Proof:  # snarkjs proof.json
    a: tuple
    b: tuple
    c: tuple
    curve: PairingCurve = BN254
    protocol: str = "groth16"

    @classmethod
    def from_dict(cls, d, curve=None, mode=Checked) -> "Groth16Proof":
        curve = _document_curve(d, curve, "proof")
        a = _field(d, "pi_a", "proof", lambda t: decimal_codec.decode_g1(t, curve, mode))
        b = _field(d, "pi_b", "proof", lambda t: decimal_codec.decode_g2(t, curve, mode))
        c = _field(d, "pi_c", "proof", lambda t: decimal_codec.decode_g1(t, curve, mode))
        return cls(a, b, c, curve)

    @classmethod
    def from_json(cls, text, curve=None, mode=Checked) -> "Groth16Proof":
        return cls.from_dict(_loads(text, "proof"), curve, mode)

    def to_dict(self) -> dict:
        return {
            "pi_a": decimal_codec.encode_g1(self.a),
            "pi_b": decimal_codec.encode_g2(self.b),
            "pi_c": decimal_codec.encode_g1(self.c),
            "protocol": self.protocol,
            "curve": self.curve.circom_name,
        }

    def to_json(self, **kwargs) -> str:
        return json.dumps(self.to_dict(), **kwargs)


@dataclass
class VerificationKey:
    """snarkjs verification_key.json.

    `ic` holds `n_public + 1` points; `alphabeta_12` (the precomputed pairing
    `e(alpha, beta)`) is optional and kept as a py_ecc FQ12 when present.
    """

    n_public: int
    alpha_g1: tuple
    beta_g2: tuple
    gamma_g2: tuple
    delta_g2: tuple
    ic: list = field(default_factory=list)
    alphabeta_12: object = None
    curve: PairingCurve = BN254

    @classmethod
    def from_dict(cls, d, curve=None, mode=Checked) -> "VerificationKey":
        curve = _document_curve(d, curve, "verification key")
        n = d.get("nPublic")
        if not isinstance(n, int) or isinstance(n, bool) or n < 0:
            raise InvalidArtifact(f"verification key: 'nPublic' must be a non-negative integer, got {n!r}")
        what = "verification key"
        g1 = lambda t: decimal_codec.decode_g1(t, curve, mode)
        g2 = lambda t: decimal_codec.decode_g2(t, curve, mode)
        alphabeta = None
        if d.get("vk_alphabeta_12") is not None:
            alphabeta = _field(d, "vk_alphabeta_12", what, lambda t: decimal_codec.decode_gt(t, curve))
        return cls(
            n_public=n,
            alpha_g1=_field(d, "vk_alpha_1", what, g1),
            beta_g2=_field(d, "vk_beta_2", what, g2),
            gamma_g2=_field(d, "vk_gamma_2", what, g2),
            delta_g2=_field(d, "vk_delta_2", what, g2),
            ic=_field(d, "IC", what, lambda t: decimal_codec.decode_g1_seq(t, curve, mode, expected_len=n + 1)),
            alphabeta_12=alphabeta,
            curve=curve,
        )

    @classmethod
    def from_json(cls, text, curve=None, mode=Checked) -> "VerificationKey":
        return cls.from_dict(_loads(text, "verification key"), curve, mode)

    def to_dict(self) -> dict:
        d = {
            "protocol": "groth16",
            "curve": self.curve.circom_name,
            "nPublic": self.n_public,
            "vk_alpha_1": decimal_codec.encode_g1(self.alpha_g1),
            "vk_beta_2": decimal_codec.encode_g2(self.beta_g2),
            "vk_gamma_2": decimal_codec.encode_g2(self.gamma_g2),
            "vk_delta_2": decimal_codec.encode_g2(self.delta_g2),
        }
        if self.alphabeta_12 is not None:
            d["vk_alphabeta_12"] = decimal_codec.encode_gt(self.alphabeta_12, self.curve)
        d["IC"] = decimal_codec.encode_g1_seq(self.ic)
        return d

    def to_json(self, **kwargs) -> str:
        return json.dumps(self.to_dict(), **kwargs)

    def to_external(self) -> ExternalVerifyingKey:  # Same key in the shape the external binary layouts carry.
        return ExternalVerifyingKey(self.alpha_g1, self.beta_g2, self.gamma_g2, self.delta_g2, list(self.ic))


@dataclass
class PublicInput:  # public.json: a bare array of decimal scalars.
    values: list
    curve: PairingCurve = BN254

    @classmethod
    def from_json(cls, text, curve=BN254) -> "PublicInput":
        return cls(decimal_codec.decode_scalar_seq(_loads(text, "public input"), curve), curve)

    def to_json(self, **kwargs) -> str:
        return json.dumps(decimal_codec.encode_scalar_seq(self.values), **kwargs)
