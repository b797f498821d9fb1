from enum import Enum  # per-call mode and format selectors


class ValidationMode(Enum):  # Whether decoders enforce on-curve and subgroup membership.
    Checked = "checked"
    Unchecked = "unchecked"

    @property
    def checks(self) -> bool:  # True when curve/subgroup checks must run.
        return self is ValidationMode.Checked


class WireFormat(Enum):  # Artifact encoding, chosen by the caller from the artifact's provenance.
    DecimalJson = "decimal-json"  # circom/snarkjs JSON
    MontgomeryBinary = "montgomery-binary"  # circom .zkey sections
    ExternalUncompressed = "external-uncompressed"  # Format A
    ExternalFlagged = "external-flagged"  # Format B (gnark-style flags)


Checked = ValidationMode.Checked  # short aliases used across the codecs
Unchecked = ValidationMode.Unchecked
