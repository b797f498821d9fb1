"""Error taxonomy for every codec in this package.

All recoverable failures derive from `CodecError` (itself a `ValueError`, so callers that
already treat malformed input as a value error keep working). `InvariantViolation` is the
one fatal condition: it means a caller compressed a point that never passed validation.
"""


class CodecError(ValueError):  # Root of all recoverable decode/encode failures.
    pass


class TruncatedInput(CodecError):  # Fewer tokens or bytes than the format requires.
    pass


class UnexpectedTrailingElement(CodecError):  # More tokens or bytes than the format allows.
    pass


class InvalidFieldEncoding(CodecError):  # Token or byte chunk is not a valid field element.
    pass


class NotOnCurve(CodecError):  # Coordinates do not satisfy the curve equation.
    pass


class NotInSubgroup(CodecError):  # On-curve point outside the prime-order subgroup.
    pass


class LengthMismatch(CodecError):  # Nested arity or batch count differs from what was expected.
    pass


class UnsupportedEncodingMode(CodecError):  # Flag pattern or wire format this codec cannot handle.
    pass


class UnexpectedInfinity(CodecError):  # Identity point where the format forbids it (Format A).
    pass


class InvalidArtifact(CodecError):  # Groth16 JSON document with missing keys or wrong protocol/curve.
    pass


class InvariantViolation(RuntimeError):  # Fatal: compression input was never a valid curve point.
    pass


def at_index(i, err):  # Re-raise helper: same error class, message prefixed with element index.
    return type(err)(f"[{i}] {err}")
