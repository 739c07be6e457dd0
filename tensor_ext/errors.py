# tensor_ext/errors.py
"""
Typed failures raised by tensor_ext.

Every error subclasses ValueError, so callers that only care about
"bad arguments" can keep catching ValueError, while callers that want to
fall back to another code path can catch the specific kind.
"""


class TensorExtError(ValueError):
    """Base class for all tensor_ext failures."""


class ShapeMismatch(TensorExtError):
    """Dimensions are incompatible or cannot be broadcast together."""


class InvalidShape(TensorExtError):
    """Wrong rank (or an unusable size / dim index) for a shape-sensitive op."""


class InvalidSplit(TensorExtError):
    """A tensor cannot be split into exactly the requested number of parts."""


class ArityMismatch(TensorExtError):
    """A sequence does not hold exactly the expected number of tensors."""


class InvalidMask(TensorExtError):
    """Attention mask shape is not broadcastable to the score shape."""


class ConflictingMask(TensorExtError):
    """is_causal=True was combined with an explicit attention mask."""


class DtypeMismatch(TensorExtError):
    """Operand dtypes are incompatible where an exact match is required."""


__all__ = [
    "TensorExtError",
    "ShapeMismatch",
    "InvalidShape",
    "InvalidSplit",
    "ArityMismatch",
    "InvalidMask",
    "ConflictingMask",
    "DtypeMismatch",
]
