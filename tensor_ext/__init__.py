"""
tensor_ext: PyTorch tensor utilities that fill gaps between a tensor
engine's native ops and a richer set of primitives (triangular masks,
masked fill, fixed-arity split/unbind, comparison helpers, and a
reference scaled dot-product attention).
"""
import logging

from .attention import scaled_dot_product_attention
from .compare import allclose, equal
from .creation import eye, outer
from .errors import (
    ArityMismatch,
    ConflictingMask,
    DtypeMismatch,
    InvalidMask,
    InvalidShape,
    InvalidSplit,
    ShapeMismatch,
    TensorExtError,
)
from .methods import TensorExt, TensorListExt, ext
from .fill import logical_not, masked_fill, values_like
from .split import (
    chunk,
    chunk2,
    chunk3,
    chunk4,
    chunk5,
    unbind,
    unbind2,
    unbind3,
    unbind4,
    unbind5,
    unbind_vec2,
    unbind_vec3,
    unbind_vec4,
    unbind_vec5,
)
from .triangular import tril, tril_mask, triu, triu_mask

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "scaled_dot_product_attention",
    "allclose", "equal",
    "eye", "outer",
    "logical_not", "masked_fill", "values_like",
    "chunk", "chunk2", "chunk3", "chunk4", "chunk5",
    "unbind", "unbind2", "unbind3", "unbind4", "unbind5",
    "unbind_vec2", "unbind_vec3", "unbind_vec4", "unbind_vec5",
    "tril", "tril_mask", "triu", "triu_mask",
    "TensorExt", "TensorListExt", "ext",
    "TensorExtError", "ShapeMismatch", "InvalidShape", "InvalidSplit",
    "ArityMismatch", "InvalidMask", "ConflictingMask", "DtypeMismatch",
]
