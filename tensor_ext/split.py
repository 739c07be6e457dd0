# tensor_ext/split.py
"""
Split / destructure helpers with a statically known number of parts.

chunk policy: a dim of size S split into N parts gives every part S // N
elements and the first S % N parts one extra element. S < N cannot yield
N non-empty parts and fails with InvalidSplit.
"""
from typing import Sequence

import torch
from torch import Tensor

from .errors import ArityMismatch, InvalidShape, InvalidSplit, ShapeMismatch


def _normalize_dim(x: Tensor, dim: int) -> int:
    if not -x.ndim <= dim < x.ndim:
        raise InvalidShape(f"dim {dim} is out of range for a tensor of shape {tuple(x.shape)}")
    return dim % x.ndim


def chunk(x: Tensor, chunks: int, dim: int) -> list[Tensor]:
    """Split `x` along `dim` into exactly `chunks` near-equal views."""
    dim = _normalize_dim(x, dim)
    size = x.shape[dim]
    if chunks < 1 or size < chunks:
        raise InvalidSplit(
            f"cannot split dim {dim} of size {size} into {chunks} parts (shape {tuple(x.shape)})"
        )
    base, extra = divmod(size, chunks)
    sizes = [base + 1 if i < extra else base for i in range(chunks)]
    return list(torch.split(x, sizes, dim=dim))


def chunk2(x: Tensor, dim: int) -> tuple[Tensor, Tensor]:
    a, b = chunk(x, 2, dim)
    return a, b


def chunk3(x: Tensor, dim: int) -> tuple[Tensor, Tensor, Tensor]:
    a, b, c = chunk(x, 3, dim)
    return a, b, c


def chunk4(x: Tensor, dim: int) -> tuple[Tensor, Tensor, Tensor, Tensor]:
    a, b, c, d = chunk(x, 4, dim)
    return a, b, c, d


def chunk5(x: Tensor, dim: int) -> tuple[Tensor, Tensor, Tensor, Tensor, Tensor]:
    a, b, c, d, e = chunk(x, 5, dim)
    return a, b, c, d, e


def unbind(x: Tensor, dim: int) -> list[Tensor]:
    """Remove `dim`, returning one view per index along it."""
    dim = _normalize_dim(x, dim)
    return list(torch.unbind(x, dim=dim))


def _unbind_n(x: Tensor, n: int, dim: int) -> list[Tensor]:
    dim = _normalize_dim(x, dim)
    if x.shape[dim] != n:
        raise ShapeMismatch(
            f"unbind{n} expects dim {dim} of size {n}, got shape {tuple(x.shape)}"
        )
    return list(torch.unbind(x, dim=dim))


def unbind2(x: Tensor, dim: int) -> tuple[Tensor, Tensor]:
    a, b = _unbind_n(x, 2, dim)
    return a, b


def unbind3(x: Tensor, dim: int) -> tuple[Tensor, Tensor, Tensor]:
    a, b, c = _unbind_n(x, 3, dim)
    return a, b, c


def unbind4(x: Tensor, dim: int) -> tuple[Tensor, Tensor, Tensor, Tensor]:
    a, b, c, d = _unbind_n(x, 4, dim)
    return a, b, c, d


def unbind5(x: Tensor, dim: int) -> tuple[Tensor, Tensor, Tensor, Tensor, Tensor]:
    a, b, c, d, e = _unbind_n(x, 5, dim)
    return a, b, c, d, e


def _unbind_vec_n(tensors: Sequence[Tensor], n: int) -> tuple[Tensor, ...]:
    tensors = tuple(tensors)
    if len(tensors) != n:
        raise ArityMismatch(f"expected exactly {n} tensors, got {len(tensors)}")
    return tensors


def unbind_vec2(tensors: Sequence[Tensor]) -> tuple[Tensor, Tensor]:
    a, b = _unbind_vec_n(tensors, 2)
    return a, b


def unbind_vec3(tensors: Sequence[Tensor]) -> tuple[Tensor, Tensor, Tensor]:
    a, b, c = _unbind_vec_n(tensors, 3)
    return a, b, c


def unbind_vec4(tensors: Sequence[Tensor]) -> tuple[Tensor, Tensor, Tensor, Tensor]:
    a, b, c, d = _unbind_vec_n(tensors, 4)
    return a, b, c, d


def unbind_vec5(tensors: Sequence[Tensor]) -> tuple[Tensor, Tensor, Tensor, Tensor, Tensor]:
    a, b, c, d, e = _unbind_vec_n(tensors, 5)
    return a, b, c, d, e


__all__ = [
    "chunk", "chunk2", "chunk3", "chunk4", "chunk5",
    "unbind", "unbind2", "unbind3", "unbind4", "unbind5",
    "unbind_vec2", "unbind_vec3", "unbind_vec4", "unbind_vec5",
]
