# tensor_ext/methods.py
"""
Method-call syntax for the tensor_ext operations.

    from tensor_ext import ext
    lower = ext(x).tril(0)
    a, b = ext(x).chunk2(-1)

Every method forwards to the free function of the same name; results are
plain torch tensors, so calls do not chain through TensorExt.
"""
from numbers import Number
from typing import Sequence

import torch
from torch import Tensor

from . import compare, creation, fill, split, triangular
from .attention import scaled_dot_product_attention


class TensorExt:
    __slots__ = ("tensor",)

    def __init__(self, tensor: Tensor):
        self.tensor = tensor

    def __repr__(self) -> str:
        return f"TensorExt({self.tensor!r})"

    # triangular
    def tril(self, diagonal: int = 0) -> Tensor:
        return triangular.tril(self.tensor, diagonal)

    def triu(self, diagonal: int = 0) -> Tensor:
        return triangular.triu(self.tensor, diagonal)

    # fill / logic
    def masked_fill(self, mask: Tensor, value: Number) -> Tensor:
        return fill.masked_fill(self.tensor, mask, value)

    def values_like(self, value: Number) -> Tensor:
        return fill.values_like(self.tensor, value)

    def logical_not(self) -> Tensor:
        return fill.logical_not(self.tensor)

    # comparison
    def equal(self, other: Tensor) -> bool:
        return compare.equal(self.tensor, other)

    def allclose(self, other: Tensor, rtol: float | None = None, atol: float | None = None) -> bool:
        return compare.allclose(self.tensor, other, rtol, atol)

    # creation
    def outer(self, vec2: Tensor) -> Tensor:
        return creation.outer(self.tensor, vec2)

    @staticmethod
    def eye(
        shape: int | Sequence[int],
        dtype: torch.dtype | None = None,
        device: torch.device | str | None = None,
    ) -> Tensor:
        return creation.eye(shape, dtype, device)

    # split
    def chunk(self, chunks: int, dim: int) -> list[Tensor]:
        return split.chunk(self.tensor, chunks, dim)

    def chunk2(self, dim: int) -> tuple[Tensor, Tensor]:
        return split.chunk2(self.tensor, dim)

    def chunk3(self, dim: int) -> tuple[Tensor, Tensor, Tensor]:
        return split.chunk3(self.tensor, dim)

    def chunk4(self, dim: int) -> tuple[Tensor, Tensor, Tensor, Tensor]:
        return split.chunk4(self.tensor, dim)

    def chunk5(self, dim: int) -> tuple[Tensor, Tensor, Tensor, Tensor, Tensor]:
        return split.chunk5(self.tensor, dim)

    def unbind(self, dim: int) -> list[Tensor]:
        return split.unbind(self.tensor, dim)

    def unbind2(self, dim: int) -> tuple[Tensor, Tensor]:
        return split.unbind2(self.tensor, dim)

    def unbind3(self, dim: int) -> tuple[Tensor, Tensor, Tensor]:
        return split.unbind3(self.tensor, dim)

    def unbind4(self, dim: int) -> tuple[Tensor, Tensor, Tensor, Tensor]:
        return split.unbind4(self.tensor, dim)

    def unbind5(self, dim: int) -> tuple[Tensor, Tensor, Tensor, Tensor, Tensor]:
        return split.unbind5(self.tensor, dim)

    # attention, with this tensor as the query
    def scaled_dot_product_attention(self, k: Tensor, v: Tensor, **kwargs) -> Tensor | tuple[Tensor, Tensor]:
        return scaled_dot_product_attention(self.tensor, k, v, **kwargs)


class TensorListExt:
    """Fixed-arity destructuring of a sequence of tensors."""

    __slots__ = ("tensors",)

    def __init__(self, tensors: Sequence[Tensor]):
        self.tensors = tensors

    def unbind2(self) -> tuple[Tensor, Tensor]:
        return split.unbind_vec2(self.tensors)

    def unbind3(self) -> tuple[Tensor, Tensor, Tensor]:
        return split.unbind_vec3(self.tensors)

    def unbind4(self) -> tuple[Tensor, Tensor, Tensor, Tensor]:
        return split.unbind_vec4(self.tensors)

    def unbind5(self) -> tuple[Tensor, Tensor, Tensor, Tensor, Tensor]:
        return split.unbind_vec5(self.tensors)


def ext(x: Tensor | Sequence[Tensor]) -> TensorExt | TensorListExt:
    """Wrap a tensor (or a list/tuple of tensors) for method-call syntax."""
    if isinstance(x, Tensor):
        return TensorExt(x)
    return TensorListExt(x)


__all__ = ["TensorExt", "TensorListExt", "ext"]
