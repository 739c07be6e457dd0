# tensor_ext/creation.py
from typing import Sequence

import torch
from torch import Tensor

from .errors import DtypeMismatch, InvalidShape
from .triangular import tril_mask, triu_mask


def eye(
    shape: int | Sequence[int],
    dtype: torch.dtype | None = None,
    device: torch.device | str | None = None,
) -> Tensor:
    """
    Square identity matrix.

    `shape` is n or (n, n). Rectangular shapes are rejected with InvalidShape.
    dtype defaults to torch.get_default_dtype().
    """
    dims = (shape, shape) if isinstance(shape, int) else tuple(shape)
    if len(dims) != 2 or dims[0] != dims[1]:
        raise InvalidShape(f"eye expects n or a square (n, n) shape, got {dims}")
    if dtype is None:
        dtype = torch.get_default_dtype()
    # the main diagonal is exactly where the lower and upper triangles overlap
    diag = tril_mask(dims, 0, device=device) & triu_mask(dims, 0, device=device)
    return diag.to(dtype)


def outer(a: Tensor, b: Tensor) -> Tensor:
    """
    Outer product of two vectors.

    Shapes:
      a: (N,)
      b: (M,)
      out: (N, M) with out[i, j] = a[i] * b[j]
    """
    if a.ndim != 1 or b.ndim != 1:
        raise InvalidShape(f"outer expects two 1-D tensors, got {tuple(a.shape)} and {tuple(b.shape)}")
    if a.dtype != b.dtype:
        raise DtypeMismatch(f"outer expects matching dtypes, got {a.dtype} and {b.dtype}")
    return a[:, None] * b[None, :]


__all__ = ["eye", "outer"]
