# tensor_ext/triangular.py
"""
Triangular masks and triangular extraction.

Element (i, j) of a (rows, cols) matrix is kept when:
  lower: j - i <= diagonal
  upper: j - i >= diagonal

diagonal = 0 is the main diagonal, > 0 moves towards the upper-right,
< 0 towards the lower-left. An out-of-range diagonal is not an error:
the mask simply degenerates to all-True or all-False.
"""
from typing import Sequence

import torch
from torch import Tensor

from .errors import InvalidShape


def _rows_cols(shape: int | Sequence[int]) -> tuple[int, int]:
    dims = tuple(shape) if not isinstance(shape, int) else (shape,)
    if len(dims) != 2:
        raise InvalidShape(f"triangular mask expects a 2-D shape, got {dims}")
    rows, cols = int(dims[0]), int(dims[1])
    if rows < 0 or cols < 0:
        raise InvalidShape(f"triangular mask sizes must be non-negative, got {dims}")
    return rows, cols


def _triangular_mask(
    rows: int,
    cols: int,
    diagonal: int,
    upper: bool,
    device: torch.device | str | None,
) -> Tensor:
    i = torch.arange(rows, device=device)[:, None]  # (rows,1)
    j = torch.arange(cols, device=device)[None, :]  # (1,cols)
    offset = j - i                                  # (rows,cols)
    if upper:
        return offset >= diagonal
    return offset <= diagonal


def tril_mask(
    shape: int | Sequence[int],
    diagonal: int = 0,
    dtype: torch.dtype = torch.bool,
    device: torch.device | str | None = None,
) -> Tensor:
    """
    Lower-triangular mask of the given 2-D shape.

    Returns True/1 where j - i <= diagonal, False/0 elsewhere, in `dtype`
    (bool for masking, numeric 0/1 for direct multiplication).
    """
    rows, cols = _rows_cols(shape)
    return _triangular_mask(rows, cols, diagonal, False, device).to(dtype)


def triu_mask(
    shape: int | Sequence[int],
    diagonal: int = 0,
    dtype: torch.dtype = torch.bool,
    device: torch.device | str | None = None,
) -> Tensor:
    """
    Upper-triangular mask of the given 2-D shape.

    Returns True/1 where j - i >= diagonal, False/0 elsewhere, in `dtype`.
    """
    rows, cols = _rows_cols(shape)
    return _triangular_mask(rows, cols, diagonal, True, device).to(dtype)


def _extract(x: Tensor, diagonal: int, upper: bool) -> Tensor:
    if x.ndim < 2:
        raise InvalidShape(
            f"{'triu' if upper else 'tril'} expects a tensor with at least 2 dims, "
            f"got shape {tuple(x.shape)}"
        )
    rows, cols = x.shape[-2], x.shape[-1]
    keep = _triangular_mask(rows, cols, diagonal, upper, x.device)  # broadcasts over leading dims
    zero = torch.zeros((), dtype=x.dtype, device=x.device)
    # where() copies kept values bit-exactly, so NaN/Inf survive
    return torch.where(keep, x, zero)


def tril(x: Tensor, diagonal: int = 0) -> Tensor:
    """
    Lower triangle of `x` over its last two dims; other elements are zero.

    Shapes:
      x:   (..., R, C)
      out: (..., R, C), same dtype/device as x
    """
    return _extract(x, diagonal, upper=False)


def triu(x: Tensor, diagonal: int = 0) -> Tensor:
    """
    Upper triangle of `x` over its last two dims; other elements are zero.

    Shapes:
      x:   (..., R, C)
      out: (..., R, C), same dtype/device as x
    """
    return _extract(x, diagonal, upper=True)


__all__ = ["tril_mask", "triu_mask", "tril", "triu"]
