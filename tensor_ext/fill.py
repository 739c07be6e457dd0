# tensor_ext/fill.py
import math
from numbers import Number

import torch
from torch import Tensor

from .errors import DtypeMismatch, ShapeMismatch


def _check_fill_value(x: Tensor, value: Number) -> None:
    # value must be representable in x.dtype without silent coercion
    if isinstance(value, complex) and not x.dtype.is_complex:
        raise DtypeMismatch(f"cannot fill {x.dtype} tensor with complex value {value!r}")

    if x.dtype == torch.bool:
        if value not in (0, 1):
            raise DtypeMismatch(f"cannot fill bool tensor with {value!r}; expected True/False or 0/1")
        return

    if x.dtype.is_complex:
        return

    if x.dtype.is_floating_point:
        # inf/nan are kept as given; finite values must not overflow to inf
        limit = torch.finfo(x.dtype).max
        if math.isfinite(value) and abs(value) > limit:
            raise DtypeMismatch(f"fill value {value!r} overflows {x.dtype} (max {limit})")
        return

    # integer dtypes
    if isinstance(value, float) and not (math.isfinite(value) and value.is_integer()):
        raise DtypeMismatch(f"cannot fill {x.dtype} tensor with non-integral value {value!r}")
    info = torch.iinfo(x.dtype)
    if not info.min <= value <= info.max:
        raise DtypeMismatch(f"fill value {value!r} is out of range for {x.dtype} [{info.min}, {info.max}]")


def _as_bool_mask(mask: Tensor) -> Tensor:
    # numeric masks: non-zero marks a position
    if mask.dtype == torch.bool:
        return mask
    return mask != 0


def masked_fill(x: Tensor, mask: Tensor, value: Number) -> Tensor:
    """
    Out-of-place masked fill.

    Shapes:
      x:    (...)                  any dtype
      mask: broadcastable to x     bool, or numeric with non-zero = fill
      out:  same shape/dtype/device as x

    out[idx] = value where mask[idx] is set, x[idx] otherwise. x is never
    mutated; unmasked elements (including NaN/Inf) are copied bit-exactly.
    """
    if isinstance(value, Tensor):
        value = value.item()

    try:
        target = torch.broadcast_shapes(mask.shape, x.shape)
    except RuntimeError as err:
        raise ShapeMismatch(
            f"mask of shape {tuple(mask.shape)} cannot be broadcast to tensor shape {tuple(x.shape)}"
        ) from err
    if target != x.shape:
        raise ShapeMismatch(
            f"mask of shape {tuple(mask.shape)} would expand tensor shape {tuple(x.shape)} to {tuple(target)}"
        )

    _check_fill_value(x, value)
    fill = torch.full((), value, dtype=x.dtype, device=x.device)
    return torch.where(_as_bool_mask(mask), fill, x)


def values_like(x: Tensor, value: Number) -> Tensor:
    """Tensor with x's shape, dtype and device, filled with `value`."""
    _check_fill_value(x, value)
    return torch.full_like(x, value)


def logical_not(x: Tensor) -> Tensor:
    """
    Boolean complement.

    bool tensors are negated; integer tensors are read as 0 = False,
    non-zero = True and the complement is returned as 0/1 in x's dtype.
    """
    if x.dtype == torch.bool:
        return ~x
    if x.dtype.is_floating_point or x.dtype.is_complex:
        raise DtypeMismatch(f"logical_not expects a bool or integer tensor, got {x.dtype}")
    return (x == 0).to(x.dtype)


__all__ = ["masked_fill", "values_like", "logical_not"]
