# tensor_ext/compare.py
import torch
from torch import Tensor

DEFAULT_RTOL = 1e-5
DEFAULT_ATOL = 1e-8


def equal(a: Tensor, b: Tensor) -> bool:
    """
    True if both tensors have the same shape, the same dtype and identical elements.

    Follows IEEE comparison, so a tensor holding NaN is not equal to itself.
    Tensors on different devices are compared on a's device.
    """
    if a.shape != b.shape or a.dtype != b.dtype:
        return False
    return bool(torch.eq(a, b.to(a.device)).all())


def allclose(
    a: Tensor,
    b: Tensor,
    rtol: float | None = None,
    atol: float | None = None,
) -> bool:
    """
    True if shapes match and every pair satisfies |a - b| <= atol + rtol * |b|.

    Defaults: rtol=1e-5, atol=1e-8. Infinities of the same sign count as
    close; NaN is never close to anything.
    """
    rtol = DEFAULT_RTOL if rtol is None else rtol
    atol = DEFAULT_ATOL if atol is None else atol
    if a.shape != b.shape:
        return False

    dtype = torch.promote_types(a.dtype, b.dtype)
    if not (dtype.is_floating_point or dtype.is_complex):
        dtype = torch.get_default_dtype()
    a_ = a.to(dtype)
    b_ = b.to(dtype)

    return bool(torch.isclose(a_, b_, rtol=rtol, atol=atol).all())


__all__ = ["equal", "allclose", "DEFAULT_RTOL", "DEFAULT_ATOL"]
