# tensor_ext/attention.py
import logging
import math

import torch
import torch.nn.functional as F
from torch import Tensor

from .errors import ConflictingMask, DtypeMismatch, InvalidMask, InvalidShape, ShapeMismatch
from .fill import logical_not, masked_fill
from .triangular import tril_mask

logger = logging.getLogger(__name__)


def _check_qkv(q: Tensor, k: Tensor, v: Tensor) -> torch.Size:
    """Validate q/k/v and return the broadcast batch shape."""
    for name, t in (("q", q), ("k", k), ("v", v)):
        if t.ndim < 2:
            raise InvalidShape(f"{name} must have at least 2 dims (..., L, E), got shape {tuple(t.shape)}")

    if not (q.dtype == k.dtype == v.dtype):
        raise DtypeMismatch(f"q, k, v must share a dtype, got {q.dtype}, {k.dtype}, {v.dtype}")
    if not q.dtype.is_floating_point:
        raise DtypeMismatch(f"attention expects floating point inputs, got {q.dtype}")

    if q.shape[-1] != k.shape[-1]:
        raise ShapeMismatch(
            f"embedding dim mismatch: q {tuple(q.shape)} vs k {tuple(k.shape)}"
        )
    if k.shape[-2] != v.shape[-2]:
        raise ShapeMismatch(
            f"key length mismatch: k {tuple(k.shape)} vs v {tuple(v.shape)}"
        )
    if q.shape[-1] == 0:
        raise InvalidShape(f"embedding dim must be positive, got q shape {tuple(q.shape)}")

    try:
        return torch.broadcast_shapes(q.shape[:-2], k.shape[:-2], v.shape[:-2])
    except RuntimeError as err:
        raise ShapeMismatch(
            f"batch dims are not broadcast-compatible: q {tuple(q.shape)}, "
            f"k {tuple(k.shape)}, v {tuple(v.shape)}"
        ) from err


def _attn_bias(
    q: Tensor,
    scores_shape: torch.Size,
    mask: Tensor | None,
    is_causal: bool,
) -> Tensor:
    """
    Additive bias broadcastable to scores_shape = (..., Lq, Lk).
    Excluded positions hold -inf, everything else 0 (plus any additive mask).
    """
    Lq, Lk = scores_shape[-2], scores_shape[-1]
    bias = torch.zeros((Lq, Lk), dtype=q.dtype, device=q.device)  # (Lq,Lk)

    if is_causal:
        if mask is not None:
            raise ConflictingMask("an explicit mask must not be given together with is_causal=True")
        # causal mask True means keep (j <= i), False means block
        causal = tril_mask((Lq, Lk), 0, device=q.device)
        return masked_fill(bias, logical_not(causal), float("-inf"))

    if mask is None:
        return bias

    try:
        target = torch.broadcast_shapes(mask.shape, scores_shape)
    except RuntimeError as err:
        raise InvalidMask(
            f"mask of shape {tuple(mask.shape)} is not broadcastable to scores {tuple(scores_shape)}"
        ) from err
    if target != scores_shape:
        raise InvalidMask(
            f"mask of shape {tuple(mask.shape)} would expand scores {tuple(scores_shape)} to {tuple(target)}"
        )

    if not (mask.dtype.is_floating_point or mask.dtype.is_complex):
        # integer 0/1 masks: non-zero means keep
        mask = mask != 0

    if mask.dtype == torch.bool:
        # Convention: mask True=keep, False=block
        if mask.ndim > bias.ndim:
            bias = bias.expand(torch.broadcast_shapes(bias.shape, mask.shape))
        return masked_fill(bias, logical_not(mask), float("-inf"))

    if mask.dtype != q.dtype:
        raise DtypeMismatch(
            f"additive mask must have the query dtype {q.dtype}, got {mask.dtype}; "
            f"use a bool mask for keep/block semantics"
        )
    return bias + mask


def scaled_dot_product_attention(
    q: Tensor,
    k: Tensor,
    v: Tensor,
    mask: Tensor | None = None,
    dropout_p: float | None = None,
    is_causal: bool | None = None,
    scale: float | None = None,
    *,
    training: bool = False,
    return_weights: bool = False,
) -> Tensor | tuple[Tensor, Tensor]:
    """
    Scaled dot-product attention: softmax((Q K^T) * scale + bias) @ V

    Shapes:
      q: (..., Lq, E)
      k: (..., Lk, E)
      v: (..., Lk, Ev)
      mask: broadcastable to (..., Lq, Lk)
        - bool: True for KEEP, False for BLOCK (-inf before softmax)
        - floating (q's dtype): added to the scores
      leading dims of q, k, v only need to be broadcast-compatible
      returns:
        out: (..., Lq, Ev)
        p:   (..., Lq, Lk) attention probabilities, when return_weights=True

    is_causal=True blocks j > i and may not be combined with `mask`.
    scale defaults to 1/sqrt(E).

    A row whose positions are all blocked is softmax over -inf only and comes
    out as NaN; this is left as is.

    Dropout on the probabilities runs only when training=True and dropout_p > 0.
    """
    batch = _check_qkv(q, k, v)
    Lq, E = q.shape[-2], q.shape[-1]
    Lk = k.shape[-2]
    scores_shape = torch.Size((*batch, Lq, Lk))

    if dropout_p is not None and not 0.0 <= dropout_p <= 1.0:
        raise ValueError(f"dropout_p must be in [0, 1], got {dropout_p}")

    if scale is None:
        scale = 1.0 / math.sqrt(E)

    bias = _attn_bias(q, scores_shape, mask, bool(is_causal))
    logger.debug(
        "sdpa: scores=%s scale=%g causal=%s mask=%s",
        tuple(scores_shape), scale, bool(is_causal),
        None if mask is None else (tuple(mask.shape), mask.dtype),
    )

    scores = torch.matmul(q, k.transpose(-2, -1)) * scale  # (...,Lq,Lk)
    scores = scores + bias

    p = torch.softmax(scores, dim=-1)  # (...,Lq,Lk)

    if training and dropout_p:
        p = F.dropout(p, p=dropout_p, training=True)

    out = torch.matmul(p, v)  # (...,Lq,Ev)
    if return_weights:
        return out, p
    return out


__all__ = ["scaled_dot_product_attention"]
