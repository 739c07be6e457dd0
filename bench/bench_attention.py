# bench/bench_attention.py
import os
import csv
import sys
import time
import logging
import argparse
from dataclasses import dataclass
from typing import Callable, Dict, Any, List

import torch
import torch.nn.functional as F

from tensor_ext import logical_not, masked_fill, scaled_dot_product_attention, tril_mask

logger = logging.getLogger(__name__)


# -------------------------
# Config + helpers
# -------------------------
@dataclass
class BenchConfig:
    B: int = 2
    H: int = 8
    D: int = 64
    causal: bool = False
    mask: str = "none"       # "none" | "bool" | "additive"
    dtype: str = "fp32"      # "fp16" | "bf16" | "fp32"
    device: str = "cpu"
    warmup: int = 5
    iters: int = 20


def setup_logging(level: int = logging.INFO):
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def _get_dtype(dtype_str: str) -> torch.dtype:
    m = {
        "fp16": torch.float16,
        "bf16": torch.bfloat16,
        "fp32": torch.float32,
    }
    if dtype_str not in m:
        raise ValueError(f"Unknown dtype '{dtype_str}'. Choose from {list(m.keys())}.")
    return m[dtype_str]


def _sync(device: str):
    if device.startswith("cuda"):
        torch.cuda.synchronize()


def _time_ms(loop_body: Callable[[], None], iters: int, device: str) -> float:
    """
    Returns average milliseconds per iteration.
    CUDA events on GPU, perf_counter on CPU.
    """
    if device.startswith("cuda"):
        start = torch.cuda.Event(enable_timing=True)
        end = torch.cuda.Event(enable_timing=True)
        _sync(device)
        start.record()
        for _ in range(iters):
            loop_body()
        end.record()
        _sync(device)
        return start.elapsed_time(end) / iters

    t0 = time.perf_counter()
    for _ in range(iters):
        loop_body()
    return (time.perf_counter() - t0) * 1000.0 / iters


def make_mask(cfg: BenchConfig, L: int, dtype: torch.dtype) -> torch.Tensor | None:
    # keep/block pattern shared by both mask kinds: block the strict upper triangle
    if cfg.mask == "none":
        return None
    keep = tril_mask((L, L), 0, device=cfg.device)
    if cfg.mask == "bool":
        return keep
    if cfg.mask == "additive":
        bias = torch.zeros((L, L), device=cfg.device, dtype=dtype)
        return masked_fill(bias, logical_not(keep), float("-inf"))
    raise ValueError(f"Unknown mask kind '{cfg.mask}'")


# -------------------------
# Benchmarks
# -------------------------
def make_impls(cfg: BenchConfig) -> List[Dict[str, Any]]:
    """
    Return a list of implementations to benchmark.
    Each fn has signature fn(q, k, v, mask) -> out.
    """
    causal = cfg.causal

    def ours(q, k, v, mask):
        return scaled_dot_product_attention(q, k, v, mask=mask, is_causal=causal)

    def torch_sdpa(q, k, v, mask):
        return F.scaled_dot_product_attention(q, k, v, attn_mask=mask, is_causal=causal)

    return [
        {"name": "tensor_ext_sdpa", "fn": ours},
        {"name": "torch_sdpa", "fn": torch_sdpa},
    ]


def benchmark_one(L: int, cfg: BenchConfig, impl: Dict[str, Any]) -> Dict[str, Any]:
    dtype = _get_dtype(cfg.dtype)
    fn = impl["fn"]

    # (B,H,L,D)
    q = torch.randn(cfg.B, cfg.H, L, cfg.D, device=cfg.device, dtype=dtype)
    k = torch.randn(cfg.B, cfg.H, L, cfg.D, device=cfg.device, dtype=dtype)
    v = torch.randn(cfg.B, cfg.H, L, cfg.D, device=cfg.device, dtype=dtype)
    mask = make_mask(cfg, L, dtype)

    @torch.no_grad()
    def fwd_call():
        fn(q, k, v, mask)

    for _ in range(cfg.warmup):
        fwd_call()
    _sync(cfg.device)

    fwd_ms = _time_ms(fwd_call, cfg.iters, cfg.device)

    return {
        "impl": impl["name"],
        "L": L,
        "B": cfg.B,
        "H": cfg.H,
        "D": cfg.D,
        "dtype": cfg.dtype,
        "device": cfg.device,
        "causal": cfg.causal,
        "mask": cfg.mask,
        "iters": cfg.iters,
        "warmup": cfg.warmup,
        "fwd_ms": float(fwd_ms),
    }


def run_bench(cfg: BenchConfig, L_list: List[int], out_csv: str):
    if cfg.causal and cfg.mask != "none":
        raise ValueError("--causal cannot be combined with --mask")
    out_dir = os.path.dirname(out_csv)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)

    impls = make_impls(cfg)
    rows: List[Dict[str, Any]] = []

    logger.info("Config: %s", cfg)
    logger.info("Lengths: %s", L_list)

    for L in L_list:
        for impl in impls:
            try:
                r = benchmark_one(L, cfg, impl)
            except RuntimeError as e:
                # Often OOM for large L; clear cache and continue
                logger.warning("[SKIP] %s L=%d : %s - %s", impl["name"], L, type(e).__name__, e)
                if cfg.device.startswith("cuda"):
                    torch.cuda.empty_cache()
                continue
            rows.append(r)
            logger.info("[OK] %-20s L=%5d fwd=%.3fms", impl["name"], L, r["fwd_ms"])

    if rows:
        fieldnames = list(rows[0].keys())
        with open(out_csv, "w", newline="") as f:
            w = csv.DictWriter(f, fieldnames=fieldnames)
            w.writeheader()
            w.writerows(rows)

        logger.info("Saved CSV -> %s", out_csv)
    return rows


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Benchmark tensor_ext attention against torch SDPA.")
    p.add_argument("--B", type=int, default=2)
    p.add_argument("--H", type=int, default=8)
    p.add_argument("--D", type=int, default=64)
    p.add_argument("--causal", action="store_true")
    p.add_argument("--mask", type=str, default="none", choices=["none", "bool", "additive"])
    p.add_argument("--dtype", type=str, default="fp32", choices=["fp16", "bf16", "fp32"])
    p.add_argument("--device", type=str, default="cuda" if torch.cuda.is_available() else "cpu")
    p.add_argument("--warmup", type=int, default=5)
    p.add_argument("--iters", type=int, default=20)
    p.add_argument("--lengths", type=str, default="128,256,512,1024")
    p.add_argument("--out", type=str, default="bench/results_attention.csv")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging()

    cfg = BenchConfig(
        B=args.B,
        H=args.H,
        D=args.D,
        causal=args.causal,
        mask=args.mask,
        dtype=args.dtype,
        device=args.device,
        warmup=args.warmup,
        iters=args.iters,
    )

    L_list = [int(x.strip()) for x in args.lengths.split(",") if x.strip()]
    return run_bench(cfg, L_list, args.out)


if __name__ == "__main__":
    main()
