from __future__ import annotations

from pathlib import Path
from typing import Dict, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np


def read_xy_txt(path: Path) -> Tuple[np.ndarray, np.ndarray]:
    xs, ys = [], []
    with Path(path).open("r", encoding="utf-8", errors="replace") as f:
        for line in f:
            s = line.strip()
            if not s or s.startswith("#"):
                continue
            parts = [p for p in s.replace(",", " ").split() if p]
            if len(parts) < 2:
                continue
            try:
                x, y = float(parts[0]), float(parts[1])
            except ValueError:
                continue
            xs.append(x)
            ys.append(y)
    return np.asarray(xs, dtype=np.float64), np.asarray(ys, dtype=np.float64)


def _as_xy(points: Sequence[Tuple[float, float]]) -> np.ndarray:
    arr = np.asarray(points, dtype=np.float64)
    if arr.size == 0:
        return np.zeros((0, 2), dtype=np.float64)
    return arr.reshape(-1, 2)


def match_points(
    detected: Sequence[Tuple[float, float]],
    truth: Sequence[Tuple[float, float]],
    tolerance: float = np.inf,
) -> Tuple[np.ndarray, np.ndarray]:
    """Pair truth points with detections one-to-one, closest pairs first.

    Returns, for every truth point, the index of and distance to its paired
    detection. Truth points with no free detection within ``tolerance``
    get -1 and inf.
    """
    det = _as_xy(detected)
    gt = _as_xy(truth)
    nearest = np.full(gt.shape[0], -1, dtype=np.int64)
    dist = np.full(gt.shape[0], np.inf, dtype=np.float64)
    if gt.shape[0] == 0 or det.shape[0] == 0:
        return nearest, dist

    dists = np.linalg.norm(gt[:, None, :] - det[None, :, :], axis=-1)
    used = set()
    for flat in np.argsort(dists, axis=None, kind="stable"):
        g, d = divmod(int(flat), det.shape[0])
        if dists[g, d] > tolerance:
            break
        if nearest[g] >= 0 or d in used:
            continue
        nearest[g] = d
        dist[g] = dists[g, d]
        used.add(d)
    return nearest, dist


def verify_points_vs_gt(
    *,
    points: Sequence[Tuple[float, float]],
    gt_txt_path: Path,
    out_dir: Path,
    image_stem: str,
    tolerance: float = 0.02,
) -> Dict[str, float | int | Path]:
    x_gt, y_gt = read_xy_txt(gt_txt_path)
    truth = np.column_stack([x_gt, y_gt]) if x_gt.size else np.zeros((0, 2))
    det = _as_xy(points)

    nearest, dist = match_points(det, truth, tolerance)
    hit = nearest >= 0
    matched = int(np.count_nonzero(hit))

    rmse = float(np.sqrt(np.mean(dist[hit] ** 2))) if matched else float("nan")
    mae = float(np.mean(dist[hit])) if matched else float("nan")

    fig = plt.figure()
    plt.scatter(x_gt, y_gt, s=30, facecolors="none", edgecolors="tab:blue",
                label=f"GT ({Path(gt_txt_path).stem})")
    if det.shape[0]:
        plt.scatter(det[:, 0], det[:, 1], s=8, color="tab:red", label="detected markers")
    plt.xlabel("x")
    plt.ylabel("y")
    plt.grid(True, alpha=0.25)
    plt.legend()
    plt.title(f"{image_stem} verification")
    plt.tight_layout()

    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    overlay_path = out_dir / f"{image_stem}_markers_verify.png"
    fig.savefig(overlay_path, dpi=150, bbox_inches="tight")
    plt.close(fig)

    return {
        "overlay_path": overlay_path,
        "rmse": rmse,
        "mae": mae,
        "matched": matched,
        "missed": int(truth.shape[0] - matched),
        "extra": int(det.shape[0] - matched),
    }
