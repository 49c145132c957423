"""
Disk Defrag Simulator - Visualizer

Renders a JSONL trace written by ``run_sim.py --frames-out`` with Matplotlib:
a time x position heatmap of block states, plus the before/after bars drawn
from run-length segments.

How to run (recommended, from repo root):
    python run_sim.py --seed 7 --frames-out frames.jsonl
    python -m tools.visualize_defrag --trace frames.jsonl --out out_defrag.png
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

# Ensure repo root is on sys.path when running as a script:
# (python -m tools.visualize_defrag already works without this,
#  but this makes `python tools/visualize_defrag.py ...` work too.)
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

import numpy as np
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.colors import ListedColormap

from disk.blocks import BLOCK_COLORS, BlockGrid, BlockState, decode_grid
from disk.fragmentation import grid_metrics
from viz.segments import compress

STATE_ORDER = list(BlockState)
STATE_CODE = {st: i for i, st in enumerate(STATE_ORDER)}


def load_trace(path: str):
    """Yield JSON events from a JSONL file."""
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line:
                yield json.loads(line)


def load_frames(path: str, every: int = 1) -> list[BlockGrid]:
    """Decode the start grid and every ``every``-th frame; the last frame is always kept."""
    frames: list[BlockGrid] = []
    last = None
    for ev in load_trace(path):
        et = ev.get("event")
        if et not in ("start", "frame"):
            continue
        last = ev
        if et == "start" or every <= 1 or ev["step"] % every == 0:
            frames.append(decode_grid(ev["grid"]))
            last = None
    if last is not None:
        frames.append(decode_grid(last["grid"]))
    return frames


def frame_matrix(frames: list[BlockGrid]) -> np.ndarray:
    """Stack grids into a (time, position) array of state codes."""
    return np.array([[STATE_CODE[b] for b in g] for g in frames], dtype=np.int8)


def state_cmap() -> ListedColormap:
    return ListedColormap([BLOCK_COLORS[st] for st in STATE_ORDER])


def draw_bar(ax, grid: BlockGrid, title: str):
    for seg in compress(grid):
        ax.broken_barh([(seg.offset, seg.length)], (0, 1), facecolors=seg.color)
    ax.set_xlim(0, len(grid))
    ax.set_yticks([])
    ax.set_title(title, fontsize=9)


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--trace", required=True, help="Path to JSONL trace from run_sim.py --frames-out")
    ap.add_argument("--out", default="out_defrag.png", help="Output image file")
    ap.add_argument("--every", type=int, default=1, help="Keep every N frames")
    args = ap.parse_args(argv)

    trace_path = Path(args.trace)
    if not trace_path.exists():
        raise SystemExit(f"Trace not found: {trace_path}")

    frames = load_frames(str(trace_path), args.every)
    if not frames:
        raise SystemExit("No frames captured. Check trace path and --every.")

    H = frame_matrix(frames)  # (time, position)

    fig = plt.figure(figsize=(10.5, 6.0))
    gs = fig.add_gridspec(3, 1, height_ratios=[1, 6, 1])
    draw_bar(fig.add_subplot(gs[0]), frames[0], "Before")
    ax = fig.add_subplot(gs[1])
    ax.imshow(H, aspect="auto", interpolation="nearest", cmap=state_cmap(),
              vmin=0, vmax=len(STATE_ORDER) - 1)
    ax.set_title("Block states over time")
    ax.set_xlabel("block position")
    ax.set_ylabel("time (frames)")
    draw_bar(fig.add_subplot(gs[2]), frames[-1], "After")

    m = grid_metrics(frames[-1]).free
    caption = (
        f"Final fragmentation: LFE={m.lfe}, holes={m.hole_count}, "
        f"external_frag={m.external_frag:.3f}, entropy={m.entropy:.3f}"
    )
    fig.text(0.01, 0.01, caption, fontsize=9)

    fig.tight_layout()
    out_path = Path(args.out)
    fig.savefig(str(out_path), dpi=220)
    plt.close(fig)
    print(f"Wrote: {out_path.resolve()}")


if __name__ == "__main__":
    main()
