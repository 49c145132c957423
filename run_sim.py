from __future__ import annotations
import argparse, json, logging, random, time
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional
from control.cues import CueEvent
from control.runner import DONE, DefragRunner, Frame
from disk.blocks import BLOCK_COUNT, BlockGrid, BlockState, decode_grid, encode_grid
from disk.fragmentation import grid_metrics
from disk.generator import GridProfile, generate
from viz.ascii_map import render_map
from viz.svg_bar import render_document

class TraceWriter:
    """JSONL trace of a run: start, frame, cue and done events."""
    def __init__(self, path: str):
        self.fh = open(path, 'w', encoding='utf-8')
        self.step = 0

    def write(self, ev: dict):
        self.fh.write(json.dumps(ev) + '\n')

    def on_frame(self, frame: Frame):
        self.step = frame.step
        ev = {'event': 'frame' if frame.step else 'start', 'step': frame.step, 'grid': encode_grid(frame.grid)}
        if frame.move is not None:
            ev['move'] = [frame.move.target, frame.move.source]
            ev['seek'] = frame.move.distance
        self.write(ev)

    def on_cue(self, cue: CueEvent):
        ev = {'event': 'cue', 'step': self.step, **asdict(cue)}
        if ev['frequency'] is None:
            del ev['frequency']
        self.write(ev)

    def close(self, steps: Optional[int]):
        if steps is not None:
            self.write({'event': 'done', 'steps': steps})
        self.fh.close()

def _fmt_counts(grid: BlockGrid) -> str:
    c = grid_metrics(grid).counts
    return ' '.join(f"{st.value}={c[st]}" for st in BlockState)

def _fmt_frag(grid: BlockGrid) -> str:
    m = grid_metrics(grid)
    f = m.free
    return (f"LFE={f.lfe} holes={f.hole_count} external_frag={f.external_frag:.3f} "
            f"entropy={f.entropy:.3f} fragmented_runs={m.fragmented_runs}")

def build_parser() -> argparse.ArgumentParser:
    ap=argparse.ArgumentParser(description="Simulate a disk defragmentation run.")
    ap.add_argument('--seed', type=int, default=None, help="Seed for a reproducible run.")
    ap.add_argument('--grid', default=None,
                    help="Start from an encoded grid ('.'=free F=fragmented C=contiguous U=unmovable) "
                         "instead of generating one.")
    ap.add_argument('--blocks', type=int, default=BLOCK_COUNT, help="Generated grid length.")
    ap.add_argument('--max-steps', type=int, default=None)
    ap.add_argument('--realtime', action='store_true', help="Sleep the paced delay between steps.")
    ap.add_argument('--delay-scale', type=float, default=1.0, help="Multiplier on paced delays (with --realtime).")
    ap.add_argument('--frames-out', default=None, help="Write a JSONL trace of frames and cues.")
    ap.add_argument('--svg-out', default=None, help="Write before/after bars as SVG.")
    ap.add_argument('--show-map', action='store_true')
    ap.add_argument('--width', type=int, default=80, help="ASCII map width.")
    ap.add_argument('--log-level', default='WARNING', choices=['DEBUG','INFO','WARNING','ERROR'])
    return ap

def main(argv: Optional[List[str]] = None) -> int:
    ap=build_parser()
    args=ap.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    fixed: Optional[BlockGrid] = None
    if args.grid is not None:
        try:
            fixed = decode_grid(args.grid)
        except ValueError as exc:
            ap.error(f"--grid: {exc}")
    if args.blocks <= 0:
        ap.error("--blocks must be positive")

    profile = GridProfile(block_count=args.blocks)
    rng = random.Random(args.seed)

    def grid_factory(r):
        return list(fixed) if fixed is not None else generate(r, profile)

    trace = TraceWriter(args.frames_out) if args.frames_out else None
    cue_counts = {}

    def on_cue(cue: CueEvent):
        cue_counts[cue.kind] = cue_counts.get(cue.kind, 0) + 1
        if trace:
            trace.on_cue(cue)

    steps = None
    try:
        with DefragRunner(rng=rng, grid_factory=grid_factory,
                          sleep=time.sleep if args.realtime else (lambda s: None),
                          on_frame=trace.on_frame if trace else None, on_cue=on_cue) as runner:
            runner.pacing.scale = args.delay_scale if args.realtime else 0.0
            runner.start()
            steps = runner.run(max_steps=args.max_steps)
            completed = runner.state == DONE
    finally:
        if trace:
            trace.close(steps)

    before = runner.initial_grid
    after = runner.current.grid
    if args.svg_out:
        Path(args.svg_out).write_text(render_document(before, after), encoding='utf-8')

    print("="*72)
    print("Disk Defrag Simulator - Run Summary")
    print("="*72)
    print(f"Seed: {args.seed}   Blocks: {len(before)}   Source: {'--grid' if fixed is not None else 'generated'}")
    print(f"Steps: {steps}   Completed: {completed}")
    print(f"Before: {_fmt_counts(before)}")
    print(f"After:  {_fmt_counts(after)}")
    print("Cues: " + ' '.join(f"{k}={v}" for k, v in sorted(cue_counts.items())))
    print("-"*72)
    print(f"Fragmentation before: {_fmt_frag(before)}")
    print(f"Fragmentation after:  {_fmt_frag(after)}")
    if args.show_map:
        print("-"*72)
        print("Disk map (ASCII):")
        print("before " + render_map(before, args.width))
        print("after  " + render_map(after, args.width))
    print("="*72)
    return 0

if __name__=='__main__':
    raise SystemExit(main())
