#!/usr/bin/env python3
"""
Memory profiling for the render loop.

Runs the headless pipeline for many cycles of frames and tracks process RSS
to detect leaks from views, paths or canvases that outlive their frame.
"""

import psutil
import os
import time
from typing import Dict
import json
import gc

from life_canvas import RenderConfig, Universe, create_pipeline
from life_canvas.animation import ManualFrameHost


def measure_memory_mb() -> float:
    """Get current process memory usage in MB."""
    process = psutil.Process(os.getpid())
    return process.memory_info().rss / 1024 / 1024


def profile_memory_usage(cycles: int = 20, frames_per_cycle: int = 25,
                         size: int = 64, cell_size: int = 5) -> Dict:
    """Profile memory usage over multiple cycles of rendered frames."""
    print(f"🔍 Profiling memory over {cycles} cycles of {frames_per_cycle} frames ({size}x{size} universe)...")
    print("=" * 60)

    gc.collect()
    time.sleep(0.1)  # Stabilize
    baseline_memory = measure_memory_mb()
    print(f"Baseline Memory:              {baseline_memory:6.1f} MB")

    pipeline = create_pipeline(Universe.new(size, size), RenderConfig(cell_size=cell_size), ManualFrameHost())
    pipeline.scheduler.start()
    setup_memory = measure_memory_mb()
    print(f"Memory After Setup:           {setup_memory:6.1f} MB")

    memory_measurements = []
    for cycle in range(cycles):
        start_time = time.time()
        start_memory = measure_memory_mb()

        pipeline.host.run(frames_per_cycle)

        end_memory = measure_memory_mb()
        time_taken = time.time() - start_time
        memory_delta = end_memory - start_memory

        memory_measurements.append({
            'cycle': cycle + 1,
            'start_memory_mb': start_memory,
            'end_memory_mb': end_memory,
            'delta_mb': memory_delta,
            'time_seconds': time_taken,
            'fps': frames_per_cycle / time_taken if time_taken > 0 else 0.0,
        })

        print(f"Cycle {cycle+1:2d}: Memory: {start_memory:6.1f}MB -> {end_memory:6.1f}MB "
              f"({memory_delta:+5.1f}MB) | {frames_per_cycle / max(time_taken, 1e-9):6.1f} fps")

    pipeline.scheduler.stop()
    final_memory = measure_memory_mb()
    gc.collect()

    # Sliding window over recent cycles; a steady upward trend means a leak
    memory_trend = []
    for i in range(5, cycles):
        window = memory_measurements[max(0, i-5):i+1]
        memory_trend.append(sum(m['delta_mb'] for m in window) / len(window))

    avg_memory_trend = sum(memory_trend) / len(memory_trend) if memory_trend else 0
    leak_detected = avg_memory_trend > 0.5  # More than 0.5MB average growth per cycle
    peak_memory = max(m['end_memory_mb'] for m in memory_measurements) if memory_measurements else setup_memory

    results = {
        'timestamp': time.strftime('%Y-%m-%d %H:%M:%S'),
        'cycles': cycles,
        'frames_per_cycle': frames_per_cycle,
        'universe_size': size,
        'memory_baseline_mb': baseline_memory,
        'memory_setup_mb': setup_memory,
        'memory_final_mb': final_memory,
        'peak_memory_mb': peak_memory,
        'memory_trend_mb_per_cycle': avg_memory_trend,
        'leak_detected': leak_detected,
        'all_measurements': memory_measurements
    }

    print("\n" + "=" * 60)
    print("📊 MEMORY PROFILING SUMMARY")
    print("=" * 60)
    print(f"Baseline Memory:             {results['memory_baseline_mb']:6.1f} MB")
    print(f"Final Memory:                {results['memory_final_mb']:6.1f} MB")
    print(f"Peak Memory Usage:           {results['peak_memory_mb']:6.1f} MB")
    print(f"Memory Trend:                {results['memory_trend_mb_per_cycle']:+6.2f} MB/cycle")
    print(f"Leak Detection:              {'❌ LEAK SUSPECTED' if leak_detected else '✅ NO LEAK'}")

    return results


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="Memory profiling for the render loop")
    parser.add_argument("--cycles", type=int, default=20, help="Number of profiling cycles")
    parser.add_argument("--frames", type=int, default=25, help="Frames per cycle")
    parser.add_argument("--size", type=int, default=64, help="Universe width and height")
    parser.add_argument("--output", type=str, default="logs/memory_profile.json", help="Output report file")
    args = parser.parse_args()

    os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)

    results = profile_memory_usage(cycles=args.cycles, frames_per_cycle=args.frames, size=args.size)

    with open(args.output, 'w') as f:
        json.dump(results, f, indent=2, default=str)

    print(f"\n📄 Detailed results saved to: {args.output}")
