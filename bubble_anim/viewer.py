#!/usr/bin/env python3
import argparse
import random

import matplotlib.pyplot as plt
import matplotlib.animation as animation

from bubble_anim.engine import AnimationEngine, EngineStatus
from bubble_anim.errors import InvalidConfiguration
from bubble_anim.utils import install_crash_logger

DEMO_VALUES = [42, 15, 78, 30, 5, 95, 60, 20, 10, 55, 100, 1, 2, 1]

IDLE_COLOR = '#1f77b4'
ACTIVE_COLOR = 'red'
DONE_COLOR = 'green'


def bar_colors(snapshot):
    if snapshot.finished:
        return [DONE_COLOR] * len(snapshot.values)
    active = snapshot.active or ()
    return [ACTIVE_COLOR if i in active else IDLE_COLOR for i in range(len(snapshot.values))]


def status_text(engine, snapshot):
    if engine.status is EngineStatus.FINISHED:
        return "Sorted"
    if engine.status is EngineStatus.FAILED:
        return f"Stopped: {engine.error}"
    if engine.status is EngineStatus.CANCELLED:
        return "Cancelled"
    if snapshot.active is None:
        return "Waiting..."
    a, b = snapshot.active
    return f"Comparing: {snapshot.values[a]} and {snapshot.values[b]}"


def visualize(values, step_delay=0.1, arming_delay=2.0, interval=50):
    engine = AnimationEngine()
    engine.start(values, arming_delay=arming_delay, step_delay=step_delay)

    fig, ax = plt.subplots()
    ax.set_title("Bubble Sort Animation")
    bar_rects = ax.bar(range(len(values)), values, align="edge")
    ax.set_xlim(0, max(len(values), 1))
    low = min(min(values, default=0), 0)
    high = max(max(values, default=1), 1)
    ax.set_ylim(low * 1.1, high * 1.1)
    text = ax.text(0.02, 0.95, "", transform=ax.transAxes)

    # the renderer polls on its own schedule and never touches the engine state
    def update(frame):
        snap = engine.snapshot()
        for rect, val, color in zip(bar_rects, snap.values, bar_colors(snap)):
            rect.set_height(val)
            rect.set_color(color)
        text.set_text(status_text(engine, snap))
        if not engine.is_running():
            ani.event_source.stop()
        return bar_rects

    ani = animation.FuncAnimation(fig, update, interval=interval, repeat=False,
                                  blit=False, cache_frame_data=False)
    try:
        plt.show()
    finally:
        engine.stop(timeout=1)
    return engine


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Bubble Sort Animation")
    parser.add_argument('--size', type=int, help='Number of random elements')
    parser.add_argument('--seed', type=int, help='Random seed')
    parser.add_argument('--list', nargs='+', type=int, help='Provide list of integers to sort')
    parser.add_argument('--delay', type=int, default=100, help='Pause after each step in ms')
    parser.add_argument('--arming-delay', type=int, default=2000, help='Wait before sorting starts in ms')
    parser.add_argument('--interval', type=int, default=50, help='Redraw interval in ms')
    return parser.parse_args(argv)


def values_from_args(args):
    if args.list:
        return list(args.list)
    if args.size is None:
        return list(DEMO_VALUES)
    if args.seed is not None:
        random.seed(args.seed)
    return random.sample(range(1, args.size * 5 + 1), args.size)


def main(argv=None):
    install_crash_logger()
    args = parse_args(argv)
    values = values_from_args(args)
    try:
        visualize(values, step_delay=args.delay / 1000, arming_delay=args.arming_delay / 1000,
                  interval=args.interval)
    except InvalidConfiguration as exc:
        raise SystemExit(f"error: {exc}")


if __name__ == '__main__':
    main()
