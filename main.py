#!/usr/bin/env python3
"""CLI entry point for the pool table simulation.

Usage:
    python main.py play              Launch the Pygame table
    python main.py shot [preset]     Play a preset shot headless and print what happened
    python main.py analyze           Generate analysis charts
    python main.py test              Run all tests
    python main.py demo              Every preset shot, then the charts

Add -v anywhere for debug logging.
"""

import logging
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))


def cmd_play():
    """Launch the Pygame table."""
    print("Launching pool table...")
    print("Controls: hold mouse = charge, release = shoot toward pointer, Q = quit")
    print("-" * 60)
    from sim.visualizer import run_visualizer
    run_visualizer()


def _run_preset(key):
    from billiards.physics import new_state, simulate
    from billiards.rules import terminal_reason
    from billiards.shots import SHOT_PRESETS, play_shot
    from billiards.types import CollisionEvent, CushionEvent, PocketEvent

    preset = SHOT_PRESETS[key]
    state = new_state()
    play_shot(state, key)
    launch = state.cue.vel
    snapshots, events = simulate(state)
    final = snapshots[-1]

    collisions = sum(1 for e in events if isinstance(e, CollisionEvent))
    cushions = sum(1 for e in events if isinstance(e, CushionEvent))
    dropped = [e.ball for e in events if isinstance(e, PocketEvent)]
    outcome = terminal_reason(final) or "in play"

    print(f"Shot: {preset['label']} (charge {preset['charge']:.0%})")
    print(f"  Cue velocity: ({launch.x:.3f}, {launch.y:.3f})  |  Duration: {final.t:.2f}s")
    print(f"  Ball contacts: {collisions}  |  Cushion hits: {cushions}")
    print(f"  Pocketed: {dropped or 'none'}  |  Table: {outcome}")
    print()


def cmd_shot():
    """Play a preset shot headless and print what happened."""
    from billiards.shots import list_shots

    keys = list_shots()
    key = sys.argv[2] if len(sys.argv) > 2 and sys.argv[2] in keys else "break"
    _run_preset(key)
    print("  Available presets: " + ", ".join(keys))


def cmd_analyze():
    """Generate all analysis charts."""
    print("Generating analysis charts...")
    print("-" * 60)
    from sim.analysis import generate_all_charts
    output_dir = os.path.join(os.path.dirname(__file__), "output")
    paths = generate_all_charts(output_dir=output_dir)
    print(f"\nDone! {len(paths)} charts saved to {output_dir}/")


def cmd_test():
    """Run all tests."""
    import subprocess
    print("Running tests...")
    print("-" * 60)
    result = subprocess.run(
        [sys.executable, "-m", "pytest", "tests/", "-v"],
        cwd=os.path.dirname(os.path.abspath(__file__)),
    )
    sys.exit(result.returncode)


def cmd_demo():
    """Every preset shot, then the charts."""
    print("=" * 60)
    print("  POOL TABLE SIMULATION DEMO")
    print("=" * 60)
    print()

    from billiards.shots import list_shots
    for key in list_shots():
        _run_preset(key)

    print("-" * 60)
    cmd_analyze()

    print()
    print("=" * 60)
    print("  Demo complete! Check the 'output' folder for charts.")
    print("=" * 60)


COMMANDS = {
    "play": cmd_play,
    "shot": cmd_shot,
    "analyze": cmd_analyze,
    "test": cmd_test,
    "demo": cmd_demo,
}


def main():
    verbose = "-v" in sys.argv
    if verbose:
        sys.argv.remove("-v")
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if len(sys.argv) < 2 or sys.argv[1] not in COMMANDS:
        print(__doc__)
        print("Available commands:")
        for name, func in COMMANDS.items():
            print(f"  {name:12s} {func.__doc__}")
        sys.exit(1)

    COMMANDS[sys.argv[1]]()


if __name__ == "__main__":
    main()
