"""Matplotlib analysis charts: speed decay, break traces, pocketing heatmap."""

import math
import os

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend
import matplotlib.pyplot as plt
import numpy as np

from billiards.physics import new_state, simulate
from billiards.shots import SHOT_PRESETS, play_shot, strike
from billiards.types import PocketEvent, Vec2
from billiards import table

BALL_COLORS = ["#f0f0f0", "#ffc107", "#1e88e5", "#e53935", "#8e24aa", "#fb8c00", "#43a047"]


def _style_chart(ax, title):
    """Apply dark theme styling to chart."""
    ax.set_facecolor("#0f0f1a")
    ax.set_title(title, color="#e0e0e0", fontsize=13, fontweight="bold", pad=12)
    ax.tick_params(colors="#888888", labelsize=9)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.spines["bottom"].set_color("#333333")
    ax.spines["left"].set_color("#333333")
    ax.xaxis.label.set_color("#aaaaaa")
    ax.yaxis.label.set_color("#aaaaaa")


def _positions(snapshots, index):
    """(frames, 2) array of one ball's centre, cut off once it drops."""
    pts = [(s.balls[index].pos.x, s.balls[index].pos.y) for s in snapshots if not s.balls[index].scored]
    return np.array(pts).reshape(-1, 2)


def chart_speed_decay(charges=(0.25, 0.5, 0.75, 1.0), save_path=None):
    """Chart 1: Cue ball speed over time for several charge levels.

    The cue ball is sent straight at the top cushion from its spot so it
    never meets another ball. Friction removes a fixed amount of speed per
    frame, so each curve is a straight line down to rest.
    """
    fig, ax = plt.subplots(figsize=(8, 5))
    fig.set_facecolor("#0f0f1a")
    _style_chart(ax, "Cue Ball Speed vs Time")

    start = table.START_POSITIONS[table.CUE_BALL]
    colors = ["#dc3545", "#ffc107", "#4ecdc4", "#28a745"]
    for charge, color in zip(charges, colors):
        state = new_state()
        strike(state, Vec2(start.x, table.TABLE_HEIGHT / 2), charge)
        snapshots, _ = simulate(state)
        t = np.array([s.t for s in snapshots])
        speed = np.array([s.cue.vel.magnitude() for s in snapshots])
        ax.plot(t, speed, color=color, linewidth=2, label=f"charge {charge:.0%}")

    ax.set_xlabel("Time (s)")
    ax.set_ylabel("Speed (units/s)")
    ax.set_ylim(bottom=0)
    ax.legend(facecolor="#1a1a2e", edgecolor="#333", labelcolor="#e0e0e0", fontsize=9)
    ax.grid(True, alpha=0.15)

    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, facecolor=fig.get_facecolor())
    return fig


def chart_shot_traces(key="break", save_path=None):
    """Chart 2: Paths of every ball after a preset shot."""
    state = new_state()
    play_shot(state, key)
    snapshots, events = simulate(state)

    fig, ax = plt.subplots(figsize=(10, 5.8))
    fig.set_facecolor("#0f0f1a")
    _style_chart(ax, f"Ball Paths: {SHOT_PRESETS[key]['label']}")

    w, h = table.TABLE_WIDTH, table.TABLE_HEIGHT
    ax.add_patch(plt.Rectangle((-w / 2, -h / 2), w, h, color="#1a662f", zorder=0))
    for p in table.POCKET_POSITIONS:
        ax.add_patch(plt.Circle((p.x, p.y), table.POCKET_RADIUS, color="#111111", zorder=1))

    for i, color in enumerate(BALL_COLORS):
        path = _positions(snapshots, i)
        if len(path) == 0:
            continue
        ax.plot(path[:, 0], path[:, 1], color=color, linewidth=1.2, alpha=0.9, zorder=2)
        ax.add_patch(plt.Circle(tuple(path[-1]), table.BALL_RADIUS, color=color, zorder=3))

    dropped = sorted({e.ball for e in events if isinstance(e, PocketEvent)})
    ax.text(-w / 2, -h / 2 - 0.6, f"pocketed: {dropped or 'none'}   duration: {snapshots[-1].t:.1f}s",
            color="#aaaaaa", fontsize=9)

    ax.set_xlim(-w / 2 - 0.5, w / 2 + 0.5)
    ax.set_ylim(-h / 2 - 0.9, h / 2 + 0.5)
    ax.set_aspect("equal")

    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, facecolor=fig.get_facecolor())
    return fig


def pocketing_grid(n_angles=16, charges=(0.25, 0.5, 0.75, 1.0), max_time=30.0):
    """Object balls pocketed by one shot, for each charge x aim angle.

    Aim angles are measured from the +x axis around the cue ball's spot.
    Returns (angles_deg, charges, grid) with grid shaped (len(charges), n_angles).
    """
    angles = np.linspace(0.0, 360.0, n_angles, endpoint=False)
    grid = np.zeros((len(charges), n_angles))
    start = table.START_POSITIONS[table.CUE_BALL]

    for i, charge in enumerate(charges):
        for j, angle in enumerate(angles):
            rad = math.radians(angle)
            target = Vec2(start.x + math.cos(rad), start.y + math.sin(rad))
            state = new_state()
            strike(state, target, charge)
            snapshots, _ = simulate(state, max_time=max_time)
            final = snapshots[-1]
            grid[i][j] = sum(1 for k, b in enumerate(final.balls) if b.scored and k != table.CUE_BALL)

    return angles, np.array(charges), grid


def chart_pocketing_heatmap(n_angles=16, save_path=None):
    """Chart 3: Object balls pocketed by a single shot, by aim angle and charge."""
    angles, charges, grid = pocketing_grid(n_angles=n_angles)

    fig, ax = plt.subplots(figsize=(10, 4.5))
    fig.set_facecolor("#0f0f1a")
    _style_chart(ax, "Balls Pocketed by One Shot")

    im = ax.imshow(grid, cmap="viridis", vmin=0, vmax=table.BALL_COUNT - 1, aspect="auto")
    ax.set_xticks(range(len(angles)))
    ax.set_xticklabels([f"{a:.0f}°" for a in angles], rotation=45, ha="right", fontsize=8)
    ax.set_yticks(range(len(charges)))
    ax.set_yticklabels([f"{c:.0%}" for c in charges], fontsize=9)
    ax.set_xlabel("Aim angle")
    ax.set_ylabel("Charge")

    for i in range(grid.shape[0]):
        for j in range(grid.shape[1]):
            ax.text(j, i, f"{grid[i][j]:.0f}", ha="center", va="center", fontsize=8, color="white")

    cbar = fig.colorbar(im, ax=ax, shrink=0.8)
    cbar.set_label("Object balls down", color="#aaa")
    cbar.ax.tick_params(colors="#888")

    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, facecolor=fig.get_facecolor())
    return fig


def generate_all_charts(output_dir="."):
    """Generate all analysis charts and save to output directory."""
    os.makedirs(output_dir, exist_ok=True)

    paths = []

    path = os.path.join(output_dir, "chart_speed_decay.png")
    chart_speed_decay(save_path=path)
    paths.append(path)
    print(f"  Saved: {path}")

    for key in ("break", "bank"):
        path = os.path.join(output_dir, f"chart_traces_{key}.png")
        chart_shot_traces(key, save_path=path)
        paths.append(path)
        print(f"  Saved: {path}")

    path = os.path.join(output_dir, "chart_pocketing_heatmap.png")
    print("  Generating pocketing heatmap (running shots)...")
    chart_pocketing_heatmap(save_path=path)
    paths.append(path)
    print(f"  Saved: {path}")

    plt.close("all")
    return paths
