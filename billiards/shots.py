"""Preset shots for demos and analysis.

Each preset is an aim point in world coordinates and a charge level. The cue
ball starts at (-4.5, 0); the head object ball sits at (3, 0).
"""

from billiards.types import SimulationState, Vec2
from billiards import shot
from billiards import table

SHOT_PRESETS = {
    "break": {
        "label": "Full Power Break",
        "target": (3.0, 0.0),
        "charge": 1.0,
    },
    "soft_break": {
        "label": "Soft Break",
        "target": (3.0, 0.0),
        "charge": 0.6,
    },
    "scratch": {
        "label": "Straight Into Bottom-Left Pocket",
        "target": (table.POCKET_POSITIONS[0].x, table.POCKET_POSITIONS[0].y),
        "charge": 0.5,
    },
    "bank": {
        "label": "Bank Off the Top Cushion",
        "target": (-1.0, 4.0),
        "charge": 0.6,
    },
    "tap": {
        "label": "Tap (barely moves)",
        "target": (-3.5, 0.0),
        "charge": 0.05,
    },
}


def get_shot(key: str) -> tuple[Vec2, float]:
    """Return (aim point, charge) for a preset key."""
    preset = SHOT_PRESETS[key]
    return Vec2(*preset["target"]), preset["charge"]


def list_shots() -> list[str]:
    """Return all available shot preset keys."""
    return list(SHOT_PRESETS.keys())


def strike(state: SimulationState, target: Vec2, charge: float, power: float = table.SHOT_POWER) -> bool:
    """Strike the cue ball towards target as if the button was held to charge.

    Goes through the same press/release path as the mouse. Returns False if
    balls are still moving.
    """
    if not shot.press(state, target.x, target.y):
        return False
    state.shot.progress = min(max(charge, 0.0), 1.0)
    return shot.release(state, target.x, target.y, power)


def play_shot(state: SimulationState, key: str, power: float = table.SHOT_POWER) -> bool:
    """Strike the cue ball on a resting table as the preset describes."""
    target, charge = get_shot(key)
    return strike(state, target, charge, power)
