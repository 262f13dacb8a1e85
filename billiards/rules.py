"""Rules: when a game ends, and the running tally of finished games.

A game ends when:
- the cue ball drops ("scratch", a loss), checked first
- every object ball has dropped ("cleared", a win)

Either way the table is racked again from the start layout.
"""

from dataclasses import dataclass, field
from typing import Optional

from billiards.types import SimulationState
from billiards import table

SCRATCH = "scratch"
CLEARED = "cleared"


@dataclass
class GameRecord:
    """Summary of one finished game."""
    reason: str          # SCRATCH or CLEARED
    shots: int
    duration: float      # simulated seconds
    pocketed: list       # indices of object balls that dropped


@dataclass
class Session:
    """Tally of games played since the program started."""
    wins: int = 0
    losses: int = 0
    history: list = field(default_factory=list)  # list[GameRecord]

    @property
    def games(self) -> int:
        return self.wins + self.losses


def terminal_reason(state: SimulationState) -> Optional[str]:
    """Return SCRATCH or CLEARED if the game is over, else None."""
    balls = state.balls
    if balls[table.CUE_BALL].scored:
        return SCRATCH
    if all(b.scored for i, b in enumerate(balls) if i != table.CUE_BALL):
        return CLEARED
    return None


def record_game(session: Session, state: SimulationState, reason: str) -> Session:
    """Append a finished game to the session and return the updated tally."""
    s = Session(wins=session.wins, losses=session.losses, history=list(session.history))

    s.history.append(GameRecord(
        reason=reason,
        shots=state.shots_taken,
        duration=state.t,
        pocketed=[i for i, b in enumerate(state.balls) if b.scored and i != table.CUE_BALL],
    ))
    if reason == CLEARED:
        s.wins += 1
    else:
        s.losses += 1
    return s
