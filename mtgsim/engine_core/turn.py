"""
Turn Sequencer - Walks the phase/step schedule and drives zone actions.

The schedule is static:

    beginning        untap, upkeep, draw
    precombat-main   (no steps)
    combat           beginning-of-combat, declare-attackers,
                     declare-blockers, combat-damage, end-of-combat
    postcombat-main  (no steps)
    ending           end, cleanup

Every call to advance() lands on a concrete step or a main phase, never on
a bare phase boundary. Only the draw step has an automatic action.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable
import logging

from .errors import GameInvariantError
from .state import GameState, OPENING_HAND_SIZE
from .zones import draw

logger = logging.getLogger(__name__)


NO_STEP = -1
NO_STEP_LABEL = "none"


@dataclass(frozen=True)
class Phase:
    """A coarse turn division, optionally split into ordered steps."""
    name: str
    steps: tuple[str, ...] = ()

    @property
    def is_main(self) -> bool:
        return not self.steps


PHASES: tuple[Phase, ...] = (
    Phase("beginning", ("untap", "upkeep", "draw")),
    Phase("precombat-main"),
    Phase(
        "combat",
        (
            "beginning-of-combat",
            "declare-attackers",
            "declare-blockers",
            "combat-damage",
            "end-of-combat",
        ),
    ),
    Phase("postcombat-main"),
    Phase("ending", ("end", "cleanup")),
)

PHASE_NAMES = tuple(phase.name for phase in PHASES)
STEP_NAMES = tuple(step for phase in PHASES for step in phase.steps)


StepAction = Callable[[GameState], list[str]]


def _draw_step(game: GameState) -> list[str]:
    """Active player draws one card, except on the first turn of the game."""
    if game.turn == 1:
        return [f"{game.active_player.name} skips the first draw"]
    player = game.active_player
    drawn = draw(player, 1)
    if not drawn:
        return [f"{player.name} tried to draw a card, but their library is empty"]
    return [f"{player.name} drew a card"]


# Steps without an entry have no automatic action
STEP_ACTIONS: dict[str, StepAction] = {
    "draw": _draw_step,
}


def current_phase(game: GameState) -> str:
    """Name of the phase the game is in."""
    return _phase(game).name


def current_step(game: GameState) -> str:
    """Name of the current step, or NO_STEP_LABEL in main phases."""
    phase = _phase(game)
    if phase.is_main or game.step_idx == NO_STEP:
        return NO_STEP_LABEL
    if not 0 <= game.step_idx < len(phase.steps):
        raise GameInvariantError(
            f"step index {game.step_idx} out of range for phase {phase.name}"
        )
    return phase.steps[game.step_idx]


def initialize(game: GameState) -> list[str]:
    """
    Put the game at turn 1, before the first step, and deal opening hands.

    The opening draw happens once, outside the step machinery.
    """
    game.turn = 1
    game.phase_idx = 0
    game.step_idx = NO_STEP
    game.active_player_idx = 0

    changes = []
    for player in game.players:
        drawn = draw(player, OPENING_HAND_SIZE)
        changes.append(f"{player.name} drew an opening hand of {len(drawn)}")
        logger.info(
            "%s | Life: %d | Library: %d | Hand: %d",
            player.name, player.life, len(player.library), len(player.hand),
        )

    game.log.extend(changes)
    return changes


def advance(game: GameState) -> list[str]:
    """
    Move to the next step, or the next phase when steps run out.

    Past the last phase the schedule wraps: the turn counter increments and
    the next player becomes active. A main phase reached by a phase change
    is a landing point; a phase with steps continues to its first step.

    Returns descriptions of the state changes made.
    """
    changes: list[str] = []
    changed_phase = False

    # Each pass either lands or moves one phase forward
    for _ in range(len(PHASES) + 1):
        phase = _phase(game)

        if phase.steps:
            next_idx = game.step_idx + 1
            if next_idx < len(phase.steps):
                game.step_idx = next_idx
                changes.extend(_enter_step(game, phase.steps[next_idx]))
                game.log.extend(changes)
                return changes
        elif changed_phase:
            logger.debug("Turn %d: %s", game.turn, phase.name)
            changes.append(f"{phase.name} phase")
            game.log.extend(changes)
            return changes

        changes.extend(_next_phase(game))
        changed_phase = True

    raise GameInvariantError(
        f"advance did not settle (phase_idx={game.phase_idx}, step_idx={game.step_idx})"
    )


def _phase(game: GameState) -> Phase:
    if not 0 <= game.phase_idx < len(PHASES):
        raise GameInvariantError(f"phase index {game.phase_idx} out of range")
    return PHASES[game.phase_idx]


def _next_phase(game: GameState) -> list[str]:
    """Step to the next phase, wrapping into a new turn past the end."""
    game.phase_idx += 1
    game.step_idx = NO_STEP

    if game.phase_idx < len(PHASES):
        return []

    game.phase_idx = 0
    game.turn += 1
    game.active_player_idx = (game.active_player_idx + 1) % game.num_players
    logger.info("Turn %d begins for %s", game.turn, game.active_player.name)
    return [f"turn {game.turn}: {game.active_player.name} is the active player"]


def _enter_step(game: GameState, step: str) -> list[str]:
    logger.debug("Turn %d: %s step", game.turn, step)
    changes = [f"{step} step"]
    action = STEP_ACTIONS.get(step)
    if action:
        changes.extend(action(game))
    return changes
