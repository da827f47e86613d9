"""Village Adventure Core Engine"""
__version__ = "1.0.0"

from src.core.locations import Location
from src.core.player import PlayerState, GameState
from src.core.combat import CombatEngine, CombatOutcome, CombatResult, OpponentKind
from src.core.navigator import Navigator, TravelResult
from src.core.menu import ActionType, MenuOption, ParsedChoice, InputError, parse_choice
from src.core.errors import GameError, GameErrorKind
from src.core.engine import GameEngine, ActionResult, build_engine

__all__ = [
    "Location",
    "PlayerState",
    "GameState",
    "CombatEngine",
    "CombatOutcome",
    "CombatResult",
    "OpponentKind",
    "Navigator",
    "TravelResult",
    "ActionType",
    "MenuOption",
    "ParsedChoice",
    "InputError",
    "parse_choice",
    "GameError",
    "GameErrorKind",
    "GameEngine",
    "ActionResult",
    "build_engine",
]
