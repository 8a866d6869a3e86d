"""Service layer exports."""

from .errors import GenerationError, UnsolvableMazeError
from .maze_generator import MazeGenerator
from .path_finder import shortest_path
from .entity_placer import EntityPlacer, Placement
from .board_builder import BoardBuilder
from .action_dispatcher import ActionDispatcher
from .roulette_ticker import RouletteTicker
from .encounter_engine import EncounterEngine, weighted_index
from .controllers import Command, Confirm, GameController, GameSnapshot, Move, Regenerate

__all__ = [
    "ActionDispatcher",
    "BoardBuilder",
    "Command",
    "Confirm",
    "EncounterEngine",
    "EntityPlacer",
    "GameController",
    "GameSnapshot",
    "GenerationError",
    "MazeGenerator",
    "Move",
    "Placement",
    "Regenerate",
    "RouletteTicker",
    "UnsolvableMazeError",
    "shortest_path",
    "weighted_index",
]
