"""Service-layer exceptions."""


class UnsolvableMazeError(Exception):
    """Raised when no open path joins the start and exit corners."""


class GenerationError(Exception):
    """Raised when a playable board could not be built within the retry budget."""
