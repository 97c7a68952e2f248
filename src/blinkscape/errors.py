"""Exceptions raised by blinkscape.

Expected refusals (a scene that is not loaded yet, a transition that is already
running) are reported as ``False`` return values, not exceptions. Only caller
bugs and failed asset fetches raise.
"""


class BlinkscapeError(Exception):
    """Base class for all blinkscape errors."""


class SceneIndexError(BlinkscapeError, IndexError):
    """Raised when a scene index falls outside the configured scene list.

    Attributes:
        index: The offending index.
        total: Number of configured scenes.
    """

    def __init__(self, index: int, total: int) -> None:
        """Initialize with the bad index and the scene count."""
        self.index = index
        self.total = total
        super().__init__(f"Scene index {index} out of range (0..{total - 1})")


class SceneLoadError(BlinkscapeError):
    """Raised when the asset loader fails to fetch a scene.

    The registry leaves the cache slot empty, so a later load may succeed.

    Attributes:
        index: Index of the scene that failed.
        locator: Asset locator that was being fetched.
    """

    def __init__(self, index: int, locator: str) -> None:
        """Initialize with the scene index and its asset locator."""
        self.index = index
        self.locator = locator
        super().__init__(f"Failed to load scene {index} from {locator!r}")


class TransitionError(BlinkscapeError):
    """Raised inside a transition when the scene switch is refused."""
