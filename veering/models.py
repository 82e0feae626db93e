"""
Data Model for Veering Analysis

This module defines the immutable records that flow through the pipeline:
heading samples and the frozen session they belong to on the way in, and
the veering result / report on the way out.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Tuple
from . import constants
from . import utils
from .errors import InternalInconsistencyError


class Direction(Enum):
    """Which way the walker drifted over the session."""
    LEFT = "left"
    RIGHT = "right"
    STRAIGHT = "straight"


class InsufficientData(Enum):
    """
    Terminal reporting states for sessions with fewer than two headings.

    These are normal outcomes, not errors; the value is the user-facing message.
    """
    TOO_SHORT = constants.TOO_SHORT_MESSAGE
    NO_VEERING = constants.NO_VEERING_MESSAGE

    @property
    def status(self) -> str:
        return self.name.lower()

    @property
    def message(self) -> str:
        return self.value


@dataclass(frozen=True)
class HeadingSample:
    """
    One compass reading.

    Attributes:
        heading_degrees: Compass bearing, normalized into [0, 360).
        elapsed_ms: Milliseconds since the previous sample (or session start).
    """
    heading_degrees: float
    elapsed_ms: int = 0

    def __post_init__(self):
        heading = utils.safe_float(self.heading_degrees, "heading_degrees") % constants.FULL_CIRCLE_DEG
        elapsed = utils.safe_float(self.elapsed_ms, "elapsed_ms")
        if elapsed < 0:
            raise ValueError(f"elapsed_ms must be non-negative, got {self.elapsed_ms!r}")
        if elapsed != int(elapsed):
            raise ValueError(f"elapsed_ms must be a whole number of milliseconds, got {self.elapsed_ms!r}")
        object.__setattr__(self, "heading_degrees", heading)
        object.__setattr__(self, "elapsed_ms", int(elapsed))


@dataclass(frozen=True)
class SessionRecord:
    """
    A completed tracking session, the analyzer's only input.

    Attributes:
        headings: Samples in chronological order (may be empty).
        walked_distance: Pedometer distance for the session, non-negative.
        total_elapsed_ms: Sum of every sample's elapsed_ms. Computed when omitted.

    Raises:
        ValueError: On a negative or non-finite distance.
        InternalInconsistencyError: If total_elapsed_ms disagrees with the samples.
    """
    headings: Tuple[HeadingSample, ...] = ()
    walked_distance: float = 0.0
    total_elapsed_ms: Optional[int] = None

    def __post_init__(self):
        headings = tuple(self.headings)
        distance = utils.safe_float(self.walked_distance, "walked_distance")
        if distance < 0:
            raise ValueError(f"walked_distance must be non-negative, got {self.walked_distance!r}")

        expected = sum(sample.elapsed_ms for sample in headings)
        if self.total_elapsed_ms is not None and self.total_elapsed_ms != expected:
            raise InternalInconsistencyError(
                f"total_elapsed_ms is {self.total_elapsed_ms} but samples sum to {expected}"
            )

        object.__setattr__(self, "headings", headings)
        object.__setattr__(self, "walked_distance", distance)
        object.__setattr__(self, "total_elapsed_ms", expected)

    @classmethod
    def from_readings(cls, headings: Iterable[float], elapsed_ms: Iterable[int],
                      walked_distance: float = 0.0) -> "SessionRecord":
        """Build a session from parallel heading and time-delta sequences."""
        headings = list(headings)
        elapsed_ms = list(elapsed_ms)
        if len(headings) != len(elapsed_ms):
            raise ValueError(
                f"Got {len(headings)} headings but {len(elapsed_ms)} time deltas"
            )
        samples = tuple(HeadingSample(h, t) for h, t in zip(headings, elapsed_ms))
        return cls(headings=samples, walked_distance=walked_distance)

    @property
    def heading_values(self) -> List[float]:
        return [sample.heading_degrees for sample in self.headings]

    @property
    def time_deltas(self) -> List[int]:
        return [sample.elapsed_ms for sample in self.headings]

    def __len__(self) -> int:
        return len(self.headings)


@dataclass(frozen=True)
class PathPoint:
    x: float
    y: float

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class VeeringResult:
    """
    Outcome of analysing a session with at least two headings.

    Attributes:
        direction: Left, right or straight, from the per-step vote.
        delta_theta_degrees: Circular difference between start and end heading, 0-180.
        veering_distance: Estimated lateral drift, same units as walked_distance.
        path_points: Reconstructed trace for rendering, bottom-center first.
        left_count: Steps voted left.
        right_count: Steps voted right.
    """
    direction: Direction
    delta_theta_degrees: float
    veering_distance: float
    path_points: Tuple[PathPoint, ...] = ()
    left_count: int = 0
    right_count: int = 0


@dataclass(frozen=True)
class VeeringReport:
    """
    What the results screen shows for one session.

    Exactly one of `result` and `insufficient` is set.
    """
    sample_count: int
    walked_distance: float
    result: Optional[VeeringResult] = None
    insufficient: Optional[InsufficientData] = None
    canvas_width: float = constants.DEFAULT_CANVAS_WIDTH
    canvas_height: float = constants.DEFAULT_CANVAS_HEIGHT
    metadata: dict = field(default_factory=dict, compare=False)

    @property
    def status(self) -> str:
        if self.insufficient is not None:
            return self.insufficient.status
        return "complete"

    @property
    def path_points(self) -> Tuple[PathPoint, ...]:
        if self.result is None:
            return ()
        return self.result.path_points
