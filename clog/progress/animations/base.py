"""
Animation Base

Common interface for the four animation kinds. An animation decides its
tick rate, the icon in front of the message and how the message itself is
drawn on each frame.
"""

import datetime
from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional, TYPE_CHECKING

from clog.fields import Field

if TYPE_CHECKING:
    from clog.logger import LineFormatter
    from clog.progress.core.state import ProgressState


class AnimationKind(Enum):
    BAR = "bar"
    PULSE = "pulse"
    SHIMMER = "shimmer"
    SPINNER = "spinner"


class Animation(ABC):
    """Base class for animations."""

    kind: AnimationKind

    @property
    @abstractmethod
    def tick_rate(self) -> float:
        """Seconds between frames."""
        pass

    @property
    def state(self) -> Optional["ProgressState"]:
        """Progress cells for determinate animations, None otherwise."""
        return None

    def icon(self, prefix: str, elapsed: float) -> str:
        """Icon drawn in the prefix position."""
        return prefix

    def render_message(self, formatter: "LineFormatter", message: str, elapsed: float) -> str:
        """Message text for the frame at elapsed seconds."""
        return formatter.message(message)

    def extra_fields(self) -> List[Field]:
        """Fields the animation adds to the line (e.g. a percent field)."""
        return []

    def compose(
        self,
        formatter: "LineFormatter",
        prefix: str,
        message: str,
        fields_text: str,
        elapsed: float,
        now: Optional[datetime.datetime] = None,
    ) -> str:
        """Build the complete line for one frame."""
        return formatter.compose(
            self.icon(prefix, elapsed),
            self.render_message(formatter, message, elapsed),
            fields_text,
            now,
        )
