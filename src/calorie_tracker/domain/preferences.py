"""User preference models."""

from dataclasses import dataclass
from typing import Literal

Unit = Literal["g", "serving"]
Theme = Literal["light", "dark"]


@dataclass(frozen=True)
class Preferences:
    """Display preferences."""

    unit: Unit = "g"
    theme: Theme = "light"
