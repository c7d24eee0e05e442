"""Movement tempo prescribed for an exercise slot in a workout."""
from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class Tempo(BaseModel):
    """
    Seconds spent in each phase of a rep.

    ``eccentric`` is the lowering (muscle lengthening) phase, ``pause`` the
    hold at the stretched position and ``concentric`` the lifting phase.
    A concentric value of 0 means "explode" and is written as ``X``.
    """

    model_config = ConfigDict(frozen=True)

    eccentric: int = Field(ge=0)
    pause: int = Field(ge=0)
    concentric: int = Field(ge=0)

    CONTROLLED: ClassVar["Tempo"]
    SLOW: ClassVar["Tempo"]
    EXPLOSIVE: ClassVar["Tempo"]
    PAUSED: ClassVar["Tempo"]

    @property
    def notation(self) -> str:
        """Standard notation, read as "down-pause-up", e.g. ``"3-1-2"``."""
        concentric = "X" if self.concentric == 0 else str(self.concentric)
        return f"{self.eccentric}-{self.pause}-{concentric}"


Tempo.CONTROLLED = Tempo(eccentric=2, pause=0, concentric=1)
Tempo.SLOW = Tempo(eccentric=3, pause=1, concentric=2)
Tempo.EXPLOSIVE = Tempo(eccentric=2, pause=0, concentric=0)
Tempo.PAUSED = Tempo(eccentric=2, pause=3, concentric=1)
