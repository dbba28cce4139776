from __future__ import annotations
from enum import Enum
from typing import Optional

from .errors import AlmanacParseError, CompositionDomainMismatch


class Stage(Enum):
    """Domain tags for the almanac pipeline, in pipeline order."""
    SEED = "seed"
    SOIL = "soil"
    FERTILIZER = "fertilizer"
    WATER = "water"
    LIGHT = "light"
    TEMPERATURE = "temperature"
    HUMIDITY = "humidity"
    LOCATION = "location"

    @classmethod
    def parse(cls, name: str, line_no: int | None = None) -> "Stage":
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise AlmanacParseError(f"unknown stage {name!r}", line_no) from None


def check_chain(first_target: Optional[Stage], second_source: Optional[Stage]) -> None:
    # untagged mappings chain with anything
    if first_target is None or second_source is None:
        return
    if first_target is not second_source:
        raise CompositionDomainMismatch(
            f"cannot chain a mapping into {first_target.value!r} "
            f"with a mapping from {second_source.value!r}"
        )
