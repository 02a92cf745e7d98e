"""Immutable snapshots published by the search orchestrator."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class SearchPhase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True, slots=True)
class SearchState(Generic[T]):
    """One complete view of the search surface.

    Snapshots are replaced wholesale on every transition so observers never
    see a half-applied update. ``items`` survives LOADING and FAILURE.
    """

    phase: SearchPhase = SearchPhase.IDLE
    items: tuple[T, ...] = ()
    error: BaseException | None = None

    @property
    def is_loading(self) -> bool:
        return self.phase is SearchPhase.LOADING

    def loading(self) -> SearchState[T]:
        return replace(self, phase=SearchPhase.LOADING, error=None)

    def succeeded(self, items: tuple[T, ...]) -> SearchState[T]:
        return replace(self, phase=SearchPhase.SUCCESS, items=items, error=None)

    def failed(self, error: BaseException) -> SearchState[T]:
        return replace(self, phase=SearchPhase.FAILURE, error=error)


__all__ = ["SearchPhase", "SearchState"]
