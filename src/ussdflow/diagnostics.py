from __future__ import annotations

"""Exceptions and non-fatal build diagnostics."""

from dataclasses import dataclass
from enum import Enum


class UssdFlowError(Exception):
    """Base exception for ussdflow errors."""
    pass


class ScreenTypeError(UssdFlowError, ValueError):
    """A screen record does not match its screen type."""
    pass


class WarningKind(str, Enum):
    ENRICHMENT_FAILED = "enrichment_failed"
    DANGLING_REFERENCE = "dangling_reference"
    NO_ROOT = "no_root"
    DETACHED_CYCLE = "detached_cycle"
    DUPLICATE_SCREEN = "duplicate_screen"
    EDGE_COLLISION = "edge_collision"


@dataclass(frozen=True, slots=True)
class BuildWarning:
    """
    A non-fatal condition encountered while building a flow graph.

    Warnings never abort a build; they are handed to the caller so that
    missing or inconsistent data can be shown to the admin user.
    """

    kind: WarningKind
    screen: str
    detail: str = ""

    def __str__(self) -> str:
        text = f"[{self.kind.value}] {self.screen}"
        return f"{text}: {self.detail}" if self.detail else text
