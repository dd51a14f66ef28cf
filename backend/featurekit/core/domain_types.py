"""Domain Types — the feature-document model (features, rules, scenarios, steps).

Invariants:
    - Pure storage shapes: no behavior, no validation on construction
    - Sequences are tuples and keep document order; tags/rows need not be unique
    - Optional fields default to None (absent), never to empty collections

Design Decisions:
    - Frozen dataclasses over pydantic models: decoding is done by the hand-written
      validators in decode_document, the model only stores the result
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class DataTable:
    """Tabular step argument."""
    rows: tuple[tuple[str, ...], ...]
    header: tuple[str, ...] | None = None


@dataclass(frozen=True)
class Step:
    """A Given/When/Then line; argument is a doc string or a data table."""
    text: str
    argument: str | DataTable | None = None


@dataclass(frozen=True)
class Examples:
    name: str
    header: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]
    tags: tuple[str, ...] | None = None
    description: str | None = None


@dataclass(frozen=True)
class Background:
    name: str
    given: tuple[Step, ...]
    description: str | None = None


@dataclass(frozen=True)
class Scenario:
    name: str
    given: tuple[Step, ...]
    when: tuple[Step, ...]
    then: tuple[Step, ...]
    tags: tuple[str, ...] | None = None
    description: str | None = None
    examples: Examples | None = None


@dataclass(frozen=True)
class Rule:
    name: str
    children: tuple[Scenario, ...]
    tags: tuple[str, ...] | None = None
    description: str | None = None
    background: Background | None = None


@dataclass(frozen=True)
class Feature:
    """Document root: children are Rules and Scenarios in document order."""
    name: str
    children: tuple[Rule | Scenario, ...]
    tags: tuple[str, ...] | None = None
    description: str | None = None
    background: Background | None = None
