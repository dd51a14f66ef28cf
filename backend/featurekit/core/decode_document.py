"""Document Decoding — validators and printers for JSON-shaped feature documents.

Invariants:
    - Decoders are built only from featurekit.core.validate primitives (no schema language)
    - Every failure names the full path, e.g. `feature.children[1].given[0].text`
    - Printers omit absent optional fields, so decode → print reproduces the input
    - Pure: no IO, no mutation of the input

Design Decisions:
    - A feature child with a `children` field is a Rule, otherwise a Scenario:
      the JSON shape carries no explicit type tag
    - Sequences decode to tuples to match the frozen document model
"""

from collections.abc import Mapping
from typing import Any

from featurekit.core.domain_types import (
    Background, DataTable, Examples, Feature, Rule, Scenario, Step,
)
from featurekit.core.errors import ValidationTypeError
from featurekit.core.validate import (
    validate_array, validate_opt, validate_string,
)


# ─── Helpers ─────────────────────────────────────────────────────

def _fields(thing: Any, context: list[str]) -> Mapping:
    if isinstance(thing, Mapping):
        return thing
    raise ValidationTypeError(context, "an object", thing)


def _field(context: list[str], name: str) -> list[str]:
    return [*context, name]


def _validate_strings(thing: Any, context: list[str]) -> tuple[str, ...]:
    return tuple(validate_array(thing, validate_string, context))


def _validate_rows(thing: Any, context: list[str]) -> tuple[tuple[str, ...], ...]:
    return tuple(validate_array(thing, _validate_strings, context))


def _validate_steps(thing: Any, context: list[str]) -> tuple[Step, ...]:
    return tuple(validate_array(thing, validate_step, context))


def _print_rows(rows: tuple[tuple[str, ...], ...]) -> list[list[str]]:
    return [list(row) for row in rows]


def _print_optional(result: dict, **fields: Any) -> dict:
    """Add the fields that are present (not None) to `result`."""
    for name, value in fields.items():
        if value is not None:
            result[name] = value
    return result


# ─── Decoders ────────────────────────────────────────────────────

def validate_data_table(thing: Any, context: list[str]) -> DataTable:
    f = _fields(thing, context)
    return DataTable(
        header=validate_opt(
            f.get("header"), _validate_strings, _field(context, "header"),
        ),
        rows=_validate_rows(f.get("rows"), _field(context, "rows")),
    )


def validate_step_argument(thing: Any, context: list[str]) -> str | DataTable:
    """A step argument is either a doc string or a data table."""
    if isinstance(thing, str):
        return thing
    if isinstance(thing, Mapping):
        return validate_data_table(thing, context)
    raise ValidationTypeError(context, "a string or a data table", thing)


def validate_step(thing: Any, context: list[str]) -> Step:
    f = _fields(thing, context)
    return Step(
        text=validate_string(f.get("text"), _field(context, "text")),
        argument=validate_opt(
            f.get("argument"), validate_step_argument,
            _field(context, "argument"),
        ),
    )


def validate_examples(thing: Any, context: list[str]) -> Examples:
    f = _fields(thing, context)
    return Examples(
        tags=validate_opt(f.get("tags"), _validate_strings, _field(context, "tags")),
        name=validate_string(f.get("name"), _field(context, "name")),
        description=validate_opt(
            f.get("description"), validate_string,
            _field(context, "description"),
        ),
        header=_validate_strings(f.get("header"), _field(context, "header")),
        rows=_validate_rows(f.get("rows"), _field(context, "rows")),
    )


def validate_background(thing: Any, context: list[str]) -> Background:
    f = _fields(thing, context)
    return Background(
        name=validate_string(f.get("name"), _field(context, "name")),
        description=validate_opt(
            f.get("description"), validate_string,
            _field(context, "description"),
        ),
        given=_validate_steps(f.get("given"), _field(context, "given")),
    )


def validate_scenario(thing: Any, context: list[str]) -> Scenario:
    f = _fields(thing, context)
    return Scenario(
        tags=validate_opt(f.get("tags"), _validate_strings, _field(context, "tags")),
        name=validate_string(f.get("name"), _field(context, "name")),
        description=validate_opt(
            f.get("description"), validate_string,
            _field(context, "description"),
        ),
        given=_validate_steps(f.get("given"), _field(context, "given")),
        when=_validate_steps(f.get("when"), _field(context, "when")),
        then=_validate_steps(f.get("then"), _field(context, "then")),
        examples=validate_opt(
            f.get("examples"), validate_examples, _field(context, "examples"),
        ),
    )


def validate_rule(thing: Any, context: list[str]) -> Rule:
    f = _fields(thing, context)
    return Rule(
        tags=validate_opt(f.get("tags"), _validate_strings, _field(context, "tags")),
        name=validate_string(f.get("name"), _field(context, "name")),
        description=validate_opt(
            f.get("description"), validate_string,
            _field(context, "description"),
        ),
        background=validate_opt(
            f.get("background"), validate_background,
            _field(context, "background"),
        ),
        children=tuple(validate_array(
            f.get("children"), validate_scenario, _field(context, "children"),
        )),
    )


def validate_feature_child(thing: Any, context: list[str]) -> Rule | Scenario:
    """A child carrying `children` is a Rule; anything else must be a Scenario."""
    f = _fields(thing, context)
    if "children" in f:
        return validate_rule(f, context)
    return validate_scenario(f, context)


def validate_feature(thing: Any, context: list[str]) -> Feature:
    f = _fields(thing, context)
    return Feature(
        tags=validate_opt(f.get("tags"), _validate_strings, _field(context, "tags")),
        name=validate_string(f.get("name"), _field(context, "name")),
        description=validate_opt(
            f.get("description"), validate_string,
            _field(context, "description"),
        ),
        background=validate_opt(
            f.get("background"), validate_background,
            _field(context, "background"),
        ),
        children=tuple(validate_array(
            f.get("children"), validate_feature_child,
            _field(context, "children"),
        )),
    )


# ─── Printers ────────────────────────────────────────────────────

def print_data_table(table: DataTable) -> dict:
    result = _print_optional(
        {}, header=list(table.header) if table.header is not None else None,
    )
    result["rows"] = _print_rows(table.rows)
    return result


def print_step(step: Step) -> dict:
    argument = step.argument
    if isinstance(argument, DataTable):
        argument = print_data_table(argument)
    return _print_optional({"text": step.text}, argument=argument)


def _print_steps(steps: tuple[Step, ...]) -> list[dict]:
    return [print_step(s) for s in steps]


def _print_tags(tags: tuple[str, ...] | None) -> list[str] | None:
    return list(tags) if tags is not None else None


def print_examples(examples: Examples) -> dict:
    result = _print_optional(
        {}, tags=_print_tags(examples.tags), name=examples.name,
        description=examples.description,
    )
    result["header"] = list(examples.header)
    result["rows"] = _print_rows(examples.rows)
    return result


def print_background(background: Background) -> dict:
    result = _print_optional(
        {"name": background.name}, description=background.description,
    )
    result["given"] = _print_steps(background.given)
    return result


def print_scenario(scenario: Scenario) -> dict:
    result = _print_optional(
        {}, tags=_print_tags(scenario.tags), name=scenario.name,
        description=scenario.description,
    )
    result["given"] = _print_steps(scenario.given)
    result["when"] = _print_steps(scenario.when)
    result["then"] = _print_steps(scenario.then)
    if scenario.examples is not None:
        result["examples"] = print_examples(scenario.examples)
    return result


def print_rule(rule: Rule) -> dict:
    result = _print_optional(
        {}, tags=_print_tags(rule.tags), name=rule.name,
        description=rule.description,
    )
    if rule.background is not None:
        result["background"] = print_background(rule.background)
    result["children"] = [print_scenario(s) for s in rule.children]
    return result


def print_feature(feature: Feature) -> dict:
    result = _print_optional(
        {}, tags=_print_tags(feature.tags), name=feature.name,
        description=feature.description,
    )
    if feature.background is not None:
        result["background"] = print_background(feature.background)
    result["children"] = [
        print_rule(c) if isinstance(c, Rule) else print_scenario(c)
        for c in feature.children
    ]
    return result
