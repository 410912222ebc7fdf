"""Plan validation, reference resolution and plan-file parsing."""

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from .exceptions import (
    EmptyPlanError,
    InvalidReferenceError,
    PlanFormatError,
    PlanNotFoundError,
    UnresolvedReferenceError,
)
from .types import DeploymentPlan, DeploymentResult, DeploymentStep, Reference


def validate_plan(plan: DeploymentPlan) -> None:
    """
    Check that a plan can be executed.

    Args:
        plan: Plan to check

    Raises:
        EmptyPlanError: If plan has no steps
        InvalidReferenceError: If any reference does not point to a strictly earlier step
    """
    if len(plan) == 0:
        raise EmptyPlanError("Deployment plan has no steps")

    for index, step in enumerate(plan):
        for reference in step.references():
            target = reference.index
            # bool is an int subclass but never a valid step index
            if not isinstance(target, int) or isinstance(target, bool):
                raise InvalidReferenceError(
                    f"Step {index} ({step.blueprint}) has non-integer reference {target!r}"
                )
            if target < 0:
                raise InvalidReferenceError(
                    f"Step {index} ({step.blueprint}) references negative index {target}"
                )
            if target >= index:
                raise InvalidReferenceError(
                    f"Step {index} ({step.blueprint}) references step {target}, "
                    "which does not precede it"
                )


def resolve_arguments(
    args: Sequence[Any], results: Mapping[int, DeploymentResult]
) -> List[Any]:
    """
    Substitute every reference with the address of the referenced result.

    Literals (including empty strings and zero) are returned unchanged.
    Nested lists and tuples keep their type.

    Args:
        args: Constructor arguments of a step
        results: Results recorded so far, keyed by step index

    Returns:
        New list of resolved arguments

    Raises:
        UnresolvedReferenceError: If a referenced step has no recorded result
    """
    return [_resolve_value(value, results) for value in args]


def _resolve_value(value: Any, results: Mapping[int, DeploymentResult]) -> Any:
    if isinstance(value, Reference):
        if value.index not in results:
            raise UnresolvedReferenceError(
                f"No deployment result recorded for step {value.index}"
            )
        return results[value.index].address
    if isinstance(value, list):
        return [_resolve_value(item, results) for item in value]
    if isinstance(value, tuple):
        return tuple(_resolve_value(item, results) for item in value)
    return value


def parse_plan(data: Mapping[str, Any]) -> DeploymentPlan:
    """
    Build a plan from its JSON representation.

    Expected shape::

        {"steps": [
            {"blueprint": "HKSToken", "label": "token"},
            {"blueprint": "MasterChef", "args": [{"ref": "token"}, "", "", 0, 0]}
        ]}

    A ``{"ref": ...}`` argument is a reference: an integer is a step index,
    a string is a step label or, failing that, the blueprint name of exactly
    one step in the plan.

    Args:
        data: Decoded plan document

    Returns:
        DeploymentPlan (not yet validated)

    Raises:
        PlanFormatError: If the document is malformed or a reference name is unknown
    """
    if not isinstance(data, Mapping) or "steps" not in data:
        raise PlanFormatError("Plan must be an object with a 'steps' list")

    raw_steps = data["steps"]
    if not isinstance(raw_steps, list):
        raise PlanFormatError("Plan 'steps' must be a list")

    for position, raw in enumerate(raw_steps):
        if not isinstance(raw, Mapping):
            raise PlanFormatError(f"Step {position} must be an object")
        if not isinstance(raw.get("blueprint"), str) or not raw["blueprint"]:
            raise PlanFormatError(f"Step {position} is missing a 'blueprint' name")
        if not isinstance(raw.get("args", []), list):
            raise PlanFormatError(f"Step {position} 'args' must be a list")

    names = _build_name_index(raw_steps)

    steps = [
        DeploymentStep(
            blueprint=raw["blueprint"],
            args=tuple(_parse_value(value, names) for value in raw.get("args", [])),
            label=raw.get("label"),
        )
        for raw in raw_steps
    ]
    return DeploymentPlan(tuple(steps))


def _build_name_index(raw_steps: List[Mapping[str, Any]]) -> Dict[str, Optional[int]]:
    """
    Map reference names to step indices.

    Labels take priority over blueprint names. A blueprint name shared by
    several steps maps to None (ambiguous).
    """
    labels: Dict[str, int] = {}
    for position, raw in enumerate(raw_steps):
        label = raw.get("label")
        if label is None:
            continue
        if not isinstance(label, str):
            raise PlanFormatError(f"Step {position} 'label' must be a string")
        if label in labels:
            raise PlanFormatError(f"Duplicate step label '{label}'")
        labels[label] = position

    blueprints: Dict[str, Optional[int]] = {}
    for position, raw in enumerate(raw_steps):
        name = raw["blueprint"]
        blueprints[name] = None if name in blueprints else position

    return {**blueprints, **labels}


def _parse_value(value: Any, names: Mapping[str, Optional[int]]) -> Any:
    if isinstance(value, dict) and "ref" in value:
        target = value["ref"]
        if isinstance(target, bool):
            raise PlanFormatError(f"Invalid reference {target!r}")
        if isinstance(target, int):
            return Reference(target)
        if isinstance(target, str):
            if target not in names:
                raise PlanFormatError(f"Reference to unknown step '{target}'")
            index = names[target]
            if index is None:
                raise PlanFormatError(
                    f"Reference '{target}' is ambiguous: several steps deploy it; use a label"
                )
            return Reference(index)
        raise PlanFormatError(f"Invalid reference {target!r}")
    if isinstance(value, list):
        return [_parse_value(item, names) for item in value]
    return value


def load_plan(plan_path: Union[Path, str]) -> DeploymentPlan:
    """
    Load a plan from a JSON file.

    Args:
        plan_path: Path to plan file

    Returns:
        DeploymentPlan (not yet validated)

    Raises:
        PlanNotFoundError: If the file does not exist
        PlanFormatError: If the file is not valid JSON or not a valid plan
    """
    plan_path = Path(plan_path)
    try:
        with open(plan_path) as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise PlanNotFoundError(f"Plan file not found at {plan_path}") from e
    except json.JSONDecodeError as e:
        raise PlanFormatError(f"Plan file {plan_path} is not valid JSON: {e}") from e

    return parse_plan(data)
