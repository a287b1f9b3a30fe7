"""Backward-navigable parameter wizard.

A command describes its questions as an ordered list of `StepRule`s. Each rule
names the step it fills, the resolver that asks for a value, and the earlier
step to fall back to when the user chooses to go back. The wizard walks the
resulting transition table until every step holds a value, then hands the
collected `ParameterSet` to the command's action.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TypeVar, Union

from .errors import WizardCancelled

logger = logging.getLogger(__name__)

Value = Union[str, list[str], None]
R = TypeVar("R")


class Step(IntEnum):
    LAUNCH_TYPE = auto()
    CLUSTER = auto()
    TASK_DEFINITION = auto()
    VPC = auto()
    SUBNETS = auto()
    SECURITY_GROUPS = auto()
    TASK = auto()
    TASKS = auto()
    CONTAINER = auto()
    BUCKET = auto()
    COMPLETE = auto()


def is_set(value: Value) -> bool:
    """Empty strings and empty lists count as unset, like None."""
    return bool(value)


class ParameterSet:
    """Values collected so far, keyed by step."""

    def __init__(self, initial: Mapping[Step, Value] | None = None) -> None:
        self._values: dict[Step, Value] = {}
        for step, value in (initial or {}).items():
            if is_set(value):
                self._values[step] = value

    def __getitem__(self, step: Step) -> Value:
        return self._values.get(step)

    def __setitem__(self, step: Step, value: Value) -> None:
        self._values[step] = value

    def __contains__(self, step: object) -> bool:
        return isinstance(step, Step) and self.is_set(step)

    def __iter__(self) -> Iterator[Step]:
        return iter(sorted(step for step in self._values if self.is_set(step)))

    def is_set(self, step: Step) -> bool:
        return is_set(self._values.get(step))

    def clear(self, step: Step) -> None:
        self._values.pop(step, None)

    def text(self, step: Step) -> str:
        value = self._values.get(step)
        if isinstance(value, list):
            raise TypeError(f"{step.name} holds a list, not a single value")
        return value or ""

    def items(self, step: Step) -> list[str]:
        value = self._values.get(step)
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return list(value)

    def as_dict(self) -> dict[Step, Value]:
        return {step: self._values[step] for step in self}

    def __repr__(self) -> str:
        fields = ", ".join(f"{step.name}={self._values[step]!r}" for step in self)
        return f"ParameterSet({fields})"


Resolver = Callable[[ParameterSet, bool], Value]


@dataclass(frozen=True)
class StepRule:
    """How one step is resolved and where going back leads."""

    step: Step
    resolve: Resolver
    back_to: Step | None = None
    satisfied: Callable[[ParameterSet], bool] | None = None

    def is_satisfied(self, params: ParameterSet) -> bool:
        if params.is_set(self.step):
            return True
        return self.satisfied is not None and self.satisfied(params)


class Wizard:
    """Drives a ParameterSet to completion through a table of step rules."""

    def __init__(self, rules: Sequence[StepRule]) -> None:
        if not rules:
            raise ValueError("A wizard needs at least one step")

        self._rules: dict[Step, StepRule] = {}
        self._next: dict[Step, Step] = {}
        for index, rule in enumerate(rules):
            if rule.step in self._rules or rule.step is Step.COMPLETE:
                raise ValueError(f"Invalid or duplicate step {rule.step.name}")
            if rule.back_to is not None and rule.back_to not in self._rules:
                raise ValueError(f"{rule.step.name} goes back to {rule.back_to.name}, which is not an earlier step")
            self._rules[rule.step] = rule
            self._next[rule.step] = rules[index + 1].step if index + 1 < len(rules) else Step.COMPLETE

        self.first = rules[0].step

    def advance(self, step: Step, params: ParameterSet) -> Step:
        """Resolve a single step and return the step to visit next."""
        rule = self._rules[step]
        if rule.is_satisfied(params):
            logger.debug("Step %s already satisfied", step.name)
            return self._next[step]

        value = rule.resolve(params, rule.back_to is not None)
        if not is_set(value):
            params.clear(step)
            if rule.back_to is None:
                raise WizardCancelled()
            params.clear(rule.back_to)
            logger.debug("Going back from %s to %s", step.name, rule.back_to.name)
            return rule.back_to

        params[step] = value
        logger.debug("Step %s resolved to %r", step.name, value)
        return self._next[step]

    def resolve(self, params: ParameterSet) -> ParameterSet:
        step = self.first
        while step is not Step.COMPLETE:
            step = self.advance(step, params)
        return params

    def run(self, params: ParameterSet, action: Callable[[ParameterSet], R]) -> R:
        """Resolve every step, then invoke the command's action."""
        return action(self.resolve(params))
