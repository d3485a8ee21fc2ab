"""Validation engine: ordered rule registration and grouped reporting.

Three rule families are supported:

- project rules, ``check(project) -> str | None``, run once per project;
- context-action rules, ``check(action, project) -> str | None``, run once per
  context action with the project its reference resolves to (or ``None``);
- corpus rules, ``check(documents) -> Iterable[str]``, run once after the others.

A check returns ``None`` when it passes or does not apply. Failures are
collected, never raised, so every rule runs for every entity.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Literal

from ..errors import ConfigError
from ..models import ContextAction, Project
from .loader import Documents

logger = logging.getLogger(__name__)

ProjectCheck = Callable[[Project], "str | None"]
ContextActionCheck = Callable[[ContextAction, "Project | None"], "str | None"]
CorpusCheck = Callable[[Documents], Iterable[str]]

RuleFamily = Literal["project", "context-action", "corpus"]


class StatefulCheck(ABC):
    """A check that accumulates state across the entities of one run.

    The engine calls ``reset()`` before every run, so running a validator twice
    over the same corpus reports the same thing twice.
    """

    @abstractmethod
    def reset(self) -> None: ...


@dataclass(frozen=True)
class Rule:
    rule_id: str
    family: RuleFamily
    check: Callable[..., Any]


@dataclass
class DiagnosticGroup:
    """Failure messages attributed to one project or context."""

    kind: Literal["project", "context"]
    name: str
    messages: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"kind": self.kind, "name": self.name, "messages": list(self.messages)}


@dataclass
class Report:
    """Result of one validation run, in execution order."""

    groups: list[DiagnosticGroup] = field(default_factory=list)
    messages: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.groups and not self.messages

    def group(self, kind: str, name: str) -> DiagnosticGroup | None:
        for group in self.groups:
            if group.kind == kind and group.name == name:
                return group
        return None

    def count(self) -> int:
        return sum(len(g.messages) for g in self.groups) + len(self.messages)

    def lines(self) -> list[str]:
        """Header per failing entity, one ``  - message`` bullet per failure,
        then corpus-level messages."""
        out: list[str] = []
        for group in self.groups:
            out.append(group.name)
            out.extend(f"  - {message}" for message in group.messages)
        out.extend(self.messages)
        return out

    def to_dict(self) -> dict:
        return {
            "groups": [g.to_dict() for g in self.groups],
            "messages": list(self.messages),
            "ok": self.ok,
        }


class Validator:
    """Builder for an ordered set of validation rules.

    Example:
        report = (
            Validator()
            .for_all_projects("title-mismatch", title_matches_name)
            .for_all_context_actions("unresolved-reference", reference_resolves)
            .run(documents)
        )
    """

    def __init__(self, skip: Iterable[str] = ()):
        self.skip = frozenset(skip)
        self.rules: list[Rule] = []

    def for_all_projects(self, rule_id: str, check: ProjectCheck) -> "Validator":
        return self._register(Rule(rule_id, "project", check))

    def for_all_context_actions(self, rule_id: str, check: ContextActionCheck) -> "Validator":
        return self._register(Rule(rule_id, "context-action", check))

    def for_corpus(self, rule_id: str, check: CorpusCheck) -> "Validator":
        return self._register(Rule(rule_id, "corpus", check))

    def _register(self, rule: Rule) -> "Validator":
        if any(r.rule_id == rule.rule_id for r in self.rules):
            raise ValueError(f"Rule already registered: {rule.rule_id}")
        self.rules.append(rule)
        return self

    @property
    def rule_ids(self) -> list[str]:
        return [r.rule_id for r in self.rules]

    def active_rules(self, family: RuleFamily) -> list[Rule]:
        """Registered, non-skipped rules of one family, in registration order.

        Raises ``ConfigError`` if ``skip`` names a rule that is not registered.
        """
        unknown = self.skip - set(self.rule_ids)
        if unknown:
            raise ConfigError(f"Unknown rule id(s): {', '.join(sorted(unknown))}")
        return [r for r in self.rules if r.family == family and r.rule_id not in self.skip]

    def run(self, documents: Documents) -> Report:
        project_rules = self.active_rules("project")
        action_rules = self.active_rules("context-action")
        corpus_rules = self.active_rules("corpus")

        for rule in self.rules:
            if isinstance(rule.check, StatefulCheck):
                rule.check.reset()

        logger.debug(
            "Running %d project, %d context-action, %d corpus rules",
            len(project_rules),
            len(action_rules),
            len(corpus_rules),
        )

        report = Report()

        for project in documents.all_projects():
            messages = [m for rule in project_rules if (m := rule.check(project)) is not None]
            if messages:
                report.groups.append(DiagnosticGroup("project", str(project.name), messages))

        for context in documents.all_contexts():
            messages = []
            for action in context.actions:
                project = documents.resolve(action)
                for rule in action_rules:
                    message = rule.check(action, project)
                    if message is not None:
                        messages.append(message)
            if messages:
                report.groups.append(DiagnosticGroup("context", str(context.name), messages))

        for rule in corpus_rules:
            report.messages.extend(rule.check(documents))

        logger.debug("Validation finished with %d diagnostics", report.count())
        return report
