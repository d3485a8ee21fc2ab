"""Registered validation rules for a GTD corpus."""

from __future__ import annotations

from typing import Iterable, Iterator

from ..models import (
    ActionId,
    ActionStatus,
    ContextAction,
    Project,
    ProjectName,
    ReferenceAction,
    Status,
)
from .engine import StatefulCheck, Validator
from .loader import Documents


# -----------------------------------------------------------------------------
# Project rules
# -----------------------------------------------------------------------------


class UniqueProjectIds(StatefulCheck):
    """Flags every project whose ID was already seen earlier in the run."""

    def __init__(self) -> None:
        self.seen: set[str] = set()

    def reset(self) -> None:
        self.seen.clear()

    def __call__(self, project: Project) -> str | None:
        if project.id in self.seen:
            return f"has a duplicate ID {project.id}"
        self.seen.add(project.id)
        return None


def title_matches_name(project: Project) -> str | None:
    body_title = project.title.plain_text()
    if body_title != project.name.title:
        return f'body title "{body_title}" does not match name title "{project.name.title}"'
    return None


def complete_project_actions_complete(project: Project) -> str | None:
    if project.status is not Status.COMPLETE:
        return None
    if project.actions.active or project.actions.upcoming:
        return "is complete but has at least one uncompleted action"
    return None


def in_progress_has_active(project: Project) -> str | None:
    if project.status is Status.IN_PROGRESS and not project.actions.active:
        return "is in progress but has no active actions"
    return None


# -----------------------------------------------------------------------------
# Context-action rules
# -----------------------------------------------------------------------------


def reference_resolves(action: ContextAction, project: Project | None) -> str | None:
    if isinstance(action, ReferenceAction) and project is None:
        return f"{action} is not a valid link to project"
    return None


def linked_project_in_progress(action: ContextAction, project: Project | None) -> str | None:
    if project is None or project.status is Status.IN_PROGRESS:
        return None
    return f"{action} links to {project.name}, which is {project.status.value}, not in progress"


def _linked_status(action: ContextAction, project: Project) -> ActionStatus | None:
    assert isinstance(action, ReferenceAction) and action.target is not None
    found = project.actions.get(action.target.action_id)
    return found[1] if found else None


def linked_action_exists(action: ContextAction, project: Project | None) -> str | None:
    if project is None:
        return None
    if _linked_status(action, project) is None:
        return f"{action}: {project.name} does not have the referenced action"
    return None


def linked_action_active(action: ContextAction, project: Project | None) -> str | None:
    if project is None:
        return None
    status = _linked_status(action, project)
    if status is not None and status is not ActionStatus.ACTIVE:
        return f"{action}: action is not active in linked project (filed under {status.value})"
    return None


class UniqueActionReferences(StatefulCheck):
    """Flags a referenced action ID already used by an earlier context action."""

    def __init__(self) -> None:
        self.seen: set[ActionId] = set()

    def reset(self) -> None:
        self.seen.clear()

    def __call__(self, action: ContextAction, project: Project | None) -> str | None:
        if project is None:
            return None
        assert isinstance(action, ReferenceAction) and action.target is not None
        action_id = action.target.action_id
        if action_id in self.seen:
            return f"{action}: action ^{action_id} is referenced more than once"
        self.seen.add(action_id)
        return None


# -----------------------------------------------------------------------------
# Corpus rules
# -----------------------------------------------------------------------------


def referenced_actions(documents: Documents) -> set[tuple[ProjectName, ActionId]]:
    """Every (project, action id) pair some context action points at."""
    return {
        (ref.target.project, ref.target.action_id)
        for context in documents.all_contexts()
        for ref in context.references()
        if ref.target is not None
    }


def orphaned_active_actions(documents: Documents) -> Iterator[str]:
    """Active actions of in-progress projects that no context references."""
    referenced = referenced_actions(documents)
    for project in documents.all_projects():
        if project.status is not Status.IN_PROGRESS:
            continue
        for action in project.actions.active:
            if action.id is None or (project.name, action.id) not in referenced:
                yield f'{project.name} has an active action not in any context: "{action}"'


def orphaned_projects(documents: Documents) -> list[Project]:
    """In-progress projects that no context action references at all."""
    linked = {project for project, _ in referenced_actions(documents)}
    return [
        p
        for p in documents.all_projects()
        if p.status is Status.IN_PROGRESS and p.name not in linked
    ]


# -----------------------------------------------------------------------------
# Registry
# -----------------------------------------------------------------------------

RULE_DESCRIPTIONS: dict[str, str] = {
    "duplicate-project-id": "Project IDs must be unique across the corpus",
    "title-mismatch": "A project's title heading must equal the title in its filename",
    "complete-project-open-actions": "A complete project may only hold Complete actions",
    "in-progress-without-active": "An in-progress project needs at least one Active action",
    "unresolved-reference": "A context reference must link to an existing project",
    "linked-project-not-in-progress": "A context may only reference in-progress projects",
    "linked-action-missing": "The referenced project must contain the referenced action",
    "linked-action-not-active": "The referenced action must be filed under Active",
    "duplicate-action-reference": "An action may be referenced by only one context action",
    "orphaned-action": "Every Active action of an in-progress project must appear in a context",
}


def default_validator(skip: Iterable[str] = ()) -> Validator:
    """A validator carrying the full rule set in its standard order."""
    return (
        Validator(skip=skip)
        .for_all_projects("duplicate-project-id", UniqueProjectIds())
        .for_all_projects("title-mismatch", title_matches_name)
        .for_all_projects("complete-project-open-actions", complete_project_actions_complete)
        .for_all_projects("in-progress-without-active", in_progress_has_active)
        .for_all_context_actions("unresolved-reference", reference_resolves)
        .for_all_context_actions("linked-project-not-in-progress", linked_project_in_progress)
        .for_all_context_actions("linked-action-missing", linked_action_exists)
        .for_all_context_actions("linked-action-not-active", linked_action_active)
        .for_all_context_actions("duplicate-action-reference", UniqueActionReferences())
        .for_corpus("orphaned-action", orphaned_active_actions)
    )
