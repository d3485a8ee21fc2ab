"""Corpus: document grammars, loading and validation."""

from .context import parse_context
from .engine import DiagnosticGroup, Report, StatefulCheck, Validator
from .loader import Documents, LoadError, Loader, load_corpus
from .project import parse_project
from .rules import RULE_DESCRIPTIONS, default_validator

__all__ = [
    "DiagnosticGroup",
    "Documents",
    "LoadError",
    "Loader",
    "RULE_DESCRIPTIONS",
    "Report",
    "StatefulCheck",
    "Validator",
    "default_validator",
    "load_corpus",
    "parse_context",
    "parse_project",
]
