"""Matcher evaluation.

`evaluate_matcher` and `describe_match` are the only places that branch
on the matcher variant; both end in `assert_never` so a new variant fails
type checking here.
"""

from __future__ import annotations

import logging
import math
import re
from functools import lru_cache
from typing import TYPE_CHECKING, assert_never

from meta_router.models.config import (
    AlwaysMatcher,
    ComplexityMatcher,
    KeywordMatcher,
    ProjectContextMatcher,
    RegexMatcher,
)

if TYPE_CHECKING:
    from meta_router.models.config import Matcher
    from meta_router.models.routing import RoutingContext

logger = logging.getLogger(__name__)

# Disclosed heuristic; substring hits, not tokens.
TECHNICAL_KEYWORDS = (
    "architecture",
    "performance",
    "optimization",
    "database",
    "async",
    "concurrent",
    "algorithm",
    "data structure",
    "api",
    "integration",
    "security",
    "encryption",
    "authentication",
    "deployment",
    "infrastructure",
    "testing",
    "refactor",
    "debug",
    "trace",
    "profile",
)

COMPLEXITY_THRESHOLDS = {
    "low": 2,
    "medium": 5,
    "high": 10,
}

DEFAULT_REGEX_FLAGS = "i"

# JavaScript flag letters used in config files. `g` and `u` do not change a single search.
_REGEX_FLAG_MAP = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "u": 0,
    "g": 0,
}


def evaluate_matcher(matcher: Matcher, context: RoutingContext) -> bool:
    """Evaluate a single matcher against the routing context."""
    if isinstance(matcher, KeywordMatcher):
        return _evaluate_keyword(matcher, context)
    if isinstance(matcher, ComplexityMatcher):
        return calculate_complexity(context.prompt) >= COMPLEXITY_THRESHOLDS[matcher.threshold]
    if isinstance(matcher, RegexMatcher):
        return _evaluate_regex(matcher, context)
    if isinstance(matcher, ProjectContextMatcher):
        return _evaluate_project_context(matcher, context)
    if isinstance(matcher, AlwaysMatcher):
        return True
    assert_never(matcher)


def calculate_complexity(prompt: str) -> int:
    """Score a prompt: ceil(lines / 10) plus one per technical keyword present."""
    lines = len(prompt.split("\n"))
    prompt_lower = prompt.lower()
    keyword_hits = sum(1 for keyword in TECHNICAL_KEYWORDS if keyword in prompt_lower)
    return math.ceil(lines / 10) + keyword_hits


def describe_match(matcher: Matcher, context: RoutingContext) -> str:
    """Return a human-readable summary of what a matching matcher matched on."""
    if isinstance(matcher, KeywordMatcher):
        prompt_lower = context.prompt.lower()
        matched = [kw for kw in matcher.keywords if kw.lower() in prompt_lower]
        return f"matched keywords: {', '.join(matched)}"
    if isinstance(matcher, ComplexityMatcher):
        return f"complexity score >= {matcher.threshold}"
    if isinstance(matcher, RegexMatcher):
        return f"matched pattern: /{matcher.pattern}/{matcher.flags or ''}"
    if isinstance(matcher, ProjectContextMatcher):
        parts = []
        if matcher.has_files:
            parts.append(f"files: {', '.join(matcher.has_files)}")
        if matcher.has_deps:
            parts.append(f"deps: {', '.join(matcher.has_deps)}")
        return "; ".join(parts) if parts else "project context match"
    if isinstance(matcher, AlwaysMatcher):
        return "always match"
    assert_never(matcher)


def _evaluate_keyword(matcher: KeywordMatcher, context: RoutingContext) -> bool:
    prompt = context.prompt.lower()
    keywords = [kw.lower() for kw in matcher.keywords]
    if matcher.mode == "any":
        return any(kw in prompt for kw in keywords)
    return all(kw in prompt for kw in keywords)


def _compile(pattern: str, flags: str) -> re.Pattern[str]:
    compiled_flags = 0
    for letter in flags:
        if letter not in _REGEX_FLAG_MAP:
            msg = f"Invalid regular expression flag '{letter}'"
            raise ValueError(msg)
        compiled_flags |= _REGEX_FLAG_MAP[letter]
    return re.compile(pattern, compiled_flags)


@lru_cache(maxsize=256)
def _compile_or_none(pattern: str, flags: str) -> re.Pattern[str] | None:
    """Compile once per (pattern, flags); a failure is cached as None and logged once."""
    try:
        return _compile(pattern, flags)
    except (re.error, ValueError, OverflowError, RecursionError) as exc:
        logger.warning("Invalid regex pattern %r: %s", pattern, exc)
        return None


def _evaluate_regex(matcher: RegexMatcher, context: RoutingContext) -> bool:
    regex = _compile_or_none(matcher.pattern, matcher.flags or DEFAULT_REGEX_FLAGS)
    if regex is None:
        return False
    return regex.search(context.prompt) is not None


def _evaluate_project_context(matcher: ProjectContextMatcher, context: RoutingContext) -> bool:
    if matcher.has_files and not all(path in context.project_files for path in matcher.has_files):
        return False
    if matcher.has_deps and not all(dep in context.project_deps for dep in matcher.has_deps):
        return False
    return True
