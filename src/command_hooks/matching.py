"""Filter normalization and hook matching.

Every filter field in a `when` clause is normalized to a non-empty list of
names, where `["*"]` is the wildcard. A hook matches when its discriminator
(`phase` or `event`) equals the event's exactly and every filter field accepts
the corresponding context value. Matching never reorders hooks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .models.execution import ExecutionContext
    from .models.hook import FilterValue, SessionHook, SessionHookWhen, ToolHook, ToolHookWhen

logger = logging.getLogger(__name__)

WILDCARD = "*"


@dataclass(frozen=True)
class NormalizedToolWhen:
    phase: str
    tool: list[str]
    calling_agent: list[str]
    slash_command: list[str]
    tool_args: dict[str, list[str]]


@dataclass(frozen=True)
class NormalizedSessionWhen:
    event: str
    agent: list[str]


def normalize_filter(value: FilterValue | None) -> list[str]:
    """`None` -> `["*"]`, `"x"` -> `["x"]`, lists pass through unchanged. An empty list matches nothing."""
    if value is None:
        return [WILDCARD]
    if isinstance(value, str):
        return [value]
    return list(value)


def normalize_tool_when(when: ToolHookWhen) -> NormalizedToolWhen:
    return NormalizedToolWhen(
        phase=when.phase,
        tool=normalize_filter(when.tool),
        calling_agent=normalize_filter(when.calling_agent),
        slash_command=normalize_filter(when.slash_command),
        tool_args={k: normalize_filter(v) for k, v in (when.tool_args or {}).items()},
    )


def normalize_session_when(when: SessionHookWhen) -> NormalizedSessionWhen:
    return NormalizedSessionWhen(event=when.event, agent=normalize_filter(when.agent))


def matches_filter(value: str | None, allowed: list[str]) -> bool:
    if WILDCARD in allowed:
        return True
    if value is None:
        return False
    return value in allowed


def match_tool_hooks(
    hooks: list[ToolHook], context: ExecutionContext, *, phase: str
) -> list[ToolHook]:
    """Return the tool hooks that apply to `context` in `phase`, in input order."""
    matched: list[ToolHook] = []
    for hook in hooks:
        when = normalize_tool_when(hook.when)
        if when.phase != phase:
            logger.debug('Hook "%s": phase mismatch (%s != %s)', hook.id, when.phase, phase)
            continue
        if not matches_filter(context.tool, when.tool):
            logger.debug('Hook "%s": tool %s not in %s', hook.id, context.tool, when.tool)
            continue
        if not matches_filter(context.agent, when.calling_agent):
            logger.debug('Hook "%s": callingAgent %s not in %s', hook.id, context.agent, when.calling_agent)
            continue
        if not matches_filter(context.slash_command, when.slash_command):
            logger.debug(
                'Hook "%s": slashCommand %s not in %s', hook.id, context.slash_command, when.slash_command
            )
            continue
        if not _matches_tool_args(context.tool_args, when.tool_args):
            logger.debug('Hook "%s": toolArgs mismatch', hook.id)
            continue
        matched.append(hook)

    logger.debug(
        "match_tool_hooks: %d/%d matched for phase=%s tool=%s",
        len(matched),
        len(hooks),
        phase,
        context.tool,
    )
    return matched


def match_session_hooks(
    hooks: list[SessionHook], context: ExecutionContext, *, event: str
) -> list[SessionHook]:
    """Return the session hooks that apply to `context` for `event`, in input order."""
    matched: list[SessionHook] = []
    for hook in hooks:
        when = normalize_session_when(hook.when)
        if when.event != event:
            logger.debug('Hook "%s": event mismatch (%s != %s)', hook.id, when.event, event)
            continue
        if not matches_filter(context.agent, when.agent):
            logger.debug('Hook "%s": agent %s not in %s', hook.id, context.agent, when.agent)
            continue
        matched.append(hook)

    logger.debug("match_session_hooks: %d/%d matched for event=%s", len(matched), len(hooks), event)
    return matched


def _matches_tool_args(args: dict[str, Any] | None, filters: dict[str, list[str]]) -> bool:
    for name, allowed in filters.items():
        if WILDCARD in allowed:
            continue
        value = (args or {}).get(name)
        if not matches_filter(_arg_as_string(value), allowed):
            return False
    return True


def _arg_as_string(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return None
