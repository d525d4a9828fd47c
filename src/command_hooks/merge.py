"""Precedence rules for combining configuration sources.

A base source (usually the user-global config) is combined with an override
source (project config or agent markdown):

1. `ignoreGlobalConfig: true` on the override discards the base entirely.
2. Per `tool` / `session` array: base order is kept, an override entry with
   the same id replaces the base entry in place, new override ids are appended.
3. `overrideGlobal: true` on an override entry also drops base entries in its
   scope: same phase and a `tool` filter covered by the override's for tool
   hooks (a wildcard covers the whole phase), same event for session hooks.
   A base entry that only partly overlaps keeps its remaining tool names.
4. Duplicate ids inside one source are reported, never dropped.
5. `truncationLimit` always comes from the base.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, TypeVar

from .matching import WILDCARD, normalize_filter
from .models.hook import CommandHooksConfig, SessionHook, ToolHook
from .validation import HookValidationError

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

_H = TypeVar("_H", ToolHook, SessionHook)


@dataclass
class MergeResult:
    config: CommandHooksConfig
    errors: list[HookValidationError] = field(default_factory=list)


def find_duplicate_ids(hooks: Sequence[ToolHook | SessionHook]) -> list[str]:
    """Ids that appear more than once, in order of first appearance."""
    counts: dict[str, int] = {}
    for hook in hooks:
        counts[hook.id] = counts.get(hook.id, 0) + 1
    return [hook_id for hook_id, count in counts.items() if count > 1]


def merge_configs(
    base: CommandHooksConfig,
    override: CommandHooksConfig,
    *,
    base_source: str = "global",
    override_source: str = "project",
) -> MergeResult:
    """Merge `override` on top of `base`. Never raises; errors are advisory."""
    if override.ignore_global_config:
        logger.debug("%s config sets ignoreGlobalConfig, discarding %s config", override_source, base_source)
        return MergeResult(config=override, errors=_duplicate_errors(override, override_source))

    errors = _duplicate_errors(base, base_source) + _duplicate_errors(override, override_source)
    merged = _merge(base, override)
    logger.debug(
        "Merged %s + %s: %d tool hooks, %d session hooks, truncationLimit=%s, %d errors",
        base_source,
        override_source,
        len(merged.tool),
        len(merged.session),
        merged.truncation_limit,
        len(errors),
    )
    return MergeResult(config=merged, errors=errors)


def merge_all(sources: Sequence[tuple[str, CommandHooksConfig]]) -> MergeResult:
    """Fold `(source name, config)` pairs left to right, lowest precedence first."""
    if not sources:
        return MergeResult(config=CommandHooksConfig())

    _, merged = sources[0]
    errors = _duplicate_errors(merged, sources[0][0])
    for name, config in sources[1:]:
        if config.ignore_global_config:
            logger.debug("%s config sets ignoreGlobalConfig, discarding earlier sources", name)
            merged = config
            errors = []
        else:
            merged = _merge(merged, config)
        errors.extend(_duplicate_errors(config, name))
    return MergeResult(config=merged, errors=errors)


# --- internal helpers ---


def _merge(base: CommandHooksConfig, override: CommandHooksConfig) -> CommandHooksConfig:
    return CommandHooksConfig(
        truncation_limit=base.truncation_limit,
        tool=_merge_hook_arrays(base.tool, override.tool, _suppress_tool_hook),
        session=_merge_hook_arrays(base.session, override.session, _suppress_session_hook),
    )


def _merge_hook_arrays(
    base_hooks: list[_H],
    override_hooks: list[_H],
    suppress: Callable[[_H, _H], _H | None],
) -> list[_H]:
    # The k-th base occurrence of an id is replaced by its k-th override occurrence.
    pending: dict[str, deque[int]] = {}
    for index, hook in enumerate(override_hooks):
        pending.setdefault(hook.id, deque()).append(index)
    overriders = [hook for hook in override_hooks if hook.override_global]

    result: list[_H] = []
    placed: set[int] = set()
    for hook in base_hooks:
        queue = pending.get(hook.id)
        if queue:
            index = queue.popleft()
            placed.add(index)
            result.append(override_hooks[index])
            continue

        kept: _H | None = hook
        for overrider in overriders:
            kept = suppress(kept, overrider)
            if kept is None:
                logger.debug('Dropping base hook "%s": overrideGlobal on "%s"', hook.id, overrider.id)
                break
        if kept is not None:
            result.append(kept)

    result.extend(hook for index, hook in enumerate(override_hooks) if index not in placed)
    return result


def _suppress_tool_hook(base: ToolHook, overrider: ToolHook) -> ToolHook | None:
    if base.when.phase != overrider.when.phase:
        return base
    override_tools = normalize_filter(overrider.when.tool)
    if WILDCARD in override_tools:
        return None
    base_tools = normalize_filter(base.when.tool)
    if not base_tools or WILDCARD in base_tools:
        return base
    remaining = [name for name in base_tools if name not in override_tools]
    if not remaining:
        return None
    if len(remaining) == len(base_tools):
        return base
    logger.debug('Narrowing base hook "%s" to tools %s: overrideGlobal on "%s"', base.id, remaining, overrider.id)
    return base.model_copy(update={"when": base.when.model_copy(update={"tool": remaining})})


def _suppress_session_hook(base: SessionHook, overrider: SessionHook) -> SessionHook | None:
    if base.when.event == overrider.when.event:
        return None
    return base


def _duplicate_errors(config: CommandHooksConfig, source: str) -> list[HookValidationError]:
    errors: list[HookValidationError] = []
    for kind, hooks in (("tool", config.tool), ("session", config.session)):
        for hook_id in find_duplicate_ids(hooks):
            errors.append(
                HookValidationError(
                    "duplicate_id",
                    f'Duplicate hook ID "{hook_id}" found in {source} {kind} hooks',
                    severity="warning",
                    hook_id=hook_id,
                    source=source,
                )
            )
    return errors
