from __future__ import annotations

from typing import Any

from ._result import HookValidationError, ValidationResult

VALID_PHASES = ("before", "after")
VALID_EVENTS = ("session.start", "session.created", "session.idle", "session.end")
VALID_INJECTION_AS = ("system", "user", "note")
VALID_TOAST_VARIANTS = ("info", "success", "warning", "error")

_TOOL_FILTER_FIELDS = ("tool", "callingAgent", "slashCommand")
_SESSION_FILTER_FIELDS = ("agent",)


def validate_config(data: Any) -> ValidationResult:
    issues: list[HookValidationError] = []

    if not isinstance(data, dict):
        issues.append(
            HookValidationError("unknown", "Config must be an object with optional tool/session arrays")
        )
        return ValidationResult(issues=issues)

    limit = data.get("truncationLimit")
    if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0):
        issues.append(HookValidationError("unknown", "truncationLimit must be a positive integer"))

    ignore = data.get("ignoreGlobalConfig")
    if ignore is not None and not isinstance(ignore, bool):
        issues.append(HookValidationError("unknown", "ignoreGlobalConfig must be a boolean"))

    for kind in ("tool", "session"):
        hooks = data.get(kind)
        if hooks is None:
            continue
        if not isinstance(hooks, list):
            issues.append(HookValidationError("unknown", f"{kind} must be an array"))
            continue
        seen_ids: set[str] = set()
        reported: set[str] = set()
        for i, hook in enumerate(hooks):
            issues.extend(_validate_hook(hook, kind, i))
            hook_id = hook.get("id") if isinstance(hook, dict) else None
            if isinstance(hook_id, str):
                if hook_id in seen_ids and hook_id not in reported:
                    issues.append(
                        HookValidationError(
                            "duplicate_id",
                            f'Duplicate hook ID "{hook_id}" found in {kind} hooks',
                            severity="warning",
                            hook_id=hook_id,
                        )
                    )
                    reported.add(hook_id)
                seen_ids.add(hook_id)

    return ValidationResult(issues=issues)


def _validate_hook(hook: Any, kind: str, index: int) -> list[HookValidationError]:
    issues: list[HookValidationError] = []
    label = f"{kind}[{index}]"

    if not isinstance(hook, dict):
        issues.append(HookValidationError("unknown", f"{label}: hook must be an object"))
        return issues

    hook_id = hook.get("id")
    if hook_id is None:
        issues.append(HookValidationError("missing_id", f'{label}: missing required field "id"'))
        return issues
    if not isinstance(hook_id, str) or not hook_id:
        issues.append(
            HookValidationError("missing_id", f"{label}: id must be a non-empty string", hook_id=str(hook_id))
        )
        return issues

    when = hook.get("when")
    if when is None:
        issues.append(
            HookValidationError("missing_when", f'Hook "{hook_id}": missing required field "when"', hook_id=hook_id)
        )
    elif not isinstance(when, dict):
        issues.append(HookValidationError("unknown", f'Hook "{hook_id}": when must be an object', hook_id=hook_id))
    elif kind == "tool":
        issues.extend(_validate_tool_when(when, hook_id))
    else:
        issues.extend(_validate_session_when(when, hook_id))

    run = hook.get("run")
    if run is None:
        issues.append(
            HookValidationError("missing_run", f'Hook "{hook_id}": missing required field "run"', hook_id=hook_id)
        )
    elif not _is_string_or_string_list(run):
        issues.append(
            HookValidationError(
                "unknown", f'Hook "{hook_id}": run must be a string or array of strings', hook_id=hook_id
            )
        )

    issues.extend(_validate_injection(hook.get("inject"), hook_id))
    issues.extend(_validate_toast(hook.get("toast"), hook_id))

    console_log = hook.get("consoleLog")
    if console_log is not None and not isinstance(console_log, str):
        issues.append(
            HookValidationError("unknown", f'Hook "{hook_id}": consoleLog must be a string', hook_id=hook_id)
        )

    override = hook.get("overrideGlobal")
    if override is not None and not isinstance(override, bool):
        issues.append(
            HookValidationError("unknown", f'Hook "{hook_id}": overrideGlobal must be a boolean', hook_id=hook_id)
        )

    return issues


def _validate_tool_when(when: dict[str, Any], hook_id: str) -> list[HookValidationError]:
    issues: list[HookValidationError] = []
    phase = when.get("phase")
    if phase is None:
        issues.append(
            HookValidationError("missing_when", f'Hook "{hook_id}": missing required field "when.phase"', hook_id=hook_id)
        )
    elif phase not in VALID_PHASES:
        issues.append(
            HookValidationError(
                "invalid_phase",
                f'Hook "{hook_id}": when.phase must be "before" or "after", got {phase!r}',
                hook_id=hook_id,
            )
        )
    issues.extend(_validate_filters(when, _TOOL_FILTER_FIELDS, hook_id))

    tool_args = when.get("toolArgs")
    if tool_args is not None:
        if not isinstance(tool_args, dict):
            issues.append(
                HookValidationError("unknown", f'Hook "{hook_id}": when.toolArgs must be an object', hook_id=hook_id)
            )
        else:
            issues.extend(_validate_filters(tool_args, tuple(tool_args), hook_id, prefix="when.toolArgs."))
    return issues


def _validate_session_when(when: dict[str, Any], hook_id: str) -> list[HookValidationError]:
    issues: list[HookValidationError] = []
    event = when.get("event")
    if event is None:
        issues.append(
            HookValidationError("missing_when", f'Hook "{hook_id}": missing required field "when.event"', hook_id=hook_id)
        )
    elif event not in VALID_EVENTS:
        issues.append(
            HookValidationError(
                "invalid_event",
                f'Hook "{hook_id}": when.event must be one of {", ".join(VALID_EVENTS)}, got {event!r}',
                hook_id=hook_id,
            )
        )
    issues.extend(_validate_filters(when, _SESSION_FILTER_FIELDS, hook_id))
    return issues


def _validate_filters(
    when: dict[str, Any], fields: tuple[str, ...], hook_id: str, prefix: str = "when."
) -> list[HookValidationError]:
    issues: list[HookValidationError] = []
    for name in fields:
        value = when.get(name)
        if value is not None and not _is_string_or_string_list(value):
            issues.append(
                HookValidationError(
                    "unknown",
                    f'Hook "{hook_id}": {prefix}{name} must be a string or array of strings',
                    hook_id=hook_id,
                )
            )
    return issues


def _validate_injection(inject: Any, hook_id: str) -> list[HookValidationError]:
    issues: list[HookValidationError] = []
    if inject is None or isinstance(inject, str):
        return issues
    if not isinstance(inject, dict):
        issues.append(
            HookValidationError("unknown", f'Hook "{hook_id}": inject must be a string or an object', hook_id=hook_id)
        )
        return issues

    target = inject.get("target")
    if target is not None and target != "callingSession":
        issues.append(
            HookValidationError(
                "invalid_injection_target",
                f'Hook "{hook_id}": inject.target must be "callingSession", got {target!r}',
                hook_id=hook_id,
            )
        )

    as_ = inject.get("as")
    if as_ is not None and as_ not in VALID_INJECTION_AS:
        issues.append(
            HookValidationError(
                "invalid_injection_as",
                f'Hook "{hook_id}": inject.as must be "system", "user" or "note", got {as_!r}',
                hook_id=hook_id,
            )
        )

    template = inject.get("template")
    if template is not None and not isinstance(template, str):
        issues.append(
            HookValidationError("unknown", f'Hook "{hook_id}": inject.template must be a string', hook_id=hook_id)
        )
    return issues


def _validate_toast(toast: Any, hook_id: str) -> list[HookValidationError]:
    issues: list[HookValidationError] = []
    if toast is None:
        return issues
    if not isinstance(toast, dict):
        issues.append(HookValidationError("unknown", f'Hook "{hook_id}": toast must be an object', hook_id=hook_id))
        return issues
    if not isinstance(toast.get("message"), str):
        issues.append(
            HookValidationError("unknown", f'Hook "{hook_id}": toast.message must be a string', hook_id=hook_id)
        )
    variant = toast.get("variant")
    if variant is not None and variant not in VALID_TOAST_VARIANTS:
        issues.append(
            HookValidationError(
                "unknown",
                f'Hook "{hook_id}": toast.variant must be one of {", ".join(VALID_TOAST_VARIANTS)}, got {variant!r}',
                hook_id=hook_id,
            )
        )
    return issues


def _is_string_or_string_list(value: Any) -> bool:
    if isinstance(value, str):
        return True
    return isinstance(value, list) and all(isinstance(item, str) for item in value)
