"""Runs matched hooks and delivers their output to the host.

Per hook invocation the states are:

    matched -> running -> (succeeded | failed) -> [injected] -> [toasted] -> [logged]

Nothing is retried or rolled back. Failures never escape `execute` or
`execute_hook`: they are logged and, when possible, shown in the session as a
note.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal

from ..models.execution import HookExecutionResult, TemplateContext
from ._shell import DEFAULT_TRUNCATION_LIMIT, run_commands
from ._template import interpolate_template

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..host import HostClient
    from ..models.execution import ExecutionContext
    from ..models.hook import Hook, ToastSpec

logger = logging.getLogger(__name__)

HookState = Literal["matched", "running", "succeeded", "failed", "injected", "toasted", "logged"]

DEFAULT_TOAST_TITLE = "Command Hook"
SESSION_HISTORY_LIMIT = 50


@dataclass
class HookRun:
    """What happened when one hook ran."""

    hook_id: str
    results: list[HookExecutionResult] = field(default_factory=list)
    states: list[HookState] = field(default_factory=lambda: ["matched"])
    error: str | None = None

    @property
    def state(self) -> HookState:
        return self.states[-1]

    @property
    def succeeded(self) -> bool:
        return "succeeded" in self.states and self.error is None

    def advance(self, state: HookState) -> None:
        self.states.append(state)


def format_hook_error(hook_id: str, error: BaseException) -> str:
    return f'Hook "{hook_id}" failed: {str(error) or type(error).__name__}'


class HookExecutor:
    """Runs hooks one at a time, in the order given.

    Args:
        client: Host the hooks inject into, toast on, and log to.
        truncation_limit: Maximum characters kept from each stdout/stderr.
    """

    def __init__(self, client: HostClient, *, truncation_limit: int | None = DEFAULT_TRUNCATION_LIMIT) -> None:
        self.client = client
        self.truncation_limit = truncation_limit or DEFAULT_TRUNCATION_LIMIT

    async def execute(self, hooks: Sequence[Hook], context: ExecutionContext) -> list[HookRun]:
        logger.debug("Executing %d hook(s) for session %s", len(hooks), context.session_id)
        return [await self.execute_hook(hook, context) for hook in hooks]

    async def execute_hook(self, hook: Hook, context: ExecutionContext) -> HookRun:
        run = HookRun(hook_id=hook.id)
        run.advance("running")
        logger.debug('Executing %s hook "%s" (tool=%s)', hook.kind, hook.id, context.tool)
        try:
            run.results = await run_commands(hook.run, hook.id, self.truncation_limit)
            run.advance("succeeded" if all(r.success for r in run.results) else "failed")
            template_context = self._template_context(hook, context, run.results)

            if hook.inject is not None and hook.inject.template:
                text = interpolate_template(hook.inject.template, template_context)
                await self._inject(context.session_id, text, hook.inject.role)
                run.advance("injected")

            if hook.toast is not None and await self._show_toast(hook.toast, template_context):
                run.advance("toasted")

            if hook.console_log and await self._console_log(hook.id, hook.console_log, template_context):
                run.advance("logged")
        except Exception as e:
            run.error = format_hook_error(hook.id, e)
            logger.error("%s", run.error)
            if run.state == "running":
                run.advance("failed")
            try:
                await self.client.prompt(context.session_id, run.error, role="note")
            except Exception as inject_error:
                logger.error('Failed to inject error message for hook "%s": %s', hook.id, inject_error)
        return run

    # --- internal helpers ---

    def _template_context(
        self, hook: Hook, context: ExecutionContext, results: list[HookExecutionResult]
    ) -> TemplateContext:
        last = results[-1] if results else None
        return TemplateContext(
            id=hook.id,
            agent=context.agent,
            tool=context.tool,
            cmd=hook.commands[0] if hook.commands else None,
            stdout=last.stdout if last else None,
            stderr=last.stderr if last else None,
            exit_code=last.exit_code if last else None,
        )

    async def _inject(self, session_id: str, text: str, role: str) -> None:
        agent, model = await self._resolve_session_identity(session_id)
        await self.client.prompt(session_id, text, role=role, agent=agent, model=model)
        logger.info("[inject] Message injected into session %s: %.100s", session_id, text)

    async def _resolve_session_identity(self, session_id: str) -> tuple[str | None, dict[str, str] | None]:
        # The injected message carries the session's current agent and model so
        # the host does not switch them.
        try:
            messages = await self.client.messages(session_id, SESSION_HISTORY_LIMIT)
        except Exception as e:
            logger.warning("Could not read messages of session %s: %s", session_id, e)
            return None, None

        agent: str | None = None
        model: dict[str, str] | None = None
        for message in reversed(messages):
            info: dict[str, Any] = message.get("info", message) if isinstance(message, dict) else {}
            if agent is None:
                agent = info.get("agent") or info.get("mode")
            if model is None:
                model = _model_of(info)
            if agent is not None and model is not None:
                break
        return agent, model

    async def _show_toast(self, toast: ToastSpec, template_context: TemplateContext) -> bool:
        title = interpolate_template(toast.title, template_context) if toast.title else DEFAULT_TOAST_TITLE
        message = interpolate_template(toast.message, template_context)
        try:
            await self.client.show_toast(title, message, toast.variant or "info", toast.duration)
        except Exception as e:
            logger.error("Failed to show toast: %s", e)
            return False
        logger.info("[toast] %s: %s", title, message)
        return True

    async def _console_log(self, hook_id: str, template: str, template_context: TemplateContext) -> bool:
        text = interpolate_template(template, template_context)
        logger.info("[%s] %s", hook_id, text)
        try:
            await self.client.log("info", text, {"hookId": hook_id})
        except Exception as e:
            logger.warning('Failed to forward console log of hook "%s": %s', hook_id, e)
            return False
        return True


def _model_of(info: dict[str, Any]) -> dict[str, str] | None:
    model = info.get("model")
    if isinstance(model, dict) and model.get("providerID") and model.get("modelID"):
        return {"providerID": model["providerID"], "modelID": model["modelID"]}
    if info.get("providerID") and info.get("modelID"):
        return {"providerID": info["providerID"], "modelID": info["modelID"]}
    return None
