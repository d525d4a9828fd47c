"""CommandHooksPlugin: the host-facing entry points.

Each entry point loads configuration fresh, matches hooks against the event,
drops hooks that already fired for it, and runs the rest in order. No
exception leaves an entry point; failures are logged and the host carries on.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..execution import (
    EventDeduplicator,
    HookExecutor,
    HookRun,
    generate_session_event_id,
    generate_tool_event_id,
)
from ..loaders import load_agent_config, load_effective_config
from ..matching import match_session_hooks, match_tool_hooks
from ..merge import merge_configs
from ..models.agent import AGENT_LAUNCH_TOOL
from ..models.execution import ExecutionContext

if TYPE_CHECKING:
    from ..host import HostClient
    from ..models.hook import CommandHooksConfig, Hook

logger = logging.getLogger(__name__)

CONFIG_ERROR_TOAST_TITLE = "Command Hooks Config Error"
DEFAULT_MAX_CACHED_TOOL_CALLS = 1000


class CommandHooksPlugin:
    """Runs configured hooks for the host's tool and session events.

    Usage:
        plugin = CommandHooksPlugin(client, cwd=Path.cwd())
        await plugin.tool_execute_before(
            {"tool": "bash", "sessionID": "s1", "callID": "c1"},
            {"args": {"command": "ls"}},
        )
        await plugin.event({"type": "session.idle", "properties": {"sessionID": "s1"}})
    """

    def __init__(
        self,
        client: HostClient,
        cwd: Path | None = None,
        home: Path | None = None,
        *,
        deduplicator: EventDeduplicator | None = None,
        max_cached_tool_calls: int = DEFAULT_MAX_CACHED_TOOL_CALLS,
    ) -> None:
        self.client = client
        self.cwd = cwd or Path.cwd()
        self.home = home
        self.deduplicator = deduplicator or EventDeduplicator()
        self.max_cached_tool_calls = max_cached_tool_calls
        self._tool_args: OrderedDict[str, dict[str, Any]] = OrderedDict()
        self._notified_errors: set[tuple[str, str]] = set()

    # --- entry points ---

    async def tool_execute_before(self, input: dict[str, Any], output: dict[str, Any]) -> list[HookRun]:
        """Handle `tool.execute.before`. `output["args"]` holds the tool arguments."""
        try:
            tool = _string(input.get("tool"))
            session_id = _string(input.get("sessionID"))
            call_id = _string(input.get("callID"))
            args = output.get("args") if isinstance(output.get("args"), dict) else {}
            if not tool or not session_id:
                logger.debug("tool.execute.before missing tool or sessionID")
                return []

            self._remember_tool_args(call_id, args)
            context = ExecutionContext(
                session_id=session_id,
                agent=_calling_agent(tool, args, input),
                tool=tool,
                call_id=call_id,
                slash_command=_string(input.get("slashCommand")),
                tool_args=args,
            )
            return await self._run_tool_hooks("before", context)
        except Exception as e:
            logger.error("Error handling tool.execute.before: %s", e)
            return []

    async def tool_execute_after(
        self, input: dict[str, Any], tool_output: dict[str, Any] | None = None
    ) -> list[HookRun]:
        """Handle `tool.execute.after`.

        A call without output is provisional (the tool is still running);
        after-hooks wait for the output or for the `tool.result` event.
        """
        try:
            if tool_output is None:
                logger.debug("tool.execute.after for %s has no output yet, waiting for tool.result", input.get("tool"))
                return []
            return await self._handle_tool_finished(
                tool=_string(input.get("tool")),
                session_id=_string(input.get("sessionID")),
                call_id=_string(input.get("callID")),
                agent=_string(input.get("agent")),
                slash_command=_string(input.get("slashCommand")),
            )
        except Exception as e:
            logger.error("Error handling tool.execute.after: %s", e)
            return []

    async def event(self, event: dict[str, Any]) -> list[HookRun]:
        """Handle a generic host event `{type, properties}`."""
        event_type = None
        try:
            event_type = event.get("type")
            properties = event.get("properties") or {}
            if event_type in ("session.created", "session.start"):
                return await self._handle_session_event("session.start", properties)
            if event_type == "session.idle":
                return await self._handle_session_event("session.idle", properties)
            if event_type in ("session.deleted", "session.end"):
                session_id = _session_id(properties)
                runs = await self._handle_session_event("session.end", properties)
                if session_id:
                    self._forget_session(session_id)
                return runs
            if event_type == "tool.result":
                return await self._handle_tool_finished(
                    tool=_string(properties.get("name") or properties.get("tool")),
                    session_id=_session_id(properties),
                    call_id=_string(properties.get("callID") or properties.get("callId")),
                    agent=_string(properties.get("agent")),
                    slash_command=_string(properties.get("slashCommand")),
                )
        except Exception as e:
            logger.error("Error handling %s event: %s", event_type, e)
            return []
        logger.debug("Ignoring event %s", event_type)
        return []

    # --- internal helpers ---

    async def _handle_tool_finished(
        self,
        *,
        tool: str | None,
        session_id: str | None,
        call_id: str | None,
        agent: str | None,
        slash_command: str | None,
    ) -> list[HookRun]:
        if not tool or not session_id:
            logger.debug("Tool completion missing tool name or session id")
            return []
        args = self._tool_args.get(call_id) if call_id else None
        context = ExecutionContext(
            session_id=session_id,
            agent=_calling_agent(tool, args or {}, {"agent": agent}),
            tool=tool,
            call_id=call_id,
            slash_command=slash_command,
            tool_args=args,
        )
        try:
            return await self._run_tool_hooks("after", context)
        finally:
            if call_id:
                self._tool_args.pop(call_id, None)

    async def _run_tool_hooks(self, phase: str, context: ExecutionContext) -> list[HookRun]:
        launched_agent = _launched_agent(context.tool, context.tool_args)
        config = await self._resolve_config(context.session_id, launched_agent)
        matched = match_tool_hooks(config.tool, context, phase=phase)

        hooks: list[Hook] = []
        for hook in matched:
            if context.call_id:
                event_id = generate_tool_event_id(hook.id, context.tool or "", context.session_id, phase, context.call_id)
                if self.deduplicator.has_processed(event_id, context.session_id):
                    logger.debug('Skipping hook "%s": already ran for call %s', hook.id, context.call_id)
                    continue
                self.deduplicator.mark_processed(event_id, context.session_id)
            hooks.append(hook)

        logger.debug("Matched %d hook(s) for tool %s (%s phase)", len(hooks), context.tool, phase)
        return await HookExecutor(self.client, truncation_limit=config.truncation_limit).execute(hooks, context)

    async def _handle_session_event(self, event: str, properties: dict[str, Any]) -> list[HookRun]:
        session_id = _session_id(properties)
        if not session_id:
            logger.debug("%s event missing session id", event)
            return []
        context = ExecutionContext(session_id=session_id, agent=_string(properties.get("agent")))
        config = await self._resolve_config(session_id)
        matched = match_session_hooks(config.session, context, event=event)

        hooks: list[Hook] = []
        for hook in matched:
            if event == "session.start":
                event_id = generate_session_event_id(hook.id, event, session_id)
                if self.deduplicator.has_processed(event_id, session_id):
                    logger.debug('Skipping hook "%s": already ran for session %s', hook.id, session_id)
                    continue
                self.deduplicator.mark_processed(event_id, session_id)
            hooks.append(hook)

        logger.debug("Matched %d hook(s) for %s, session %s", len(hooks), event, session_id)
        return await HookExecutor(self.client, truncation_limit=config.truncation_limit).execute(hooks, context)

    async def _resolve_config(self, session_id: str, agent_name: str | None = None) -> CommandHooksConfig:
        loaded = load_effective_config(self.cwd, self.home)
        for error in loaded.errors:
            await self._notify_config_error(session_id, error)
        if not agent_name:
            return loaded.config

        agent_config = load_agent_config(agent_name, self.cwd, self.home)
        if agent_config.is_empty and not agent_config.ignore_global_config:
            return loaded.config
        logger.debug("Applying hooks from agent %s", agent_name)
        merged = merge_configs(loaded.config, agent_config, base_source="config", override_source=f"agent {agent_name}")
        for issue in merged.errors:
            logger.warning("%s", issue.message)
        return merged.config

    async def _notify_config_error(self, session_id: str, error: str) -> None:
        key = (session_id, error)
        if key in self._notified_errors:
            return
        self._notified_errors.add(key)
        try:
            await self.client.show_toast(CONFIG_ERROR_TOAST_TITLE, error, "error")
        except Exception as e:
            logger.error("Failed to notify config error: %s", e)

    def _remember_tool_args(self, call_id: str | None, args: dict[str, Any]) -> None:
        if not call_id:
            return
        self._tool_args[call_id] = args
        self._tool_args.move_to_end(call_id)
        while len(self._tool_args) > self.max_cached_tool_calls:
            self._tool_args.popitem(last=False)

    def _forget_session(self, session_id: str) -> None:
        self.deduplicator.evict(session_id)
        self._notified_errors = {key for key in self._notified_errors if key[0] != session_id}


def _string(value: object) -> str | None:
    return value if isinstance(value, str) and value else None


def _session_id(properties: dict[str, Any]) -> str | None:
    info = properties.get("info")
    if isinstance(info, dict) and _string(info.get("id")):
        return info["id"]
    return _string(properties.get("sessionID") or properties.get("sessionId"))


def _calling_agent(tool: str, args: dict[str, Any], input: dict[str, Any]) -> str | None:
    # Launching a subagent runs hooks on behalf of the agent being launched.
    if tool == AGENT_LAUNCH_TOOL and _string(args.get("subagent_type")):
        return args["subagent_type"]
    return _string(input.get("agent"))


def _launched_agent(tool: str | None, args: dict[str, Any] | None) -> str | None:
    if tool != AGENT_LAUNCH_TOOL:
        return None
    return _string((args or {}).get("subagent_type"))
