from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator

# A filter field: one name, a list of names, or "*" for any.
FilterValue = Union[str, list[str]]

Phase = Literal["before", "after"]
SessionEvent = Literal["session.start", "session.idle", "session.end"]

# Host event names accepted as synonyms in configuration.
_SESSION_EVENT_ALIASES = {"session.created": "session.start"}


class ToolHookWhen(BaseModel):
    """Match conditions for a tool hook. Omitted filters match everything."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)
    phase: Phase
    tool: FilterValue | None = None
    calling_agent: FilterValue | None = Field(None, alias="callingAgent")
    slash_command: FilterValue | None = Field(None, alias="slashCommand")
    tool_args: dict[str, FilterValue] | None = Field(None, alias="toolArgs")


class SessionHookWhen(BaseModel):
    """Match conditions for a session hook."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)
    event: SessionEvent
    agent: FilterValue | None = None

    @field_validator("event", mode="before")
    @classmethod
    def _normalize_event_alias(cls, v: object) -> object:
        if isinstance(v, str):
            return _SESSION_EVENT_ALIASES.get(v, v)
        return v


class HookInjection(BaseModel):
    """Where and how a hook's rendered output is injected into the conversation."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)
    target: Literal["callingSession"] | None = None
    as_: Literal["system", "user", "note"] | None = Field(None, alias="as")
    template: str | None = None

    @property
    def role(self) -> str:
        return self.as_ or "system"


class ToastSpec(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)
    title: str | None = None
    message: str
    variant: Literal["info", "success", "warning", "error"] | None = None
    duration: int | None = None  # milliseconds


class _HookBase(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)
    id: str = Field(min_length=1)
    run: str | list[str]
    inject: HookInjection | None = None
    toast: ToastSpec | None = None
    console_log: str | None = Field(None, alias="consoleLog")
    override_global: bool = Field(False, alias="overrideGlobal")

    @field_validator("inject", mode="before")
    @classmethod
    def _parse_inject_string(cls, v: object) -> object:
        if isinstance(v, str):
            return {"template": v}
        return v

    @property
    def commands(self) -> list[str]:
        """The hook's commands in execution order."""
        if isinstance(self.run, str):
            return [self.run]
        return list(self.run)


class ToolHook(_HookBase):
    """Shell command(s) run before or after a tool executes."""

    kind: Literal["tool"] = "tool"
    when: ToolHookWhen


class SessionHook(_HookBase):
    """Shell command(s) run on a session lifecycle event."""

    kind: Literal["session"] = "session"
    when: SessionHookWhen


Hook = Union[ToolHook, SessionHook]


class CommandHooksConfig(BaseModel):
    """Contents of command-hooks.jsonc, or of a markdown `command_hooks` block."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)
    truncation_limit: PositiveInt | None = Field(None, alias="truncationLimit")
    ignore_global_config: bool | None = Field(None, alias="ignoreGlobalConfig")
    tool: list[ToolHook] = []
    session: list[SessionHook] = []

    @property
    def is_empty(self) -> bool:
        return not self.tool and not self.session
