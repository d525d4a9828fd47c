from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from .hook import Phase, ToastSpec, ToolHook, ToolHookWhen

# Simplified agent hooks are scoped to the tool that launches a subagent.
AGENT_LAUNCH_TOOL = "task"


def build_agent_hook_id(agent_name: str, phase: str, index: int) -> str:
    """Id for the index-th simplified hook of an agent.

    Ids depend on array position: reordering the entries in the frontmatter
    changes them.
    """
    return f"{agent_name}-{phase}-{index}"


class AgentHookEntry(BaseModel):
    """One entry under `hooks.before` / `hooks.after` in agent frontmatter."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)
    run: str | list[str]
    inject: str | None = None
    toast: ToastSpec | None = None

    def to_tool_hook(self, agent_name: str, phase: Phase, index: int) -> ToolHook:
        return ToolHook(
            id=build_agent_hook_id(agent_name, phase, index),
            when=ToolHookWhen(
                phase=phase,
                tool=[AGENT_LAUNCH_TOOL],
                calling_agent=[agent_name],
            ),
            run=self.run,
            inject=self.inject,
            toast=self.toast,
        )
