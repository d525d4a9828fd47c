"""Runs hook commands with the system shell, one after another."""

from __future__ import annotations

import asyncio
import logging

from ..models.execution import HookExecutionResult

logger = logging.getLogger(__name__)

DEFAULT_TRUNCATION_LIMIT = 30_000


def truncate_output(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + f"\n... (truncated, {len(text) - limit} more chars)"


async def run_command(command: str, hook_id: str, truncation_limit: int = DEFAULT_TRUNCATION_LIMIT) -> HookExecutionResult:
    """Run one command. A spawn failure is reported in the result, never raised."""
    logger.debug("[%s] Executing: %s", hook_id, command)
    try:
        proc = await asyncio.create_subprocess_shell(
            command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, stderr = await proc.communicate()
    except (OSError, ValueError) as e:
        logger.error("[%s] Failed to execute command: %s", hook_id, e)
        return HookExecutionResult(hook_id=hook_id, success=False, error=str(e))

    exit_code = proc.returncode if proc.returncode is not None else 0
    out = truncate_output(stdout.decode(errors="replace"), truncation_limit)
    err = truncate_output(stderr.decode(errors="replace"), truncation_limit)
    logger.debug(
        "[%s] Command completed: exit %d, stdout length: %d, stderr length: %d",
        hook_id,
        exit_code,
        len(out),
        len(err),
    )
    return HookExecutionResult(
        hook_id=hook_id,
        success=exit_code == 0,
        exit_code=exit_code,
        stdout=out,
        stderr=err,
    )


async def run_commands(
    run: str | list[str],
    hook_id: str,
    truncation_limit: int = DEFAULT_TRUNCATION_LIMIT,
) -> list[HookExecutionResult]:
    """Run every command in order. A failing command does not stop the ones after it."""
    commands = [run] if isinstance(run, str) else list(run)
    logger.debug('Executing %d command(s) for hook "%s"', len(commands), hook_id)
    return [await run_command(command, hook_id, truncation_limit) for command in commands]
