import pytest

from command_hooks.execution import DEFAULT_TRUNCATION_LIMIT, run_command, run_commands, truncate_output

# --- truncate_output ---


def test_truncate_output_under_limit():
    assert truncate_output("short", 10) == "short"
    assert truncate_output("exact", 5) == "exact"


def test_truncate_output_over_limit():
    assert truncate_output("abcdefghij", 4) == "abcd\n... (truncated, 6 more chars)"


def test_default_truncation_limit():
    assert DEFAULT_TRUNCATION_LIMIT == 30_000


# --- run_command / run_commands ---


@pytest.mark.asyncio
async def test_run_command_captures_output():
    result = await run_command("echo hello; echo oops >&2", "h")
    assert result.hook_id == "h"
    assert result.success
    assert result.exit_code == 0
    assert result.stdout == "hello\n"
    assert result.stderr == "oops\n"
    assert result.error is None


@pytest.mark.asyncio
async def test_run_command_non_zero_exit():
    result = await run_command("exit 3", "h")
    assert not result.success
    assert result.exit_code == 3


@pytest.mark.asyncio
async def test_run_command_truncates():
    result = await run_command("printf '%0100d' 0", "h", truncation_limit=10)
    assert result.stdout == "0" * 10 + "\n... (truncated, 90 more chars)"


@pytest.mark.asyncio
async def test_run_commands_sequential_and_continue_after_failure(tmp_path):
    marker = tmp_path / "order.txt"
    results = await run_commands(
        [f"echo first >> {marker}", "exit 1", f"echo third >> {marker}"],
        "h",
    )
    assert [r.success for r in results] == [True, False, True]
    assert marker.read_text() == "first\nthird\n"


@pytest.mark.asyncio
async def test_run_commands_single_string():
    results = await run_commands("echo one", "h")
    assert len(results) == 1
    assert results[0].stdout == "one\n"


@pytest.mark.asyncio
async def test_run_command_spawn_failure_is_captured():
    result = await run_command("echo a\x00b", "h")
    assert not result.success
    assert result.exit_code is None
    assert "null byte" in result.error


@pytest.mark.asyncio
async def test_run_commands_continue_after_spawn_failure():
    results = await run_commands(["echo a\x00b", "echo second"], "h")
    assert [r.success for r in results] == [False, True]
    assert results[1].stdout == "second\n"
