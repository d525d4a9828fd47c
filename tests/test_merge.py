from command_hooks.merge import find_duplicate_ids, merge_all, merge_configs
from command_hooks.models import CommandHooksConfig


def tool(hook_id, phase="after", tool=None, run="true", **extra):
    when = {"phase": phase}
    if tool is not None:
        when["tool"] = tool
    return {"id": hook_id, "when": when, "run": run, **extra}


def session(hook_id, event="session.idle", run="true", **extra):
    return {"id": hook_id, "when": {"event": event}, "run": run, **extra}


def config(**data):
    return CommandHooksConfig.model_validate(data)


def ids(hooks):
    return [h.id for h in hooks]


# --- merge_configs ---


def test_merge_appends_new_project_hooks():
    base = config(tool=[tool("g1"), tool("g2")])
    override = config(tool=[tool("p1")])
    result = merge_configs(base, override)
    assert ids(result.config.tool) == ["g1", "g2", "p1"]
    assert result.errors == []


def test_merge_replaces_same_id_in_place():
    base = config(tool=[tool("a", run="echo global"), tool("b")])
    override = config(tool=[tool("c"), tool("a", run="echo project")])
    result = merge_configs(base, override)
    assert ids(result.config.tool) == ["a", "b", "c"]
    assert result.config.tool[0].run == "echo project"


def test_merge_session_arrays():
    base = config(session=[session("s1"), session("s2")])
    override = config(session=[session("s2", run="echo new"), session("s3")])
    merged = merge_configs(base, override).config
    assert ids(merged.session) == ["s1", "s2", "s3"]
    assert merged.session[1].run == "echo new"


def test_merge_empty_sources():
    result = merge_configs(CommandHooksConfig(), CommandHooksConfig())
    assert result.config.is_empty
    assert result.errors == []


def test_merge_truncation_limit_from_base():
    base = config(truncationLimit=100)
    override = config(truncationLimit=999)
    assert merge_configs(base, override).config.truncation_limit == 100
    assert merge_configs(CommandHooksConfig(), override).config.truncation_limit is None


def test_merge_ignore_global_config_returns_override():
    base = config(tool=[tool("g1")], session=[session("gs")])
    override = config(ignoreGlobalConfig=True, tool=[tool("p1")])
    result = merge_configs(base, override)
    assert result.config == override
    assert ids(result.config.tool) == ["p1"]
    assert result.config.session == []


def test_merge_ignore_global_config_still_reports_duplicates():
    override = config(ignoreGlobalConfig=True, tool=[tool("p"), tool("p")])
    result = merge_configs(config(), override)
    assert [e.hook_id for e in result.errors] == ["p"]
    assert result.errors[0].source == "project"


def test_merge_duplicate_ids_reported_and_kept():
    base = config(tool=[tool("d"), tool("d")])
    override = config(session=[session("x"), session("x")])
    result = merge_configs(base, override)
    assert ids(result.config.tool) == ["d", "d"]
    assert ids(result.config.session) == ["x", "x"]
    assert [(e.type, e.severity, e.source) for e in result.errors] == [
        ("duplicate_id", "warning", "global"),
        ("duplicate_id", "warning", "project"),
    ]


def test_merge_duplicate_ids_replaced_occurrence_by_occurrence():
    base = config(tool=[tool("d", run="g1"), tool("d", run="g2"), tool("d", run="g3")])
    override = config(tool=[tool("d", run="p1"), tool("d", run="p2")])
    merged = merge_configs(base, override).config
    assert [h.run for h in merged.tool] == ["p1", "p2", "g3"]


def test_merge_surplus_override_duplicates_appended():
    base = config(tool=[tool("d", run="g1")])
    override = config(tool=[tool("d", run="p1"), tool("d", run="p2")])
    merged = merge_configs(base, override).config
    assert [h.run for h in merged.tool] == ["p1", "p2"]


# --- overrideGlobal ---


def test_override_global_suppresses_same_tool_and_phase():
    base = config(tool=[tool("g-lint", tool="write"), tool("g-before", phase="before", tool="write")])
    override = config(tool=[tool("p-lint", tool="write", overrideGlobal=True)])
    merged = merge_configs(base, override).config
    assert ids(merged.tool) == ["g-before", "p-lint"]


def test_override_global_wildcard_suppresses_whole_phase():
    base = config(tool=[tool("g1", tool="write"), tool("g2"), tool("g3", phase="before")])
    override = config(tool=[tool("p", overrideGlobal=True)])
    merged = merge_configs(base, override).config
    assert ids(merged.tool) == ["g3", "p"]


def test_override_global_keeps_base_wildcard_for_specific_tool():
    base = config(tool=[tool("g-all")])
    override = config(tool=[tool("p", tool="bash", overrideGlobal=True)])
    assert ids(merge_configs(base, override).config.tool) == ["g-all", "p"]


def test_override_global_empty_tool_list_suppresses_nothing():
    base = config(tool=[tool("g", tool="bash"), tool("g-none", tool=[])])
    override = config(tool=[tool("p", tool=[], overrideGlobal=True)])
    assert ids(merge_configs(base, override).config.tool) == ["g", "g-none", "p"]


def test_override_global_keeps_base_with_empty_tool_list():
    base = config(tool=[tool("g-none", tool=[])])
    override = config(tool=[tool("p", tool="bash", overrideGlobal=True)])
    assert ids(merge_configs(base, override).config.tool) == ["g-none", "p"]


def test_override_global_narrows_partial_overlap():
    base = config(tool=[tool("g", tool=["write", "edit", "bash"])])
    override = config(tool=[tool("p", tool=["write"], overrideGlobal=True)])
    merged = merge_configs(base, override).config
    assert ids(merged.tool) == ["g", "p"]
    assert merged.tool[0].when.tool == ["edit", "bash"]
    assert base.tool[0].when.tool == ["write", "edit", "bash"]


def test_override_global_session_same_event():
    base = config(session=[session("g-idle"), session("g-start", event="session.start")])
    override = config(session=[session("p-idle", overrideGlobal=True)])
    assert ids(merge_configs(base, override).config.session) == ["g-start", "p-idle"]


def test_override_global_without_flag_keeps_base():
    base = config(tool=[tool("g", tool="write")])
    override = config(tool=[tool("p", tool="write")])
    assert ids(merge_configs(base, override).config.tool) == ["g", "p"]


def test_merge_does_not_mutate_inputs():
    base = config(tool=[tool("a"), tool("b")])
    override = config(tool=[tool("a", run="new"), tool("c", overrideGlobal=True)])
    before = (base.model_dump(), override.model_dump())
    merge_configs(base, override)
    assert (base.model_dump(), override.model_dump()) == before


# --- merge_all / find_duplicate_ids ---


def test_merge_all_folds_in_precedence_order():
    result = merge_all(
        [
            ("global", config(tool=[tool("a", run="global")])),
            ("project", config(tool=[tool("a", run="project"), tool("b")])),
            ("agent", config(tool=[tool("b", run="agent")])),
        ]
    )
    assert ids(result.config.tool) == ["a", "b"]
    assert [h.run for h in result.config.tool] == ["project", "agent"]


def test_merge_all_ignore_global_resets():
    result = merge_all(
        [
            ("global", config(tool=[tool("g"), tool("g")])),
            ("project", config(ignoreGlobalConfig=True, tool=[tool("p")])),
        ]
    )
    assert ids(result.config.tool) == ["p"]
    assert result.errors == []


def test_merge_all_empty():
    assert merge_all([]).config.is_empty


def test_find_duplicate_ids():
    hooks = config(tool=[tool("a"), tool("b"), tool("a"), tool("c"), tool("b")]).tool
    assert find_duplicate_ids(hooks) == ["a", "b"]
