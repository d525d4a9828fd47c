from command_hooks.validation import validate_config, validate_config_file


def _types(result):
    return [i.type for i in result.issues]


def test_valid_config():
    result = validate_config(
        {
            "truncationLimit": 1000,
            "tool": [
                {
                    "id": "lint",
                    "when": {"phase": "after", "tool": ["write", "edit"], "toolArgs": {"path": "*.py"}},
                    "run": ["ruff check ."],
                    "inject": {"as": "note", "template": "{stdout}"},
                    "toast": {"message": "done", "variant": "success"},
                }
            ],
            "session": [{"id": "hello", "when": {"event": "session.start"}, "run": "echo hi"}],
        }
    )
    assert result.valid
    assert result.issues == []


def test_root_must_be_object():
    result = validate_config(["not", "an", "object"])
    assert not result.valid
    assert _types(result) == ["unknown"]


def test_missing_id():
    result = validate_config({"tool": [{"when": {"phase": "after"}, "run": "true"}]})
    assert _types(result) == ["missing_id"]


def test_missing_when_and_run():
    result = validate_config({"tool": [{"id": "x"}]})
    assert set(_types(result)) == {"missing_when", "missing_run"}
    assert all(i.hook_id == "x" for i in result.issues)


def test_invalid_phase():
    result = validate_config({"tool": [{"id": "x", "when": {"phase": "during"}, "run": "true"}]})
    assert _types(result) == ["invalid_phase"]


def test_invalid_event():
    result = validate_config({"session": [{"id": "x", "when": {"event": "session.paused"}, "run": "true"}]})
    assert _types(result) == ["invalid_event"]


def test_session_created_is_accepted():
    result = validate_config({"session": [{"id": "x", "when": {"event": "session.created"}, "run": "true"}]})
    assert result.valid


def test_invalid_injection_target_and_role():
    result = validate_config(
        {
            "tool": [
                {
                    "id": "x",
                    "when": {"phase": "after"},
                    "run": "true",
                    "inject": {"target": "otherSession", "as": "assistant"},
                }
            ]
        }
    )
    assert set(_types(result)) == {"invalid_injection_target", "invalid_injection_as"}


def test_invalid_filter_type():
    result = validate_config({"tool": [{"id": "x", "when": {"phase": "after", "tool": 5}, "run": "true"}]})
    assert not result.valid
    assert "when.tool" in result.errors[0].message


def test_duplicate_id_is_warning():
    hook = {"id": "dup", "when": {"phase": "after"}, "run": "true"}
    result = validate_config({"tool": [hook, hook, hook]})
    assert result.valid
    assert len(result.warnings) == 1
    assert result.warnings[0].type == "duplicate_id"
    assert result.warnings[0].hook_id == "dup"


def test_same_id_in_tool_and_session_is_not_duplicate():
    result = validate_config(
        {
            "tool": [{"id": "same", "when": {"phase": "after"}, "run": "true"}],
            "session": [{"id": "same", "when": {"event": "session.idle"}, "run": "true"}],
        }
    )
    assert result.warnings == []


def test_invalid_top_level_fields():
    result = validate_config({"truncationLimit": -1, "ignoreGlobalConfig": "yes", "tool": {}})
    assert len(result.errors) == 3


def test_validate_config_file_with_comments(tmp_path):
    path = tmp_path / "command-hooks.jsonc"
    path.write_text(
        """{
  // project hooks
  "tool": [
    { "id": "x", "when": { "phase": "sideways" }, "run": "true" } /* bad phase */
  ]
}"""
    )
    result = validate_config_file(path)
    assert _types(result) == ["invalid_phase"]
