"""Tests for tool dispatch and the uniform result envelope."""
import pytest

from codify_mcp import handlers, tools
from codify_mcp.dispatcher import dispatch
from codify_mcp.errors import ToolError, UnknownToolError
from codify_mcp.formatters import is_error_result

ERROR_LABELS = {
    "codify": "CODIFY",
    "write_codified_patterns": "WRITE",
    "code_roaster": "ROAST",
    "find_todos": "TODO SCAN",
    "generate_prd": "PRD GENERATION",
    "save_prd": "PRD SAVE",
    "bug_predictor": "BUG PREDICTION",
    "complexity_analyzer": "COMPLEXITY ANALYSIS",
}


class TestUnknownTool:
    """Unknown names are the one hard failure."""

    def test_unknown_tool_raises(self):
        with pytest.raises(UnknownToolError) as exc_info:
            dispatch("no_such_tool", {})
        assert exc_info.value.name == "no_such_tool"
        assert "Unknown tool: no_such_tool" in str(exc_info.value)

    def test_unknown_tool_is_not_a_handler_error(self):
        assert not issubclass(UnknownToolError, ToolError)


class TestEnvelopeTotality:
    """Every registered tool returns content for any arguments."""

    @pytest.mark.parametrize("name", tools.get_tool_names())
    def test_empty_arguments_never_raise(self, name, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        content = dispatch(name, {})
        assert content
        assert content[0].type == "text"
        assert content[0].text

    @pytest.mark.parametrize("name", tools.get_tool_names())
    def test_none_arguments_never_raise(self, name, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert dispatch(name, None)

    @pytest.mark.parametrize("name", [n for n in tools.get_tool_names() if tools.get_required_fields(n)])
    def test_missing_required_field_is_encoded(self, name, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        content = dispatch(name, {})

        assert len(content) == 1
        assert content[0].text.startswith(f"❌ {ERROR_LABELS[name]} ERROR: Missing required argument:")
        assert is_error_result(content)

    def test_non_mapping_arguments_are_encoded(self):
        content = dispatch("codify", ["not", "a", "dict"])
        assert content[0].text.startswith("❌ CODIFY ERROR: Arguments must be an object")

    def test_wrong_argument_type_is_encoded(self):
        content = dispatch("codify", {"filePath": 42})
        assert content[0].text.startswith("❌ CODIFY ERROR:")


class TestFaultConversion:
    """Faults escaping a handler are converted, not propagated."""

    def test_handler_exception_becomes_error_block(self, monkeypatch):
        def exploding(arguments):
            raise RuntimeError("boom")
        exploding.error_label = "CODIFY"
        monkeypatch.setitem(handlers.HANDLER_MAP, "codify", exploding)

        content = dispatch("codify", {"filePath": "x"})

        assert [block.text for block in content] == ["❌ CODIFY ERROR: boom"]

    def test_empty_handler_output_becomes_error_block(self, monkeypatch):
        def silent(arguments):
            return []
        silent.error_label = handlers.handle_save_prd.error_label
        monkeypatch.setitem(handlers.HANDLER_MAP, "save_prd", silent)

        content = dispatch("save_prd", {})

        assert [block.text for block in content] == ["❌ PRD SAVE ERROR: Tool produced no output"]

    def test_unlabelled_handler_falls_back_to_tool_name(self, monkeypatch):
        monkeypatch.setitem(handlers.HANDLER_MAP, "save_prd", lambda arguments: [])

        content = dispatch("save_prd", {})

        assert content[0].text == "❌ SAVE_PRD ERROR: Tool produced no output"

    def test_arguments_are_not_mutated(self, tmp_path):
        arguments = {"filePath": str(tmp_path / "missing.py")}
        dispatch("complexity_analyzer", arguments)
        assert arguments == {"filePath": str(tmp_path / "missing.py")}

    def test_extra_fields_pass_through(self, write_file):
        path = write_file("a.py", "print(1)\n")
        content = dispatch("codify", {"filePath": str(path), "unexpected": True})
        assert not is_error_result(content)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
