"""
End-to-end tests for the MCP tool functions.

Tools are called directly and through execute_tool; both return plain dicts.
"""

import os
import sys

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from code_fragments_mcp.config import reset_config
from code_fragments_mcp.tools import (execute_tool, get_project_root, get_tool_registry,
                                      tool_create_file, tool_get_file_content,
                                      tool_get_symbol_content, tool_list_files, tool_list_symbols,
                                      tool_set_project_path)


@pytest.fixture
def project(ts_project):
    result = tool_set_project_path(str(ts_project))
    assert result["success"], result
    return ts_project


class TestProjectPath:
    """Selecting the project"""

    def test_set_project_path(self, ts_project):
        result = tool_set_project_path(str(ts_project))
        assert result["success"] is True
        assert result["path"] == str(ts_project.resolve())
        assert result["file_count"] == 6

    def test_missing_project_path(self, tmp_path):
        result = tool_set_project_path(str(tmp_path / "missing"))
        assert result["success"] is False
        assert result["status"] == 404

    def test_project_path_is_a_file(self, tmp_path):
        target = tmp_path / "file.ts"
        target.write_text("")
        result = tool_set_project_path(str(target))
        assert result["success"] is False
        assert result["status"] == 400

    def test_default_root_comes_from_config(self, monkeypatch, ts_project):
        monkeypatch.setenv("CODE_FRAGMENTS_BASE_PATH", str(ts_project))
        reset_config()
        assert get_project_root() == str(ts_project.resolve())
        assert tool_list_files()["count"] == 6


class TestListFiles:
    """File listings"""

    def test_whole_project(self, project):
        result = tool_list_files()
        assert result["files"] == [
            ".gitignore",
            "build-utils/helper.ts",
            "src/empty.ts",
            "src/main.ts",
            "src/notes.md",
            "src/service.ts",
        ]
        assert result["count"] == 6

    def test_sub_path(self, project):
        result = tool_list_files("src")
        assert result["files"] == ["src/empty.ts", "src/main.ts", "src/notes.md", "src/service.ts"]

    def test_missing_sub_path(self, project):
        result = tool_list_files("nope")
        assert result["success"] is False
        assert result["status"] == 404

    def test_sub_path_outside_project(self, project):
        result = tool_list_files("../")
        assert result["success"] is False
        assert result["status"] == 400


class TestGetFileContent:
    """File reads"""

    def test_whole_file(self, project):
        result = tool_get_file_content("src/main.ts")
        assert result["success"] is True
        assert result["file_name"] == "src/main.ts"
        assert result["content"] == "function foo(){return 1}\nconst bar=()=>2\n"
        assert (result["start_byte"], result["end_byte"]) == (0, 41)

    def test_byte_range(self, project):
        result = tool_get_file_content("src/main.ts", 25, 40)
        assert result["content"] == "const bar=()=>2"

    def test_directory_lists_files(self, project):
        result = tool_get_file_content("src")
        assert result["files"] == ["src/empty.ts", "src/main.ts", "src/notes.md", "src/service.ts"]
        assert result["count"] == 4

    def test_missing_file(self, project):
        result = tool_get_file_content("src/missing.ts")
        assert result["success"] is False
        assert result["status"] == 404

    def test_invalid_range(self, project):
        result = tool_get_file_content("src/main.ts", 10, 5)
        assert result["status"] == 400


class TestSymbols:
    """Symbol listings and fetches"""

    def test_list_symbols(self, project):
        result = tool_list_symbols()
        assert result["success"] is True
        assert [entry["file_name"] for entry in result["files"]] == [
            "build-utils/helper.ts",
            "src/empty.ts",
            "src/main.ts",
            "src/service.ts",
        ]
        assert result["count"] == 4

    def test_list_symbols_for_one_file(self, project):
        result = tool_list_symbols("src/main.ts")
        assert result["files"] == [{
            "file_name": "src/main.ts",
            "symbols": [
                {"name": "foo", "start_offset": 0, "end_offset": 24},
                {"name": "bar", "start_offset": 25, "end_offset": 40},
            ],
        }]

    def test_get_symbol_content(self, project):
        result = tool_get_symbol_content("src/service.ts", "createService")
        assert result["success"] is True
        assert result["file_name"] == "src/service.ts"
        assert result["name"] == "createService"
        assert result["minimal"] == "export function createService(): Service {\n// ...\n}"
        assert result["full"].count("\n") == 3

    def test_absent_symbol_is_not_found(self, project):
        result = tool_get_symbol_content("src/main.ts", "missing")
        assert result["success"] is False
        assert result["status"] == 404
        assert result["error"] == "Function not found: missing in src/main.ts"

    def test_empty_symbol_name(self, project):
        result = tool_get_symbol_content("src/main.ts", "")
        assert result["status"] == 400

    def test_unparsable_file(self, project):
        (project / "src" / "bad.ts").write_text("function broken( {")
        assert tool_get_symbol_content("src/bad.ts", "broken")["status"] == 422
        assert tool_list_symbols()["status"] == 422


class TestCreateFile:
    """File creation"""

    def test_create_file(self, project):
        result = tool_create_file("src/new/util.ts", "export const x = 1;\n")
        assert result["success"] is True
        assert (project / "src" / "new" / "util.ts").read_text() == "export const x = 1;\n"
        assert "src/new/util.ts" in tool_list_files()["files"]

    def test_existing_file_is_rejected(self, project):
        result = tool_create_file("src/main.ts", "replaced")
        assert result["success"] is False
        assert result["status"] == 400
        assert (project / "src" / "main.ts").read_text().startswith("function foo")

    def test_overwrite_when_configured(self, monkeypatch, project):
        monkeypatch.setenv("CODE_FRAGMENTS_ALLOW_OVERWRITE", "true")
        reset_config()
        result = tool_create_file("src/main.ts", "replaced")
        assert result["success"] is True
        assert (project / "src" / "main.ts").read_text() == "replaced"

    def test_outside_project_is_rejected(self, project):
        result = tool_create_file("../escape.ts", "x")
        assert result["status"] == 400
        assert not (project.parent / "escape.ts").exists()

    def test_empty_content(self, project):
        assert tool_create_file("src/empty2.ts", "")["status"] == 400


class TestExecuteTool:
    """Dispatch by name"""

    def test_registry_names(self):
        assert set(get_tool_registry()) == {
            "set_project_path",
            "list_files",
            "get_file_content",
            "list_symbols",
            "get_symbol_content",
            "create_file",
        }

    def test_dispatch(self, project):
        result = execute_tool("get_symbol_content", file_name="src/main.ts", name="bar")
        assert result["full"] == "const bar=()=>2"

    def test_unknown_tool(self):
        result = execute_tool("delete_everything")
        assert result["success"] is False
        assert result["error"] == "Unknown tool: delete_everything"
