"""Pytest configuration and shared fixtures.

Provides small on-disk TypeScript projects and resets the global
configuration and project root between tests.
"""

import logging
import os
import sys
import tempfile
import pytest
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

ENV_VARS = (
    "CODE_FRAGMENTS_BASE_PATH",
    "CODE_FRAGMENTS_IGNORE_FILE",
    "CODE_FRAGMENTS_IGNORE_CASE",
    "CODE_FRAGMENTS_ALLOW_OVERWRITE",
    "CODE_FRAGMENTS_LOG_LEVEL",
    "CODE_FRAGMENTS_LOG_FILE",
)


def write_files(root: Path, files: dict) -> Path:
    """Write ``{relative_path: content}`` below ``root``."""
    for relative_path, content in files.items():
        path = root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content.encode("utf-8"))
    return root


@pytest.fixture
def ts_project():
    """A small TypeScript project with ignore files at two levels."""
    with tempfile.TemporaryDirectory() as temp_dir:
        project_path = Path(temp_dir)
        write_files(project_path, {
            ".gitignore": "build/\n*.log\n",
            "src/main.ts": "function foo(){return 1}\nconst bar=()=>2\n",
            "src/service.ts": '''export class Service {
    start() {
        return true;
    }

    stop() {
        return false;
    }
}

export function createService(): Service {
    const service = new Service();
    return service;
}
''',
            "src/empty.ts": "const answer = 42;\n",
            "src/notes.md": "# Notes\n",
            "build/out.ts": "function built() {}\n",
            "build-utils/helper.ts": "function helper() {}\n",
            "debug.log": "noise\n",
            "node_modules/lib/index.ts": "function lib() {}\n",
        })
        yield project_path


@pytest.fixture
def empty_project():
    """Create an empty temporary directory for testing."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


@pytest.fixture(autouse=True)
def clean_state(monkeypatch):
    """Fresh configuration and project root for every test."""
    from code_fragments_mcp.config import reset_config
    from code_fragments_mcp.tools import reset_project_root

    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config()
    reset_project_root()
    yield
    reset_config()
    reset_project_root()


@pytest.fixture
def restore_root_logger():
    """Undo handler and level changes made to the root logger."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow running"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location/name."""
    for item in items:
        if "test_fragment_tools" in item.nodeid:
            item.add_marker(pytest.mark.integration)
        if "integration" in item.name or "end_to_end" in item.name:
            item.add_marker(pytest.mark.integration)
