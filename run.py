#!/usr/bin/env python
"""
Code Fragments MCP - development launcher

Usage: python run.py [PROJECT_PATH]. ``--help`` lists the CODE_FRAGMENTS_*
environment variables the server reads.
"""
import os
import sys

src_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)


def main() -> None:
    try:
        from code_fragments_mcp.config import CONFIG_DOCS
        from code_fragments_mcp.server import main as server_main
    except ModuleNotFoundError as exc:
        sys.stderr.write(
            f"Missing dependency {exc.name}; install the project with `pip install -e .`\n"
        )
        raise SystemExit(1) from exc

    if any(arg in ("-h", "--help") for arg in sys.argv[1:]):
        sys.stderr.write(CONFIG_DOCS)
        return

    # Optional positional argument: the project to serve
    if len(sys.argv) > 1:
        os.environ["CODE_FRAGMENTS_BASE_PATH"] = os.path.abspath(sys.argv[1])
    server_main()


if __name__ == "__main__":
    main()
