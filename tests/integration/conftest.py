from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console

from stache.cli import create_app


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def stache_cli(console: Console, clean_env: None) -> Callable[..., int]:
    """Create a CLI app for testing that returns the exit code."""

    app = create_app(console=console, error_console=console)

    def _run(*args: str) -> int:
        """Run the CLI app and return its exit code (0 if no SystemExit)."""

        try:
            app(args)
        except SystemExit as e:
            return e.code if isinstance(e.code, int) else 1
        else:
            return 0

    return _run


@pytest.fixture
def templates(tmp_path: Path) -> Path:
    """Create a template directory.

    Structure:
        tmp_path/
            templates/
                page.mustache       # uses a partial and a section
                item.mustache
                broken.mustache     # unterminated section on line 2
    """
    root = tmp_path / "templates"
    root.mkdir()
    _ = (root / "page.mustache").write_text(
        "# {{title}}\n{{#items}}\n{{>item}}\n{{/items}}\n"
    )
    _ = (root / "item.mustache").write_text("- {{name}}\n")
    _ = (root / "broken.mustache").write_text("ok\n{{#open}}never closed\n")
    return root
