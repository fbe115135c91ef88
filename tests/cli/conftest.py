from textwrap import dedent

import pytest


@pytest.fixture
def tree_file(tmp_path):
    path = tmp_path / "tool.toml"
    path.write_text(
        dedent(
            """\
            command = "tool"

            [[options]]
            name = "--all"
            short = "-a"

            [subcommands.build]
            overview = "Builds it"

            [[subcommands.build.options]]
            name = "--verbose"
            """
        )
    )
    return path


@pytest.fixture
def temp_home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture(autouse=True)
def no_debug(monkeypatch):
    monkeypatch.delenv("TREECOMPLETE_DEBUG", raising=False)
