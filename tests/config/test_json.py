import json

import pytest

from treecomplete import ArgumentTree, Option, TreeLoadError
from treecomplete.config import Json


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "tool.json"


def test_json(config_path):
    config_path.write_text(
        json.dumps(
            {
                "command": "tool",
                "options": [{"name": "--all", "short": "-a"}],
                "subcommands": {"build": {"overview": "Builds it", "options": [{"name": "--verbose"}]}},
            }
        )
    )
    assert Json(config_path).load() == ArgumentTree(
        command_name="tool",
        options=[Option("--all", short_name="-a")],
        subcommands={"build": ArgumentTree(overview="Builds it", options=[Option("--verbose")])},
    )


def test_json_decode_error(config_path):
    config_path.write_text('{"command": "tool",')
    with pytest.raises(TreeLoadError) as e:
        Json(config_path).load()
    assert "JSONDecodeError" in str(e.value)
    assert str(config_path.absolute()) in str(e.value)


def test_json_top_level_not_a_table(config_path):
    config_path.write_text("[]")
    with pytest.raises(TreeLoadError, match="Expected a table, got list"):
        Json(config_path).load()
