import pytest

from treecomplete import ArgumentTree, Option


@pytest.fixture
def tool_tree():
    """Small tree used throughout the tests: ``tool [--all|-a] {build [--verbose]}``."""
    return ArgumentTree(
        command_name="tool",
        options=[Option("--all", short_name="-a")],
        subcommands={
            "build": ArgumentTree(overview="Builds it", options=[Option("--verbose")]),
        },
    )
