import pytest

from treecomplete import (
    ArgumentTree,
    ContractViolation,
    Filename,
    NoCompletion,
    Option,
    Positional,
    Unspecified,
    ValueKind,
    Values,
)


def test_option_defaults():
    option = Option("--verbose")
    assert option.short_name is None
    assert option.kind is ValueKind.FLAG
    assert option.completion == Unspecified()
    assert option.names == ("--verbose",)


def test_positional_defaults():
    positional = Positional("target")
    assert positional.kind is ValueKind.VALUE
    assert positional.short_name is None
    assert not positional.is_array
    assert not positional.is_optional


def test_option_names_with_short():
    assert Option("--all", short_name="-a").names == ("--all", "-a")


@pytest.mark.parametrize("name", ["verbose", "-", "--", ""])
def test_option_name_invalid(name):
    with pytest.raises(ContractViolation):
        Option(name)


@pytest.mark.parametrize("short_name", ["a", "-ab", "--a", "-"])
def test_option_short_name_invalid(short_name):
    with pytest.raises(ContractViolation):
        Option("--all", short_name=short_name)


def test_values_converter():
    assert Values(["a", ("b", "Bee")]).values == (("a", ""), ("b", "Bee"))


def test_hints_compare_by_value():
    assert NoCompletion() == NoCompletion()
    assert Filename() != Unspecified()
    assert Values(["a"]) == Values([("a", "")])


def test_tree_duplicate_option_name():
    with pytest.raises(ContractViolation):
        ArgumentTree(command_name="tool", options=[Option("--all"), Option("--all")])


def test_tree_duplicate_short_name():
    with pytest.raises(ContractViolation):
        ArgumentTree(
            command_name="tool",
            options=[Option("--all", short_name="-a"), Option("--any", short_name="-a")],
        )


def test_tree_same_name_in_different_nodes():
    ArgumentTree(
        command_name="tool",
        options=[Option("--all", short_name="-a")],
        subcommands={"build": ArgumentTree(options=[Option("--all", short_name="-a")])},
    )


@pytest.mark.parametrize("name", ["", "two words", "tab\there"])
def test_tree_invalid_subcommand_name(name):
    with pytest.raises(ContractViolation):
        ArgumentTree(command_name="tool", subcommands={name: ArgumentTree()})


def test_tree_single_argument_converted_to_tuple():
    tree = ArgumentTree(command_name="tool", options=Option("--all"))
    assert tree.options == (Option("--all"),)


def test_tree_walk():
    nested = ArgumentTree(
        command_name="tool",
        subcommands={
            "a": ArgumentTree(),
            "b": ArgumentTree(subcommands={"c": ArgumentTree()}),
        },
    )
    assert [path for path, _ in nested.walk()] == [(), ("a",), ("b",), ("b", "c")]
    assert nested["b"]["c"] is nested[("b", "c")]


def test_tree_getitem_missing(tool_tree):
    with pytest.raises(KeyError):
        tool_tree["deploy"]


def test_tree_subcommand_order_preserved():
    tree = ArgumentTree(command_name="tool", subcommands={"z": ArgumentTree(), "a": ArgumentTree()})
    assert list(tree.subcommands) == ["z", "a"]


def test_tree_has_subcommands(tool_tree):
    assert tool_tree.has_subcommands
    assert not tool_tree["build"].has_subcommands


def test_tree_to_dict(tool_tree):
    assert tool_tree.to_dict() == {
        "command": "tool",
        "options": [{"name": "--all", "short": "-a"}],
        "subcommands": {
            "build": {"overview": "Builds it", "options": [{"name": "--verbose"}]},
        },
    }
