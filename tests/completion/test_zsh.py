"""Tests for zsh completion script generation."""

import re

from treecomplete import generate_completion_script

from .apps import tree_full, tree_multi_word, tree_nested, tree_scenario, tree_special_characters


def test_header_comment():
    script = generate_completion_script(tree_scenario, "zsh")
    assert script.startswith("# Generates completions for tool\n")
    assert "#     #compdef tool\n" in script
    assert "#     typeset -A opt_args\n" in script


def test_one_function_per_node():
    script = generate_completion_script(tree_nested, "zsh")
    functions = re.findall(r"^(\S+)\(\) \{$", script, re.MULTILINE)
    assert functions == ["_nested", "_nested_a", "_nested_b", "_nested_b_c"]


def test_positional_specs():
    script = generate_completion_script(tree_full, "zsh")
    assert '        ":Target to act on.:_files"\n' in script
    assert '        "*::Extra arguments.:_default"\n' in script


def test_option_specs():
    script = generate_completion_script(tree_full, "zsh")
    assert '"(--verbose -v)"{--verbose,-v}"[Print more.]"\n' in script
    assert "\"(--count -c)\"{--count,-c}\"[How many times]:How many times:{_values '' '1' '2' '5'}\"\n" in script
    assert (
        "\"--color\"\"[When to use colors.]::When to use colors.:"
        "{_values '' 'auto[Detect the terminal]' 'never[Plain text]'}\"\n"
    ) in script
    assert '"(--output -o)"{--output,-o}"[Output file.]:Output file.:_files"\n' in script
    assert '"*--include""[Paths to include.]:Paths to include.:_default"\n' in script
    assert '"--secret""[Not completed.]:Not completed.: "\n' in script
    assert '"--host""[Remote host.]:Remote host.:_tool_hosts"\n' in script


def test_subcommand_state_machine():
    script = generate_completion_script(tree_full, "zsh")
    assert "        '(-): :->command'\n        '(-)*:: :->arg'\n" in script
    assert "                'build:Builds it.'\n                'deploy:Deploys it.'\n" in script
    assert '_describe "mode" modes' in script
    assert "                (deploy)\n                    _tool_deploy\n                    ;;\n" in script
    assert "                (rollback)\n                    _tool_deploy_rollback\n" in script


def test_leaf_has_no_state_machine():
    script = generate_completion_script(tree_nested, "zsh")
    leaf = script[script.index("_nested_a() {") : script.index("_nested_b() {")]
    assert "case $state" not in leaf
    assert "_arguments $arguments && return" in leaf


def test_default_annotation_removed():
    for tree in (tree_full, tree_special_characters):
        assert "[default:" not in generate_completion_script(tree, "zsh")


def test_special_characters_escaped():
    script = generate_completion_script(tree_special_characters, "zsh")
    assert r'"--dollar""[Costs \$5: really \\[or not\\]]:Costs \$5\\: really [or not]:' in script
    assert '"--multi""[Line one line two tabbed]"' in script


def test_standalone_script():
    script = generate_completion_script(tree_scenario, "zsh", standalone=True)
    assert script.startswith("#compdef tool\nlocal context state state_descr line\ntypeset -A opt_args\n\n")
    assert script.endswith('_tool "$@"\n')


def test_standalone_multi_word():
    script = generate_completion_script(tree_multi_word, "zsh", standalone=True)
    assert script.startswith("#compdef git\n")
    assert script.endswith('_git_remote "$@"\n')


def test_valid_syntax(zsh_tester):
    for tree in (tree_scenario, tree_nested, tree_full, tree_special_characters, tree_multi_word):
        assert zsh_tester(tree).validate_script_syntax()
