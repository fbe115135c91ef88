from pathlib import Path

from treecomplete import ContractViolation, StreamIOError, TreeCompleteError, TreeLoadError


def test_contract_violation_is_not_runtime_error():
    assert not issubclass(ContractViolation, TreeCompleteError)


def test_tree_complete_error_msg():
    assert str(TreeCompleteError()) == ""
    assert str(TreeCompleteError("boom")) == "boom"


def test_tree_load_error_location():
    assert str(TreeLoadError(msg="Bad.")) == "Bad."
    assert str(TreeLoadError(msg="Bad.", source="tool.toml")) == "tool.toml: Bad."
    assert str(TreeLoadError(msg="Bad.", source="tool.toml", keys=("options", "0"))) == "tool.toml::options.0: Bad."
    assert str(TreeLoadError(source="tool.toml")) == "tool.toml: Invalid tree definition."


def test_stream_io_error_path():
    error = StreamIOError(Path("out.txt"))
    assert isinstance(error, OSError)
    assert str(error) == 'I/O error while writing to "out.txt".'
