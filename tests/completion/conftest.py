import shutil
import subprocess
import tempfile
from pathlib import Path

import pytest

from treecomplete import generate_completion_script


class CompletionTester:
    """Syntax-check a generated completion script with a real shell.

    Parameters
    ----------
    completion_script : str
        Script to check.
    shell : str
        Shell executable.
    check_args : list[str]
        Arguments making the shell parse, but not run, a file.
    """

    def __init__(self, completion_script: str, shell: str, check_args: list[str]):
        self.completion_script = completion_script
        self.shell = shell
        self.check_args = check_args

    def validate_script_syntax(self) -> bool:
        """Check if the completion script has valid syntax.

        Returns
        -------
        bool
            True if syntax is valid, False otherwise.
        """
        with tempfile.TemporaryDirectory() as tmpdir:
            comp_file = Path(tmpdir) / f"completion.{self.shell}"
            comp_file.write_text(self.completion_script)

            result = subprocess.run(
                [self.shell, *self.check_args, str(comp_file)],
                capture_output=True,
                text=True,
                timeout=5,
            )
            if result.returncode != 0:
                print(result.stderr)

            return result.returncode == 0


def _check_shell_available(shell: str) -> bool:
    if shutil.which(shell) is None:
        return False
    try:
        result = subprocess.run([shell, "--version"], capture_output=True, text=True, timeout=2)
    except (subprocess.SubprocessError, OSError):
        return False
    return result.returncode == 0


def _make_tester_fixture(shell: str, check_args: list[str]):
    @pytest.fixture
    def tester():
        if not _check_shell_available(shell):
            pytest.skip(f"{shell} not available")

        def _make_tester(tree, standalone=True):
            script = generate_completion_script(tree, shell, standalone=standalone)  # pyright: ignore[reportArgumentType]
            return CompletionTester(script, shell, check_args)

        return _make_tester

    return tester


bash_tester = _make_tester_fixture("bash", ["-n"])
zsh_tester = _make_tester_fixture("zsh", ["-n"])
fish_tester = _make_tester_fixture("fish", ["--no-execute"])
