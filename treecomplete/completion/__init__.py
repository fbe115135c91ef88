"""Shell completion generation for argument trees."""

from treecomplete.completion._base import SHELLS, Shell
from treecomplete.completion.detect import detect_shell
from treecomplete.completion.fish import synthesize_short_names
from treecomplete.completion.generate import generate, generate_completion_script, write_script
from treecomplete.completion.install import add_to_rc_file, get_default_completion_path, install_completion

__all__ = [
    "SHELLS",
    "Shell",
    "add_to_rc_file",
    "detect_shell",
    "generate",
    "generate_completion_script",
    "get_default_completion_path",
    "install_completion",
    "synthesize_short_names",
    "write_script",
]
