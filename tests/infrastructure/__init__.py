"""
Unified test infrastructure for minitpl.

Modules:
- file_utils: Utilities for creating files and directories
- cli_utils: Running the CLI in a subprocess
"""

from .file_utils import write, write_yaml
from .cli_utils import run_cli, jload

__all__ = [
    "write",
    "write_yaml",
    "run_cli",
    "jload",
]
