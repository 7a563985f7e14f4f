"""
System interaction utilities: running the external compiler and checking
for required executables.
"""

from .commands import check_command_installed, run_command

__all__ = [
    "check_command_installed",
    "run_command",
]
