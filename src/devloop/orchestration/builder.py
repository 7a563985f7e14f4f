"""
Compiler invocation for the build artifact.
"""

import logging
import time
from pathlib import Path
from typing import List, Optional, Sequence

from ..models.runtime import BuildResult
from ..system import run_command

logger = logging.getLogger(__name__)


class Builder:
    """
    Runs the external compiler once per ``build()`` call.

    The command line always has the same shape: the compiler prefix, the
    output flag and output path, then every source file. The compiler's
    combined output is captured but never interpreted; only the exit
    status decides success.
    """

    def __init__(
        self,
        compiler: Sequence[str],
        output: Path,
        sources: Sequence[Path],
        output_flag: str = "-o",
        cwd: Optional[Path] = None,
    ):
        self.compiler = list(compiler)
        self.output = Path(output)
        self.sources = [Path(s) for s in sources]
        self.output_flag = output_flag
        self.cwd = cwd

    @property
    def command(self) -> List[str]:
        command = list(self.compiler)
        if self.output_flag:
            command.append(self.output_flag)
        command.append(str(self.output))
        command.extend(str(s) for s in self.sources)
        return command

    def build(self) -> BuildResult:
        """Run the compiler synchronously and report the outcome."""
        command = self.command
        logger.info(f"Building: {[str(s) for s in self.sources]}")

        start = time.monotonic()
        return_code, output = run_command(command, self.cwd)
        elapsed = time.monotonic() - start

        result = BuildResult(
            success=return_code == 0,
            exit_code=return_code,
            output=output,
            elapsed=elapsed,
            command=command,
        )
        if result.success:
            logger.info(f"Build done: {elapsed:.3f}s")
        else:
            logger.error(f"Build failed (exit code {return_code}):\n{output}")
        return result
