"""Formatting step for generated Solidity code.

The step pipes the emitted code through an external formatter (``forge
fmt --raw -`` by default). Formatting is best effort: when the formatter
is missing, fails or times out, the unformatted code is passed on with a
warning.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import subprocess

from ..context import PipelineContext
from ..pipeline import Step
from ..result import Result


class FormatCodeStep(Step[str, str]):
    """Format generated Solidity code with the configured formatter command."""

    def execute(self, context: PipelineContext, code: str) -> Result[str]:
        """Format ``code``.

        Args:
            context: Pipeline execution context containing configuration.
            code: Emitted Solidity source.

        Returns:
            A :class:`Result` containing the formatted code on success or a
            warning result containing the original code when formatting
            fails.
        """
        config = context.config
        if not config.format_output:
            return Result.success(code, metadata={"formatted": False})

        try:
            formatted_code = self._run_formatter(code, config.formatter_command, config.formatter_timeout)
        except FileNotFoundError:
            return self._fallback(code, f"formatter '{config.formatter_command[0]}' was not found")
        except subprocess.TimeoutExpired:
            return self._fallback(code, f"formatter timed out after {config.formatter_timeout}s")
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            return self._fallback(code, stderr or f"formatter exited with status {e.returncode}")
        except OSError as e:
            return self._fallback(code, str(e))

        if not formatted_code.strip():
            return self._fallback(code, "formatter produced no output")

        return Result.success(
            formatted_code,
            metadata={
                "formatted": True,
                "original_lines": len(code.splitlines()),
                "formatted_lines": len(formatted_code.splitlines()),
            },
        )

    def _run_formatter(self, code: str, command: list[str], timeout: float) -> str:
        completed = subprocess.run(
            command,
            input=code,
            capture_output=True,
            text=True,
            encoding="utf-8",
            timeout=timeout,
            check=True,
        )
        return completed.stdout

    def _fallback(self, code: str, reason: str) -> Result[str]:
        self._logger.warning(f"Code formatting failed: {reason}")
        return Result.warning(code, [f"Code formatting failed: {reason}"], metadata={"formatted": False})
