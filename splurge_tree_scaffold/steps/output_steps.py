"""Output steps: write generated code or compare it with an existing file.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import difflib
from pathlib import Path

from ..context import PipelineContext
from ..exceptions import CheckFailedError
from ..helpers.path_utils import PathValidationError, ensure_parent_dir, validate_target_path
from ..pipeline import Step
from ..result import Result


def _with_final_newline(code: str) -> str:
    return code.rstrip("\n") + "\n"


class WriteOutputStep(Step[str, str]):
    """Write generated code to ``context.target_file``.

    Without ``write_files`` nothing touches the disk and the code is handed
    back in the metadata. An existing target is left alone unless
    ``force_write`` is set; skipping it is a warning, not an error.
    """

    def execute(self, context: PipelineContext, code: str) -> Result[str]:
        """Write the generated code or return it for printing.

        Returns:
            A :class:`Result` with the target path. The metadata always
            holds ``generated_code`` and whether the file was ``written``.
        """
        metadata = {"target_file": context.target_file, "generated_code": code, "written": False}

        if not context.config.write_files:
            return Result.success(context.target_file, metadata=metadata)

        try:
            target_path = validate_target_path(context.target_file)
        except PathValidationError as e:
            return Result.failure(e, {"target_file": context.target_file})

        if target_path.exists() and not context.config.force_write:
            return Result.warning(
                context.target_file,
                [f"Skipped emitting {context.target_file}: the file already exists"],
                metadata={**metadata, "skipped": True},
            )

        try:
            ensure_parent_dir(target_path)
            with open(target_path, "w", encoding="utf-8", newline="\n") as f:
                f.write(_with_final_newline(code))
        except (OSError, PathValidationError) as e:
            return Result.failure(e, {"target_file": context.target_file})

        return Result.success(context.target_file, metadata={**metadata, "written": True})


class CompareOutputStep(Step[str, str]):
    """Compare generated code with the file already on disk.

    Trailing newlines are ignored. A missing or different file is a
    :class:`CheckFailedError` whose ``diff`` is a unified diff from the
    current contents to the expected ones.
    """

    def execute(self, context: PipelineContext, code: str) -> Result[str]:
        target_path = Path(context.target_file)
        try:
            with open(target_path, encoding="utf-8") as f:
                existing = f.read()
        except FileNotFoundError:
            error = CheckFailedError(f"{context.target_file} not found", context.target_file)
            return Result.failure(error, {"target_file": context.target_file, "missing": True})
        except (OSError, UnicodeDecodeError) as e:
            return Result.failure(e, {"target_file": context.target_file})

        expected = _with_final_newline(code)
        actual = _with_final_newline(existing)
        if actual == expected:
            return Result.success(context.target_file, metadata={"target_file": context.target_file, "in_sync": True})

        diff = "".join(
            difflib.unified_diff(
                actual.splitlines(keepends=True),
                expected.splitlines(keepends=True),
                fromfile=f"{context.target_file} (current)",
                tofile=f"{context.target_file} (expected)",
            )
        )
        error = CheckFailedError(
            f"{context.target_file} is out of sync with {context.source_file}", context.target_file, diff
        )
        return Result.failure(error, {"target_file": context.target_file, "diff": diff})
