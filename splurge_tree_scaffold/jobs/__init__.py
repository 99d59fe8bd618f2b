"""Job modules for high-level pipeline orchestration.

Each job groups the tasks of one phase of scaffolding a tree file:
translation, formatting and output (or checking).

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from .formatter_job import FormatterJob
from .output_job import CheckJob, OutputJob
from .translator_job import TranslatorJob

__all__ = ["CheckJob", "FormatterJob", "OutputJob", "TranslatorJob"]
