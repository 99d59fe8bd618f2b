"""Generators that turn classified trees into Solidity code.

``hir_builder`` folds a classified tree into the HIR and ``emitter``
renders that HIR as source text.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from .emitter import Emitter, scaffold
from .hir_builder import HirBuilder, translate

__all__ = ["Emitter", "HirBuilder", "scaffold", "translate"]
