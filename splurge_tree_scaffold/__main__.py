"""Main entry point for running splurge-tree-scaffold as a module.

This allows users to run the CLI with:
    python -m splurge_tree_scaffold [command] [options]
"""

from .cli import main

if __name__ == "__main__":
    main()
