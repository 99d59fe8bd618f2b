"""Helper modules shared across the scaffolding pipeline.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""
