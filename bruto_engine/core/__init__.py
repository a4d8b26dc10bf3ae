"""Core engine building blocks.

This package contains the pieces every resolution service depends on:
- data/: value types and enums
- errors.py: data-integrity exception hierarchy
- rng.py: injectable random source
- config.py: YAML-backed engine configuration
"""
