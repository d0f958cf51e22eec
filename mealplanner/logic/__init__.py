"""Core business logic layer.

Subpackages:
- planning: weekly plan generation and reconstruction
- export: calendar (ICS) rendering of a plan
- steps: splitting free-text recipe instructions into steps
- shopping: building shopping lists
"""
__all__ = ["planning", "export", "steps", "shopping"]
