"""Interactive cleanup of merged git branches.

Features:
- List local branches already merged into a target branch
- Pre-checked checklist to pick which ones to delete
- Safe deletion only (git refuses branches that are not fully merged)
- Dry-run mode to preview deletions
"""

__version__ = "0.1.0"
