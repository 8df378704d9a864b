"""Generate a Java source file exposing a project's build metadata as typed constants.

Layering:

- `build_constants.foundation`: config IO and logging, no project imports
- `build_constants.framework`: the generation engine (constant sets, rendering, staleness)
- `build_constants.app`: host orchestration used by `build_constants.cli`
"""

__version__ = "0.1.0"
