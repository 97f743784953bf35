"""Allow ``python -m rf_mapping`` to generate a trial schedule."""
from __future__ import annotations

from .cli import main


if __name__ == "__main__":  # pragma: no cover - module level CLI hook
    main()
