"""Entry point script for the binocular RF mapping trial generator.

This small wrapper simply dispatches to :mod:`rf_mapping.cli`.  Keeping the
actual logic in the package makes it possible to run the generator via
``python -m rf_mapping`` *or* by executing this file directly.
"""
from __future__ import annotations

from rf_mapping.cli import main


if __name__ == "__main__":
    main()
