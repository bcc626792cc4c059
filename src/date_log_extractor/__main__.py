"""Module entrypoint.

Allows:
    python -m date_log_extractor YYYY-MM-DD
"""

from __future__ import annotations

from date_log_extractor.cli import main

if __name__ == "__main__":
    main()
