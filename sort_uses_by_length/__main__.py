from __future__ import annotations

from sort_uses_by_length._main import main

if __name__ == "__main__":
    raise SystemExit(main())
