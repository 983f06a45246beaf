from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[3]
SRC_ROOT = ROOT / "packages/repohygiene/src"

_ENV_KEYS = ("REPOHYGIENE_FORMAT", "REPOHYGIENE_ONLY", "REPOHYGIENE_STRICT", "REPOHYGIENE_JOBS")


def run_repohygiene(*args: str, cwd: Path | None = None, env: dict[str, str] | None = None) -> subprocess.CompletedProcess[str]:
    merged = {key: value for key, value in os.environ.items() if key not in _ENV_KEYS}
    merged["PYTHONPATH"] = str(SRC_ROOT)
    merged.setdefault("RUN_ID", "pytest-run")
    merged.update(env or {})
    return subprocess.run(
        [sys.executable, "-m", "repohygiene.cli", *args],
        cwd=(cwd or ROOT),
        env=merged,
        text=True,
        capture_output=True,
        check=False,
    )
