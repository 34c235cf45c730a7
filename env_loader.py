from __future__ import annotations

import os
from pathlib import Path

ENV_FILE_VAR = "SABOR_ROTA_ENV_FILE"


def _parse_line(raw: str) -> tuple[str, str] | None:
    line = raw.strip()
    if not line or line.startswith("#"):
        return None
    if line.lower().startswith("export "):
        line = line[7:].strip()
    if "=" not in line:
        return None
    k, v = line.split("=", 1)
    k = k.strip()
    if not k:
        return None
    return k, v.strip().strip('"').strip("'")


def load_dotenv_like(*candidates: str) -> str | None:
    """Minimal .env loader (no dependencies).

    Loads KEY=VALUE lines into os.environ if key is not already set, so
    real environment variables (docker, CI) always win over the file.
    Search order: explicit candidates, $SABOR_ROTA_ENV_FILE, then .env in
    the current directory and in the project root.
    Returns the path that was loaded, or None if nothing found.
    """
    paths: list[Path] = [Path(c) for c in candidates if c]
    override = os.environ.get(ENV_FILE_VAR, "").strip()
    if override:
        paths.append(Path(override))

    proj_root = Path(__file__).resolve().parent
    paths.extend([Path.cwd() / ".env", proj_root / ".env"])

    for p in paths:
        if not p.is_file():
            continue
        for raw in p.read_text(encoding="utf-8").splitlines():
            parsed = _parse_line(raw)
            if parsed is not None:
                os.environ.setdefault(*parsed)
        return str(p)
    return None
