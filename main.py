# main.py

from pathlib import Path
from shutil import which
from subprocess import run

from app.configs import settings


def start(cmmd: list[str]) -> None:
    run(cmmd, check=True)


def uvicorn_executable() -> str:
    """Prefer the project virtualenv, then whatever is on PATH."""
    local = Path(__file__).resolve().parent / ".venv" / "bin" / "uvicorn"
    if local.exists():
        return str(local)
    return which("uvicorn") or "uvicorn"


def main() -> None:
    cmmd = [
        uvicorn_executable(),
        "app.main:app",
        "--host",
        "127.0.0.1",
        "--port",
        "8000",
        "--proxy-headers",
        "--log-level",
        settings.LOG_LEVEL.lower(),
    ]
    if settings.ENVIRONMENT == "development":
        cmmd.append("--reload")
    start(cmmd)


if __name__ == "__main__":
    main()
