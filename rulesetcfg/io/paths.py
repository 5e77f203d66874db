import os
import tempfile
from pathlib import Path


def repo_root() -> str:
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))


def _ensure(p: Path) -> Path:
    p.mkdir(parents=True, exist_ok=True)
    return p.resolve()


def logs_dir() -> Path:
    """
    Resolve the logs directory with the following precedence:
    1) RULESETCFG_LOG_DIR
    2) ./.logs under the current working directory
    3) {tempdir}/rulesetcfg/logs (final fallback)

    Ensures the directory exists and returns a Path.
    """
    v = os.environ.get("RULESETCFG_LOG_DIR")
    if v:
        return _ensure(Path(v))

    try:
        return _ensure(Path.cwd() / ".logs")
    except OSError:
        return _ensure(temp_root() / "rulesetcfg" / "logs")


def store_dir() -> Path:
    """
    Resolve the directory backing the durable (local) tier:
    1) RULESETCFG_STORE_DIR
    2) ./.data/store under the current working directory
    3) {tempdir}/rulesetcfg/store (final fallback)

    Ensures the directory exists and returns a Path.
    """
    v = os.environ.get("RULESETCFG_STORE_DIR")
    if v:
        return _ensure(Path(v))

    try:
        return _ensure(Path.cwd() / ".data" / "store")
    except OSError:
        return _ensure(temp_root() / "rulesetcfg" / "store")


def temp_root() -> Path:
    """
    Return the platform's temporary directory as a Path.
    Allows override via RULESETCFG_TMP for tests/CI.
    """
    env = os.environ.get("RULESETCFG_TMP")
    return Path(env) if env else Path(tempfile.gettempdir())
