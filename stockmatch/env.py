import os
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_DB_PATH = "data/stock.db"


def load_env() -> None:
    """Load .env from the working directory if present.
    Values already set in the environment win.
    """
    env_path = Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path, override=False)


def db_path_from_env() -> Path:
    return Path(os.getenv("STOCKMATCH_DB", DEFAULT_DB_PATH))
