import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv, set_key

load_dotenv()


class Config:
    """Settings for the terminal front end, read from the environment / .env"""

    API_KEY_ENV = "OPENAI_API_KEY"
    ENV_FILE = os.getenv("OPENAI_ENV_FILE", ".env")

    CHAT_MODEL = os.getenv("OPENAI_CHAT_MODEL", "gpt-3.5-turbo")
    SYSTEM_PROMPT = os.getenv("OPENAI_SYSTEM_PROMPT") or None
    OUTPUT_DIR = os.getenv("OPENAI_OUTPUT_DIR", "output")
    LOG_LEVEL = os.getenv("OPENAI_LOG_LEVEL", "WARNING").upper()
    CODE_THEME = "monokai"

    @classmethod
    def get_api_key(cls) -> Optional[str]:
        return os.getenv(cls.API_KEY_ENV) or None

    @classmethod
    def save_api_key(cls, api_key: str) -> str:
        """Persist the key to the .env file and export it for this process."""
        env_path = Path(cls.ENV_FILE)
        env_path.touch(exist_ok=True)
        set_key(str(env_path), cls.API_KEY_ENV, api_key)
        os.environ[cls.API_KEY_ENV] = api_key
        return str(env_path)

    @classmethod
    def output_path(cls, filename: str) -> Path:
        out_dir = Path(cls.OUTPUT_DIR)
        out_dir.mkdir(parents=True, exist_ok=True)
        return out_dir / filename
