"""
Environment file loading for the mood journal.

Files are read from ``base_dir`` in increasing priority, each one overriding
values from the previous ones:

    .env.shared < .env < .env.local < .env.<FLASK_ENV> < .env.<FLASK_ENV>.local

Variables already set in the process environment only lose to files loaded
with override, so ``.env.shared`` never replaces them.
"""
import logging
import os
from typing import List, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def env_file_chain(env: str) -> List[str]:
    """Override-enabled env files for ``env``, lowest priority first."""
    return [".env", ".env.local", f".env.{env}", f".env.{env}.local"]


def mask_database_url(db_url: Optional[str]) -> str:
    """Database URL safe to print: credentials replaced by ``***``."""
    if not db_url:
        return "(not set)"
    if '@' not in db_url:
        return db_url
    scheme = db_url.split('://', 1)[0]
    return f"{scheme}://***@{db_url.rsplit('@', 1)[1]}"


def load_environment(base_dir: Optional[str] = None) -> List[str]:
    """
    Load the env files for the current FLASK_ENV.

    Args:
        base_dir: Directory holding the env files; the working directory
                  by default

    Returns:
        Paths of the files that were loaded, in load order
    """
    base_dir = base_dir or os.getcwd()
    env = os.environ.get('FLASK_ENV', 'development')
    logger.info(f"Loading environment configuration for: {env}")

    loaded = []
    shared = os.path.join(base_dir, '.env.shared')
    if os.path.isfile(shared):
        load_dotenv(shared)
        loaded.append(shared)

    for name in env_file_chain(env):
        path = os.path.join(base_dir, name)
        if os.path.isfile(path):
            load_dotenv(path, override=True)
            loaded.append(path)

    if loaded:
        logger.info(f"Loaded environment from: {', '.join(os.path.basename(p) for p in loaded)}")
    else:
        logger.warning("No environment files found. Using system environment variables.")

    # Never log the key itself
    logger.info(f"HUGGINGFACE_API_KEY present: {'yes' if os.environ.get('HUGGINGFACE_API_KEY') else 'no'}")
    logger.info(f"Using database: {mask_database_url(os.environ.get('DATABASE_URL'))}")

    return loaded
