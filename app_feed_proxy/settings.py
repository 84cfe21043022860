"""
Builds the Dynaconf settings object for the app feed proxy.
This module is the single source of truth for where configuration lives.
"""

from pathlib import Path
from dynaconf import Dynaconf, Validator

PROJECT_ROOT = Path(__file__).parent.parent

ENVVAR_PREFIX = "APPFEED"


def load_settings(**overrides) -> Dynaconf:
    """
    Loads settings from config/settings.toml, config/.secrets.toml and
    `.env`, with APPFEED_-prefixed environment variables taking precedence
    (nested keys use a double underscore, e.g. APPFEED_UPSTREAM__TIMEOUT).
    """
    options = dict(
        root_path=PROJECT_ROOT,
        settings_files=["config/settings.toml"],
        secrets="config/.secrets.toml",
        envvar_prefix=ENVVAR_PREFIX,
        load_dotenv=True,
        environments=False,
        merge_enabled=True,
        validators=[
            Validator("upstream.timeout", gt=0),
            Validator("server.port", is_type_of=int),
        ],
    )
    options.update(overrides)
    return Dynaconf(**options)
