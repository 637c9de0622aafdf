import os
from typing import NamedTuple, Dict, Any, ChainMap, Mapping

ENV_PREFIX = "WHENMOCK_"


class Option(NamedTuple):
    key: str
    default: Any
    help: str = ""

    def from_dict(self, config_dict: Mapping[str, Any]):
        return config_dict.get(self.key, self.default)

    @property
    def env_var(self) -> str:
        return ENV_PREFIX + self.key.upper()


class Settings:
    LOG_LEVEL = Option("log_level", "WARNING", "Logging level")
    CAPTURE_CALL_SITES = Option("capture_call_sites", True, "Record where each rule was declared")
    CALL_SITE_CONTEXT = Option("call_site_context", 1, "Number of stack lines kept per call site")


def get_all_settings() -> list[Option]:
    return [option for _name, option in vars(Settings).items() if isinstance(option, Option)]


def _coerce(option: Option, value: str):
    if isinstance(option.default, bool):
        return value.strip().lower() in ("1", "true", "yes", "on")
    if isinstance(option.default, int):
        return int(value)
    return value


def read_env(environ: Mapping[str, str] = None) -> Dict[str, object]:
    """Collects every known option that is set as a WHENMOCK_* environment variable."""
    environ = os.environ if environ is None else environ
    result = {}
    for option in get_all_settings():
        if option.env_var in environ:
            result[option.key] = _coerce(option, environ[option.env_var])
    return result


def create_config(*dicts: Dict[str, object], environ: Mapping[str, str] = None) -> Mapping[str, object]:
    """Creates a dict-like configuration from multiple dictionaries
    Priority order:
    1. explicitly passed dicts (first one wins)
    2. environment variables
    3. default values
    """
    defaults = {option.key: option.default for option in get_all_settings()}
    priority = [*dicts, read_env(environ), defaults]
    return ChainMap({}, *priority)


def conf_get(d, option: Option):
    return d.get(option.key, option.default)
