"""Locate, read and validate the filter configuration.

A config file is found through ``--config``, ``$GHFILTER_CONFIG``,
``./ghfilter.yaml`` and finally ``$XDG_CONFIG_HOME/ghfilter/config.yaml``.
``${VAR}`` references are expanded before validation, so numeric IDs such as
``organization_id: ${WATCHED_ORG_ID}`` can come from the environment.

Problems are reported against the place they occur in the filter list, e.g.
``filters[0].conditions[1].organization_id``.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import TYPE_CHECKING, Any, NamedTuple

import yaml
from pydantic import ValidationError

from ghfilter.config.schema import Config
from ghfilter.filters.payload import PatternError, compile_pattern
from ghfilter.paths import get_default_config_path

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "GHFILTER_CONFIG"
LOCAL_CONFIG_NAME = "ghfilter.yaml"

ENV_VAR_PATTERN = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)\}")

# Condition fields holding regular expressions, checked after validation.
PATTERN_FIELDS = ("payload_issue_title_regexp", "payload_issue_body_regexp")


class ConfigError(Exception):
    """Raised when the filter configuration cannot be loaded."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        super().__init__(message)


class ConfigNotFoundError(ConfigError):
    """Raised when no config file exists at any searched location."""

    def __init__(self, message: str, searched: Sequence[Path] = ()) -> None:
        self.searched = list(searched)
        super().__init__(message, searched[0] if len(searched) == 1 else None)


class ConfigValidationError(ConfigError):
    """Raised when filters or conditions fail validation.

    Attributes:
        problems: One ``"<location>: <message>"`` line per error.
        validation_errors: The pydantic error dicts behind ``problems``.
    """

    def __init__(self, path: Path, validation_errors: list[dict[str, Any]]) -> None:
        self.validation_errors = validation_errors
        self.problems = [
            f"{format_location(err['loc'])}: {err['msg']}" for err in validation_errors
        ]
        lines = "\n".join(f"  - {problem}" for problem in self.problems)
        message = f"Invalid filter config {path} ({len(self.problems)} error(s)):\n{lines}"
        super().__init__(message, path)


class EnvironmentVariableError(ConfigError):
    """Raised when a ``${VAR}`` reference names an unset variable."""

    def __init__(self, var_name: str, location: str, path: Path | None = None) -> None:
        self.var_name = var_name
        self.location = location
        message = f"{location}: environment variable '{var_name}' is not set"
        super().__init__(message, path)


class PatternProblem(NamedTuple):
    """A regular expression that will never match because it does not compile."""

    filter_id: str
    location: str
    message: str


def format_location(loc: Sequence[str | int]) -> str:
    """Render a pydantic error location as a config path.

    >>> format_location(("filters", 0, "conditions", 1, "organization_id"))
    'filters[0].conditions[1].organization_id'
    """
    rendered = ""
    for part in loc:
        if isinstance(part, int):
            rendered += f"[{part}]"
        elif rendered:
            rendered += f".{part}"
        else:
            rendered = part
    return rendered or "config"


def expand_env_vars(value: Any, location: str = "") -> Any:
    """Replace ``${VAR}`` references in strings nested anywhere in ``value``.

    Raises:
        EnvironmentVariableError: If a referenced variable is not set. The
            error names the location of the offending value.
    """
    if isinstance(value, str):

        def replace(match: re.Match[str]) -> str:
            resolved = os.environ.get(match.group(1))
            if resolved is None:
                raise EnvironmentVariableError(match.group(1), location or "config")
            return resolved

        return ENV_VAR_PATTERN.sub(replace, value)
    if isinstance(value, dict):
        return {
            key: expand_env_vars(item, f"{location}.{key}" if location else str(key))
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [expand_env_vars(item, f"{location}[{i}]") for i, item in enumerate(value)]
    return value


def _candidates() -> Iterator[Path]:
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        yield Path(env_path).expanduser().resolve()
    yield Path.cwd() / LOCAL_CONFIG_NAME
    yield get_default_config_path()


def discover_config_path(explicit_path: str | Path | None = None) -> Path:
    """Return the filter config to load.

    An explicit path must exist; otherwise the first existing file among
    ``$GHFILTER_CONFIG``, ``./ghfilter.yaml`` and the XDG config path wins.

    Raises:
        ConfigNotFoundError: If nothing was found.
    """
    if explicit_path:
        path = Path(explicit_path).expanduser().resolve()
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise ConfigNotFoundError(msg, [path])
        return path

    searched = []
    for path in _candidates():
        if path.exists():
            return path
        searched.append(path)

    locations = "".join(f"\n  - {p}" for p in searched)
    msg = f"No config file found. Searched locations:{locations}"
    raise ConfigNotFoundError(msg, searched)


def _read_document(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Cannot read config file: {e}"
        raise ConfigError(msg, path) from e
    except yaml.YAMLError as e:
        msg = f"Invalid YAML syntax: {e}"
        raise ConfigError(msg, path) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = "Config file must contain a YAML mapping with 'version' and 'filters'"
        raise ConfigError(msg, path)
    return data


def find_invalid_patterns(config: Config) -> list[PatternProblem]:
    """List condition regular expressions that do not compile.

    Such conditions are accepted, since they only ever fail at match time.
    """
    problems = []
    for i, named in enumerate(config.filters):
        for j, condition in enumerate(named.conditions):
            for field in PATTERN_FIELDS:
                pattern = getattr(condition, field)
                if not pattern:
                    continue
                try:
                    compile_pattern(pattern)
                except PatternError as e:
                    location = f"filters[{i}].conditions[{j}].{field}"
                    problems.append(PatternProblem(named.id, location, str(e)))
    return problems


def load_config(path: str | Path | None = None) -> Config:
    """Discover, read, expand and validate the filter configuration.

    Every condition regular expression that does not compile is logged once
    as a warning; the filter is still loaded.

    Raises:
        ConfigNotFoundError: If no config file is found.
        ConfigError: If the file cannot be read or is not a YAML mapping.
        EnvironmentVariableError: If a ``${VAR}`` reference is unset.
        ConfigValidationError: If a filter or condition is invalid.
    """
    config_path = discover_config_path(path)
    document = _read_document(config_path)

    try:
        document = expand_env_vars(document)
    except EnvironmentVariableError as e:
        e.path = config_path
        raise

    try:
        config = Config.model_validate(document)
    except ValidationError as e:
        raise ConfigValidationError(config_path, [dict(err) for err in e.errors()]) from e

    for problem in find_invalid_patterns(config):
        logger.warning(
            "Filter '%s' will never match: %s: %s",
            problem.filter_id,
            problem.location,
            problem.message,
        )
    return config
