from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "{filePath}{range}\n{text}"
DEFAULT_RANGE_TEMPLATE = ":{startLine}:{startChar}-{endLine}:{endChar}"

CONFIG_FILE_NAME = "defscope.toml"

_ENV_KEYS = {
    "DEFSCOPE_TEMPLATE": "template",
    "DEFSCOPE_RANGE_TEMPLATE": "range_template",
    "DEFSCOPE_REMOVE_ROOT_INDENTATION": "remove_root_indentation",
}


class CopySettings(BaseModel):
    """User-facing output settings; camelCase keys are accepted for editor-style config files."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    template: str | None = DEFAULT_TEMPLATE
    range_template: str | None = Field(default=DEFAULT_RANGE_TEMPLATE, alias="rangeTemplate")
    remove_root_indentation: bool = Field(default=True, alias="removeRootIndentation")

    def get_template(self, key: str) -> str | None:
        """Return the named template, or ``None`` when it is unset or empty."""
        value = {"template": self.template, "rangeTemplate": self.range_template}.get(key)
        return value or None


def _read_toml_table(path: Path) -> dict[str, Any]:
    with path.open("rb") as handle:
        data = tomllib.load(handle)
    if path.name == "pyproject.toml":
        return dict(data.get("tool", {}).get("defscope", {}))
    return dict(data)


def find_config_file(search_dir: Path) -> Path | None:
    for directory in (search_dir, *search_dir.parents):
        candidate = directory / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
        pyproject = directory / "pyproject.toml"
        if pyproject.is_file() and _read_toml_table(pyproject):
            return pyproject
    return None


def load_settings(
    config_path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
    search_dir: str | Path | None = None,
) -> CopySettings:
    """Merge defaults, a TOML config file and ``DEFSCOPE_*`` environment variables.

    An explicit ``config_path`` must exist; otherwise ``defscope.toml`` or a
    ``[tool.defscope]`` table is searched for from ``search_dir`` upwards.
    """
    values: dict[str, Any] = {}

    if config_path is not None:
        path = Path(config_path)
        if not path.is_file():
            raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        path = find_config_file(Path(search_dir) if search_dir else Path.cwd())

    if path is not None:
        logger.debug("Loading settings from %s", path)
        values.update(_read_toml_table(path))

    env = os.environ if environ is None else environ
    for env_key, field_name in _ENV_KEYS.items():
        if env_key in env:
            values.pop(CopySettings.model_fields[field_name].alias or field_name, None)
            values[field_name] = env[env_key]

    return CopySettings.model_validate(values)
