"""
modx configuration management (YAML layers, env overrides, schema validation).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import yaml
from jsonschema import Draft202012Validator

from modx.core.exceptions import ConfigError
from modx.core.config.cache import ENV_PREFIX, get_cached_config
from modx.core.utils.layered_yaml import merge_yaml_directory
from modx.core.utils.paths import get_project_config_dir, resolve_project_root
from modx.data import get_data_path, read_yaml as read_data_yaml

logger = logging.getLogger(__name__)

SCHEMA_FILE = "config.schema.yaml"


class ConfigManager:
    """Load, merge, and validate modx configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: MODX_<section>__<key>
    2. Project config: <repo_root>/.modx/config/*.yaml (alphabetical order)
    3. Bundled defaults: modx.data/config/*.yaml (alphabetical order)
    """

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self.repo_root = Path(repo_root).resolve() if repo_root else resolve_project_root()

        # Bundled defaults from modx.data package (always available)
        self.core_config_dir = get_data_path("config")

        # Project-specific config overrides
        self.project_config_dir = get_project_config_dir(self.repo_root) / "config"

    # ========== Env overrides ==========

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except ValueError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        if value.strip().lower() in {"null", "none", "~"}:
            return None
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _parse_env_key(self, raw: str) -> List[str]:
        segs = raw.split("__")
        if any(seg == "" for seg in segs):
            raise ConfigError(
                f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'.",
                context={"key": f"{ENV_PREFIX}{raw}"},
            )
        # Normalize to lowercase so overrides land on canonical keys.
        return [seg.lower() for seg in segs]

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX):]
            if not raw:
                raise ConfigError(f"Malformed {ENV_PREFIX}* key", context={"key": key})
            yield self._parse_env_key(raw), self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur = root
        for part in path[:-1]:
            nxt = cur.get(part)
            if nxt is None:
                nxt = {}
                cur[part] = nxt
            elif not isinstance(nxt, dict):
                raise ConfigError(
                    f"Override path traverses non-mapping key '{part}'",
                    context={"path": ".".join(path)},
                )
            cur = nxt
        cur[path[-1]] = value

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, typed_value in self._iter_env_overrides():
            logger.debug("Applying env override %s", ".".join(path))
            self._set_nested(cfg, path, typed_value)

    # ========== Loading ==========

    def validate_schema(self, config: Dict[str, Any]) -> None:
        """Validate ``config`` against the bundled JSON schema.

        Raises:
            ConfigError: listing every violation found.
        """
        schema = read_data_yaml("schemas", SCHEMA_FILE)
        validator = Draft202012Validator(schema)
        errors = sorted(validator.iter_errors(config), key=lambda e: list(e.path))
        if not errors:
            return
        details = []
        for err in errors:
            where = ".".join(str(p) for p in err.path) or "<root>"
            details.append(f"{where}: {err.message}")
        raise ConfigError(
            "Invalid modx configuration:\n" + "\n".join(f"- {d}" for d in details),
            context={"errors": details},
        )

    def _load_config_uncached(self, validate: bool = True) -> Dict[str, Any]:
        """Load and merge configuration from every layer (UNCACHED)."""
        cfg: Dict[str, Any] = {}

        # Layer 1: bundled defaults
        cfg = merge_yaml_directory(cfg, self.core_config_dir)

        # Layer 2: project config
        try:
            cfg = merge_yaml_directory(cfg, self.project_config_dir)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            raise ConfigError(
                f"Failed to load project config from {self.project_config_dir}: {exc}",
                context={"directory": str(self.project_config_dir)},
            ) from exc

        # Layer 3: environment overrides
        self.apply_env_overrides(cfg)

        if validate:
            self.validate_schema(cfg)
        return cfg

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Load configuration through the centralized cache.

        The returned dict is shared; treat it as immutable.
        """
        return get_cached_config(repo_root=self.repo_root, validate=validate)

    # ========== Accessors ==========

    def get_all(self) -> Dict[str, Any]:
        """Get the full merged configuration."""
        return self.load_config()

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value by dot-notation key.

        Example:
            >>> manager.get('cache.ttl')
            3600
            >>> manager.get('nonexistent.key', 'fallback')
            'fallback'
        """
        current: Any = self.load_config()
        for part in key.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current


__all__ = ["ConfigManager"]
