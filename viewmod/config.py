# config.py
from __future__ import annotations
import copy
import importlib
import logging
from pathlib import Path
from typing import Any, Dict, Optional
import yaml

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "log_level": "WARNING",
    "registry": {"on_duplicate": "error"},
    "defaults": {"padding": 16},
}


class Config:
    """
    Config loader that supports:
      - an embedded config module (default name: _embedded_config, attribute: CONFIG)
      - a fallback YAML file (config.yaml)

    Values that neither source provides fall back to DEFAULTS.

    Usage:
        cfg = Config()  # prefers embedded if available, else loads config.yaml
        level = cfg.get("log_level")
        policy = cfg.get_nested("registry.on_duplicate", "error")
        cfg.reload()    # re-read embedded/file (useful in dev)

    Parameters:
      config_file: path to YAML config (relative or absolute). Attempts sensible fallbacks.
      prefer_embedded: when True (default) try embedded module first, otherwise check file first.
      embedded_module_name: module name to import when looking for embedded config.
    """

    def __init__(
        self,
        config_file: str = "config.yaml",
        prefer_embedded: bool = True,
        embedded_module_name: str = "_embedded_config",
    ):
        self.config_file_arg = config_file
        self.prefer_embedded = bool(prefer_embedded)
        self.embedded_module_name = embedded_module_name

        self._config: Dict[str, Any] = {}
        self._source: Optional[str] = None  # 'embedded' or 'file' or None

        self._resolved_config_path: Optional[Path] = self._resolve_config_path(config_file)
        self.reload()

    # ----- public API -----
    def reload(self, prefer_embedded: Optional[bool] = None) -> None:
        """
        Reload the configuration. If prefer_embedded is provided, it overrides the instance preference
        just for this reload.
        """
        prefer = self.prefer_embedded if prefer_embedded is None else bool(prefer_embedded)

        if prefer:
            loaded = self._try_load_embedded() or self._try_load_file()
        else:
            loaded = self._try_load_file() or self._try_load_embedded()

        if not loaded:
            self._source = None
            self._config = {}
        self._config = _merge(DEFAULTS, self._config)

    def as_dict(self) -> Dict[str, Any]:
        """Return the loaded configuration, defaults included."""
        return dict(self._config)

    def get(self, key: str, default: Any = None) -> Any:
        """Shallow lookup in the top-level config dict."""
        return self._config.get(key, default)

    def get_nested(self, path: str, default: Any = None, sep: str = ".") -> Any:
        """
        Lookup nested keys using dot-path (e.g. "registry.on_duplicate").
        Returns default if any step is missing.
        """
        cur = self._config
        if not path:
            return default
        for part in path.split(sep):
            if not isinstance(cur, dict) or part not in cur:
                return default
            cur = cur[part]
        return cur

    @property
    def is_embedded(self) -> bool:
        """True if the currently loaded config came from the embedded module."""
        return self._source == "embedded"

    @property
    def source(self) -> Optional[str]:
        """Return 'embedded'|'file'|None depending on where config came from."""
        return self._source

    @property
    def resolved_config_path(self) -> Optional[Path]:
        """If a filesystem config was resolved, return its Path, otherwise None."""
        return self._resolved_config_path

    # ----- internal helpers -----
    def _resolve_config_path(self, config_file: str) -> Optional[Path]:
        """
        Try to resolve the YAML config path:
          1. config_file is absolute and exists
          2. relative to the project root (parent of the package directory)
          3. relative to the package directory
          4. relative to cwd
        """
        candidate = Path(config_file)
        if candidate.is_absolute():
            return candidate.resolve() if candidate.exists() else None

        here = Path(__file__).resolve().parent
        for base in (here.parent, here, Path.cwd()):
            path = (base / config_file).resolve()
            if path.exists():
                return path
        return None

    def _try_load_embedded(self) -> bool:
        """
        Try to import the embedded module and fetch CONFIG. Returns True on success.
        """
        try:
            module = importlib.import_module(self.embedded_module_name)
        except ModuleNotFoundError:
            return False
        cfg = getattr(module, "CONFIG", None)
        if not isinstance(cfg, dict):
            logger.warning("[Config] %s.CONFIG is not a dict; ignoring it", self.embedded_module_name)
            return False
        self._config = dict(cfg)
        self._source = "embedded"
        return True

    def _try_load_file(self) -> bool:
        """
        Try to load YAML file from resolved path. Returns True on success.
        """
        if not self._resolved_config_path:
            return False
        try:
            with self._resolved_config_path.open("r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh)
        except (OSError, yaml.YAMLError) as e:
            logger.warning("[Config] failed to read %s: %s", self._resolved_config_path, e)
            return False
        if data is None:
            data = {}
        if not isinstance(data, dict):
            logger.warning("[Config] %s does not hold a mapping; ignoring it", self._resolved_config_path)
            return False
        self._config = data
        self._source = "file"
        return True

    def __repr__(self):
        return f"Config(source={self._source!r}, path={self._resolved_config_path})"


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


_config: Optional[Config] = None


def get_config(*args, **kwargs) -> Config:
    """
    Return the shared Config instance.
    Arguments are forwarded to Config() only on the first call.
    """
    global _config
    if _config is None:
        _config = Config(*args, **kwargs)
    return _config


def set_config(config: Optional[Config]) -> None:
    """Replace the shared Config instance (None drops it so the next get_config() reloads)."""
    global _config
    _config = config


def configure_logging(level: Optional[str] = None) -> None:
    """Set up a basic log handler at `level`, or at the configured log_level."""
    if level is None:
        level = get_config().get("log_level", "WARNING")
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
