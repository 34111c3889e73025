"""Configuration loading and management for cyclo.

Configuration sources are merged in priority order:
    1. Defaults (defined in CycloConfig)
    2. Global config (~/.cyclo.toml)
    3. Project config (./cyclo.toml)
    4. Explicit config file
    5. Environment variables (CYCLO_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(debug=True, workers=2)
    >>> config.debug
    True
"""

from __future__ import annotations

import codecs
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Midpoint = Literal["mean", "none"]

DEFAULT_EXTENSIONS = (".c", ".cpp", ".cc", ".cxx")


@dataclass(frozen=True)
class ColorScheme:
    """How complexity maps to color in the treemap.

    Attributes:
        name: Plotly colorscale name (e.g. ``Greens``, ``YlOrRd``, ``Viridis``)
        reverse: Flip the colorscale
        midpoint: ``mean`` centers the scale on the root's mean complexity,
            ``none`` lets plotly pick the range
    """

    name: str = "Greens"
    reverse: bool = False
    midpoint: Midpoint = "mean"

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise InvalidConfigError("colorscheme.name", self.name, "must not be empty")
        if self.midpoint not in ("mean", "none"):
            raise InvalidConfigError("colorscheme.midpoint", self.midpoint, "expected 'mean' or 'none'")


@dataclass(frozen=True)
class CycloConfig:
    """Configuration for a scan.

    Attributes:
        File selection:
            extensions: Suffixes treated as C/C++ source
            exclude_patterns: Glob patterns (root-relative, posix) to skip
            allow_hidden_files: Include files and directories starting with '.'
            follow_symlinks: Follow symbolic links while walking
            max_file_size_mb: Files larger than this are skipped
            max_files: Stop enumerating after this many files
            encoding: Text encoding used to decode source files

        Performance:
            workers: Thread pool size (None = CPU count, capped at 8)
            parallel_threshold: Batches smaller than this are scanned sequentially

        Output:
            debug: Write the per-file debug report
            colorscheme: Treemap colorscale settings
    """

    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    exclude_patterns: list[str] = field(
        default_factory=lambda: [
            "build/*",
            "cmake-build-*/*",
            "third_party/*",
            "vendor/*",
            "node_modules/*",
        ]
    )
    allow_hidden_files: bool = False
    follow_symlinks: bool = False
    max_file_size_mb: float = 10.0
    max_files: int = 10000
    encoding: str = "utf-8"

    workers: Optional[int] = None
    parallel_threshold: int = 10

    debug: bool = False
    colorscheme: ColorScheme = field(default_factory=ColorScheme)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.extensions:
            raise InvalidConfigError("extensions", self.extensions, "at least one extension required")
        for ext in self.extensions:
            if not ext.startswith("."):
                raise InvalidConfigError("extensions", ext, "extensions must start with '.'")
        if self.max_file_size_mb <= 0:
            raise InvalidConfigError("max_file_size_mb", self.max_file_size_mb, "must be positive")
        if self.max_files < 1:
            raise InvalidConfigError("max_files", self.max_files, "must be at least 1")
        if self.workers is not None and self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")
        if self.parallel_threshold < 0:
            raise InvalidConfigError("parallel_threshold", self.parallel_threshold, "must be non-negative")
        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise InvalidConfigError("encoding", self.encoding, "unknown codec")

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)


def load_config(config_file: Optional[Path] = None, **overrides) -> CycloConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options fall through.

    Returns:
        Validated CycloConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
        InvalidConfigError: If a value fails validation
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / ".cyclo.toml"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / "cyclo.toml"
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_file(config_file))

    scheme: Any = merged.pop("colorscheme", None)
    for layer in (_load_env_vars(), {k: v for k, v in overrides.items() if v is not None}):
        # a bare colorscale name only replaces the name of any [colorscheme] table
        layer_scheme = layer.pop("colorscheme", None)
        if isinstance(layer_scheme, str) and isinstance(scheme, dict):
            scheme = {**scheme, "name": layer_scheme}
        elif layer_scheme is not None:
            scheme = layer_scheme
        merged.update(layer)

    if isinstance(scheme, dict):
        try:
            merged["colorscheme"] = ColorScheme(**scheme)
        except TypeError as e:
            raise ConfigurationError(f"Invalid [colorscheme] config: {e}")
    elif isinstance(scheme, ColorScheme):
        merged["colorscheme"] = scheme
    elif isinstance(scheme, str):
        merged["colorscheme"] = ColorScheme(name=scheme)
    elif scheme is not None:
        raise InvalidConfigError("colorscheme", scheme, "expected a table or a colorscale name")

    if "extensions" in merged:
        merged["extensions"] = tuple(merged["extensions"])

    try:
        return CycloConfig(**merged)
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from CYCLO_* environment variables.

    Supported environment variables:
        CYCLO_WORKERS: int
        CYCLO_PARALLEL_THRESHOLD: int
        CYCLO_MAX_FILES: int
        CYCLO_MAX_FILE_SIZE_MB: float
        CYCLO_ENCODING: str
        CYCLO_DEBUG: bool (true/false/1/0)
        CYCLO_ALLOW_HIDDEN_FILES: bool
        CYCLO_FOLLOW_SYMLINKS: bool
        CYCLO_COLORSCHEME: str (colorscale name)

    Returns:
        Dict of field_name -> parsed_value for any CYCLO_* vars found.
    """
    type_hints = get_type_hints(CycloConfig)

    result: dict[str, Any] = {}

    for field_name in CycloConfig.__dataclass_fields__:
        env_key = f"CYCLO_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        if field_name == "colorscheme":
            result[field_name] = env_value
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Returns None for types that cannot be expressed in a single variable
    (lists, tuples).

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if origin in (list, tuple) or type_hint in (list, tuple):
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If TOML support is missing or parsing fails
    """
    try:
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")
