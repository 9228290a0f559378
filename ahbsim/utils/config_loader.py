"""Helpers for loading and validating device configuration."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional
import threading

import yaml  # type: ignore[import-untyped]

from ahbsim.core.exceptions import ConfigurationError
from ahbsim.core.register import AccessMode, RegisterDescriptor
from ahbsim.utils.consts import ADDR_MASK, BYTE_LANES, WINDOW_SIZE


@dataclass(frozen=True)
class WindowConfig:
    base: int
    size: int = WINDOW_SIZE


@dataclass(frozen=True)
class RegisterConfig:
    name: str
    offset: int
    access: AccessMode
    reset: int = 0
    description: str = ""

    def to_descriptor(self) -> RegisterDescriptor:
        return RegisterDescriptor(
            offset=self.offset,
            name=self.name,
            access=self.access,
            reset_value=self.reset,
            description=self.description,
        )


@dataclass(frozen=True)
class DeviceConfig:
    name: str
    window: WindowConfig
    registers: tuple[RegisterConfig, ...]

    def descriptors(self) -> list[RegisterDescriptor]:
        return [reg.to_descriptor() for reg in self.registers]


# Configuration cache with thread safety
_LOADER_CACHE: dict[str, DeviceConfig] = {}
_CACHE_LOCK = threading.RLock()

_ACCESS_NAMES = {mode.value: mode for mode in AccessMode}


def _get_config_path(device_name: str, path: Optional[str] = None) -> str:
    if path is None:
        # Config files are in ahbsim/{device_name}/config.yaml
        base = Path(__file__).parent.parent / device_name / "config.yaml"
        path = str(base)

    return path


def _load_yaml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Failed to parse config: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigurationError("Config root must be a mapping")
    return raw


def _parse_access(name: str, raw: Any) -> AccessMode:
    access = _ACCESS_NAMES.get(str(raw).lower())
    if access is None:
        raise ConfigurationError(
            config_key=f"registers.{name}.access",
            message=f"unknown access mode {raw!r}; expected one of {sorted(_ACCESS_NAMES)}",
        )
    return access


def _build_register_cfg(name: str, reg_raw: dict[str, Any]) -> RegisterConfig:
    return RegisterConfig(
        name=name,
        offset=int(reg_raw["offset"]),
        access=_parse_access(name, reg_raw.get("access", "rw")),
        reset=int(reg_raw.get("reset", 0)),
        description=str(reg_raw.get("description", "")),
    )


def _parse_device_cfg_from_dict(raw: dict[str, Any]) -> DeviceConfig:
    try:
        window_raw = raw["window"]
        registers_raw = raw["registers"]

        cfg = DeviceConfig(
            name=str(raw.get("name", "device")),
            window=WindowConfig(
                base=int(window_raw["base"]),
                size=int(window_raw.get("size", WINDOW_SIZE)),
            ),
            registers=tuple(
                _build_register_cfg(name, reg_raw) for name, reg_raw in registers_raw.items()
            ),
        )
    except KeyError as exc:
        raise ConfigurationError(f"Missing required config key: {exc}") from exc
    except (TypeError, ValueError, AttributeError) as exc:
        raise ConfigurationError(f"Invalid config schema: {exc}") from exc

    _validate_device_config(cfg)
    return cfg


def _validate_device_config(cfg: DeviceConfig) -> None:
    """Sanity checks for the register map to fail fast on bad configs."""
    window = cfg.window
    if window.size != WINDOW_SIZE:
        raise ConfigurationError("window.size", f"window must be 0x{WINDOW_SIZE:X} bytes")
    if window.base % WINDOW_SIZE != 0 or not 0 <= window.base <= ADDR_MASK:
        raise ConfigurationError("window.base", "base must be a 4 KiB aligned 32-bit address")

    if not cfg.registers:
        raise ConfigurationError("registers", "at least one register is required")

    seen: dict[int, str] = {}
    for reg in cfg.registers:
        key = f"registers.{reg.name}"
        if reg.offset % BYTE_LANES != 0:
            raise ConfigurationError(key, f"offset 0x{reg.offset:X} is not 4-byte aligned")
        if not 0 <= reg.offset < WINDOW_SIZE:
            raise ConfigurationError(key, f"offset 0x{reg.offset:X} is outside the window")
        if reg.offset in seen:
            raise ConfigurationError(
                key, f"offset 0x{reg.offset:X} already used by {seen[reg.offset]}"
            )
        if not 0 <= reg.reset <= 0xFFFFFFFF:
            raise ConfigurationError(key, "reset value must fit in 32 bits")
        seen[reg.offset] = reg.name


def load_config(device_name: str, path: Optional[str] = None) -> DeviceConfig:
    """Load and validate configuration from a YAML file.

    Args:
        device_name: Device identifier (e.g., 'csr') for config lookup.
        path: Optional path to YAML config. If None, load bundled ahbsim/{device_name}/config.yaml.

    Returns:
        DeviceConfig instance

    Raises:
        ConfigurationError: on parse or validation errors
    """

    p = Path(_get_config_path(device_name=device_name, path=path))
    raw = _load_yaml_file(p)

    return _parse_device_cfg_from_dict(raw=raw)


def get_config(device_name: str) -> DeviceConfig:
    """Return the loaded config for device_name, loading and caching if necessary.

    THREAD SAFETY: This function is thread-safe.
    """
    with _CACHE_LOCK:
        if device_name not in _LOADER_CACHE:
            _LOADER_CACHE[device_name] = load_config(device_name=device_name)
        return _LOADER_CACHE[device_name]


def clear_config_cache() -> None:
    """Clear all cached configurations.

    All subsequent calls to get_config() will reload from disk.
    """
    with _CACHE_LOCK:
        _LOADER_CACHE.clear()
