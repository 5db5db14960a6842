"""Deterministic configuration loader and CLI for FeedMixer."""
from __future__ import annotations

import argparse
import json
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, MutableMapping, Optional, Sequence

from dotenv import dotenv_values
from pydantic import ValidationError

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for Py <3.11
    import tomli as tomllib  # type: ignore[no-redef]

from feedmixer.config_schema import Config, iter_field_docs

DEFAULT_ENV_PREFIX = "FEEDMIXER"
DEFAULT_CONFIG_FILENAME = "config.toml"
DEFAULT_ENV_FILENAME = ".env"


def _split_bind_address(raw: str) -> Dict[str, Any]:
    host, separator, port = raw.strip().rpartition(":")
    if not separator or not port:
        raise ConfigError(f"SERVER_HOST must look like 'host:port', got '{raw}'")
    return {"server.host": host or "0.0.0.0", "server.port": _coerce_text(port)}


def _single(path: str, *, coerce: bool = True) -> Callable[[str], Dict[str, Any]]:
    def convert(raw: str) -> Dict[str, Any]:
        return {path: _coerce_text(raw) if coerce else raw}

    return convert


# Flat variable names understood by earlier deployments of the service.
LEGACY_ENV_ALIASES: Dict[str, Callable[[str], Dict[str, Any]]] = {
    "ADS_FREQUENCY": _single("mixing.ads_frequency"),
    "ADV_DEFAULT_TEXT": _single("mixing.default_ad_label", coerce=False),
    "ARTICLES_ARCHIVE": _single("feeds.content_url", coerce=False),
    "ADS_ARCHIVE": _single("feeds.advertisements_url", coerce=False),
    "REQUEST_URL": _single("server.request_path", coerce=False),
    "SERVER_HOST": _split_bind_address,
}


@dataclass(frozen=True)
class ConfigValueOrigin:
    """Provenance metadata for a single configuration value."""

    layer: str
    source: str
    env_var: str | None = None

    def render(self) -> str:
        """Return a human-readable provenance description."""

        details: list[str] = []
        if self.env_var:
            details.append(self.env_var)
        if self.source:
            details.append(self.source)
        if details:
            return f"{self.layer} ({', '.join(details)})"
        return self.layer


@dataclass
class ConfigMetadata:
    """Aggregated metadata returned alongside the loaded configuration."""

    config_path: Path
    env_path: Optional[Path]
    env_prefix: str
    provenance: Dict[str, ConfigValueOrigin] = field(default_factory=dict)

    def describe_sources(self) -> list[str]:
        sources: list[str] = [
            "defaults: built into feedmixer.config_schema",
            f"config file: {self.config_path}",
        ]
        if self.env_path:
            sources.append(f".env file: {self.env_path}")
        else:
            sources.append(".env file: not found")
        sources.append(f"environment prefix: {self.env_prefix}__*")
        sources.append("legacy variables: " + ", ".join(sorted(LEGACY_ENV_ALIASES)))
        return sources


class ConfigError(RuntimeError):
    """Raised when configuration loading or validation fails."""


def _project_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _merge_layer(
    target: MutableMapping[str, Any],
    updates: Mapping[str, Any],
    provenance: Dict[str, ConfigValueOrigin],
    *,
    origin: ConfigValueOrigin,
    prefix: str = "",
) -> None:
    for key, value in updates.items():
        composed = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            existing = target.get(key)
            if not isinstance(existing, MutableMapping):
                existing = {}
                target[key] = existing
            _merge_layer(existing, value, provenance, origin=origin, prefix=composed)
        else:
            target[key] = value
            provenance[composed] = origin


def _parse_kv_override(raw_key: str, raw_value: str, prefix: str) -> tuple[str, Any]:
    if not raw_key.startswith(prefix + "__"):
        raise ConfigError(
            f"Environment override '{raw_key}' does not start with prefix {prefix}__"
        )
    key_part = raw_key[len(prefix) + 2 :]
    segments = [segment for segment in key_part.split("__") if segment]
    if not segments:
        raise ConfigError(f"Environment override '{raw_key}' is missing key segments")
    path = ".".join(segment.lower() for segment in segments)
    return path, _coerce_text(raw_value)


def _coerce_text(value: str) -> Any:
    """Turn an environment string into a boolean, integer or float when it spells one.

    Anything else stays text; the schema decides whether the result is acceptable.
    """
    text = value.strip()
    lowered = text.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    digits = text[1:] if text.startswith("-") else text
    if digits.isascii() and digits.isdigit():
        return int(text)
    try:
        return float(text)
    except ValueError:
        return text


def _assign_path(target: MutableMapping[str, Any], path: str, value: Any) -> None:
    segments = path.split(".")
    current: MutableMapping[str, Any] = target
    for segment in segments[:-1]:
        next_value = current.get(segment)
        if not isinstance(next_value, MutableMapping):
            next_value = {}
            current[segment] = next_value
        current = next_value
    current[segments[-1]] = value


def _apply_variables(
    target: MutableMapping[str, Any],
    variables: Mapping[str, str],
    provenance: Dict[str, ConfigValueOrigin],
    *,
    layer: str,
    source: str,
    env_prefix: str,
) -> None:
    """Apply legacy aliases first, then prefixed overrides from one layer."""

    for name, convert in LEGACY_ENV_ALIASES.items():
        raw = variables.get(name)
        if raw is None:
            continue
        for path_key, value in convert(raw).items():
            _assign_path(target, path_key, value)
            provenance[path_key] = ConfigValueOrigin(layer=layer, source=source, env_var=name)

    for key, value in variables.items():
        if not key.startswith(env_prefix + "__"):
            continue
        path_key, parsed_value = _parse_kv_override(key, value, env_prefix)
        _assign_path(target, path_key, parsed_value)
        provenance[path_key] = ConfigValueOrigin(layer=layer, source=source, env_var=key)


def _load_toml(path: Path) -> Mapping[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except FileNotFoundError:
        return {}
    except (tomllib.TOMLDecodeError, OSError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _format_validation_error(
    error: ValidationError,
    provenance: Mapping[str, ConfigValueOrigin],
) -> ConfigError:
    messages: list[str] = []
    for record in error.errors():
        location = ".".join(str(part) for part in record.get("loc", ()))
        origin = provenance.get(location)
        origin_text = f" [{origin.render()}]" if origin else ""
        detail = record.get("msg", "invalid value")
        input_value = record.get("input")
        if input_value is not None and not isinstance(input_value, Mapping):
            detail += f" (received={input_value!r})"
        messages.append(f"{location or '<root>'}: {detail}{origin_text}")
    combined = "\n - ".join(messages)
    return ConfigError(f"Configuration validation failed:\n - {combined}")


def load_config(
    path: Path | None = None,
    *,
    env_file: Path | None = None,
    env_prefix: str = DEFAULT_ENV_PREFIX,
    environ: Mapping[str, str] | None = None,
) -> Config:
    """Load configuration by merging defaults, files and environment layers.

    Raises ``ConfigError`` when the merged result does not validate, which
    includes a missing, zero or non-integer advertisement frequency.
    """

    config_path = path if path else _project_root() / DEFAULT_CONFIG_FILENAME
    env_path = env_file if env_file else config_path.parent / DEFAULT_ENV_FILENAME
    runtime_env = environ if environ is not None else os.environ

    merged: Dict[str, Any] = {}
    provenance: Dict[str, ConfigValueOrigin] = {}

    file_data = _load_toml(config_path)
    if file_data:
        file_origin = ConfigValueOrigin(layer="file", source=str(config_path))
        _merge_layer(merged, file_data, provenance, origin=file_origin)

    if env_path.exists():
        env_file_data = {
            key: value
            for key, value in dotenv_values(env_path, verbose=False).items()
            if value is not None
        }
        _apply_variables(
            merged,
            env_file_data,
            provenance,
            layer="env-file",
            source=str(env_path),
            env_prefix=env_prefix,
        )

    _apply_variables(
        merged,
        runtime_env,
        provenance,
        layer="env",
        source="process",
        env_prefix=env_prefix,
    )

    try:
        config = Config.model_validate(merged)
    except ValidationError as exc:
        raise _format_validation_error(exc, provenance) from exc
    config._metadata = ConfigMetadata(
        config_path=config_path,
        env_path=env_path if env_path.exists() else None,
        env_prefix=env_prefix,
        provenance=provenance,
    )
    return config


def _resolve_value(mapping: Mapping[str, Any], path: str) -> Any:
    current: Any = mapping
    for segment in path.split("."):
        if isinstance(current, Mapping) and segment in current:
            current = current[segment]
        else:
            raise ConfigError(f"Unknown configuration key: {path}")
    return current


def _safe_repr(value: Any) -> str:
    if isinstance(value, Path):
        return str(value)
    try:
        return json.dumps(value, ensure_ascii=False)
    except TypeError:
        return repr(value)


def _format_schema_table() -> str:
    headers = ["Field", "Type", "Default", "Required", "Description", "Constraints", "Example"]
    lines = ["| " + " | ".join(headers) + " |", "| " + " | ".join(["---"] * len(headers)) + " |"]
    for entry in iter_field_docs(Config):
        if entry["is_nested"]:
            continue
        default = "" if entry["default"] is None else _safe_repr(entry["default"])
        example = ", ".join(str(item) for item in entry["examples"] or [])
        row = [
            str(entry["name"]),
            str(entry["type"]),
            default,
            "yes" if entry["required"] else "",
            str(entry["description"]),
            str(entry["constraints"]),
            example,
        ]
        lines.append("| " + " | ".join(row) + " |")
    return "\n".join(lines)


def _show_sources(metadata: ConfigMetadata) -> str:
    details = "\n".join(f"- {item}" for item in metadata.describe_sources())
    return f"Active configuration sources:\n{details}"


def _explain(config: Config, key: str) -> str:
    metadata: ConfigMetadata | None = getattr(config, "_metadata", None)
    if metadata is None:
        raise ConfigError("Configuration metadata is unavailable")
    data = config.model_dump(mode="python")
    value = _resolve_value(data, key)
    origin = metadata.provenance.get(key)
    origin_text = origin.render() if origin else "defaults"
    return f"{key} = {_safe_repr(value)}\nsource: {origin_text}"


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="FeedMixer configuration utilities",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--config", type=Path, help="Path to the TOML configuration file")
    parser.add_argument("--env-file", type=Path, help="Path to a .env file")
    parser.add_argument(
        "--env-prefix",
        default=DEFAULT_ENV_PREFIX,
        help="Environment variable prefix (e.g. FEEDMIXER__MIXING__ADS_FREQUENCY)",
    )
    actions = parser.add_mutually_exclusive_group(required=True)
    actions.add_argument("--validate", action="store_true", help="Validate the active configuration")
    actions.add_argument("--print-schema", action="store_true", help="Print Markdown table documenting all fields")
    actions.add_argument("--show-sources", action="store_true", help="Show configuration source precedence")
    actions.add_argument("--explain", metavar="KEY", help="Explain where a field value originates")

    args = parser.parse_args(argv)

    try:
        if args.print_schema:
            sys.stdout.write(_format_schema_table() + "\n")
            return 0

        config = load_config(args.config, env_file=args.env_file, env_prefix=args.env_prefix)
        metadata: ConfigMetadata | None = getattr(config, "_metadata", None)
        if args.validate:
            print("Configuration OK")
            return 0
        if args.show_sources:
            if metadata is None:
                raise ConfigError("Metadata unavailable for source display")
            print(_show_sources(metadata))
            return 0
        if args.explain:
            print(_explain(config, args.explain))
            return 0
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - module CLI entry point
    raise SystemExit(main())
