"""Settings loaders for textquote.

Responsibilities:
- Build validated `Settings` from a YAML settings file.
- Apply environment overrides with deterministic precedence.
- Reject malformed tariffs before they can reach the calculator.

Key types:
- `ConfigLoader`: static construction helpers for `Settings`.

Precedence for each value is CLI option > environment > settings file > default.
CLI overrides are applied by the command layer on top of `ConfigLoader.from_env`.
"""

from __future__ import annotations

from dataclasses import fields, replace
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .models.datatypes import PRICING_LABEL_PRESETS, NormalizationOptions, Settings, Tariff
from .parsing import (
    normalize_optional_string,
    parse_non_negative_number,
    parse_positive_int,
    parse_required_boolean,
)


CONFIG_PATH_ENV = "TEXTQUOTE_CONFIG"
COUNT_SPACES_ENV = "TEXTQUOTE_COUNT_SPACES"
TARIFF_ENV = "TEXTQUOTE_TARIFF"
LABELS_ENV = "TEXTQUOTE_LABELS"


def validate_settings(settings: Settings) -> None:
    """Validate tariffs and the label preset before any calculation runs.

    The default tariff id is not checked here; it is resolved only when a run
    actually falls back to it, so an explicit `--tariff` can override a stale
    environment value.
    """

    seen_ids: set[str] = set()
    for tariff in settings.tariffs:
        tariff.validate()
        if tariff.id in seen_ids:
            raise ValueError(f"Duplicate tariff id `{tariff.id}`.")
        seen_ids.add(tariff.id)

    if settings.labels not in PRICING_LABEL_PRESETS:
        supported = ", ".join(sorted(PRICING_LABEL_PRESETS))
        raise ValueError(
            f"Unsupported `labels` value `{settings.labels}`; supported: {supported}."
        )


class ConfigLoader:
    """Factory methods for creating `Settings` from external sources."""

    _SUPPORTED_KEYS = frozenset(
        {"count_spaces", "labels", "normalization", "tariffs", "default_tariff"}
    )
    _NORMALIZATION_KEYS = frozenset(item.name for item in fields(NormalizationOptions))
    _REQUIRED_TARIFF_KEYS = frozenset(
        {"id", "chars_per_sheet", "new_text_price", "reused_text_price"}
    )
    _SUPPORTED_TARIFF_KEYS = _REQUIRED_TARIFF_KEYS | {"label"}

    @staticmethod
    def default_settings() -> Settings:
        """Return settings with every rule on, spaces counted, and no tariffs."""

        return Settings()

    @staticmethod
    def from_yaml(path: Path) -> Settings:
        """Create validated settings from a YAML file."""

        raw_text = path.read_text(encoding="utf-8")
        payload = yaml.safe_load(raw_text)
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return ConfigLoader.from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_env(
        env: Mapping[str, str] | None = None,
        base: Settings | None = None,
    ) -> Settings:
        """Apply environment overrides on top of `base` settings.

        When `base` is not given, the settings file named by `TEXTQUOTE_CONFIG`
        is loaded first, falling back to defaults.
        """

        env_map: Mapping[str, str] = os.environ if env is None else env

        settings = base
        if settings is None:
            config_path = ConfigLoader._optional_env_string(env_map, CONFIG_PATH_ENV)
            settings = (
                ConfigLoader.from_yaml(Path(config_path))
                if config_path is not None
                else ConfigLoader.default_settings()
            )

        count_spaces = ConfigLoader._optional_env_string(env_map, COUNT_SPACES_ENV)
        if count_spaces is not None:
            settings = replace(
                settings,
                count_spaces=parse_required_boolean(count_spaces, COUNT_SPACES_ENV),
            )

        labels = ConfigLoader._optional_env_string(env_map, LABELS_ENV)
        if labels is not None:
            settings = replace(settings, labels=labels)

        tariff_id = ConfigLoader._optional_env_string(env_map, TARIFF_ENV)
        if tariff_id is not None:
            settings = replace(settings, default_tariff_id=tariff_id)

        validate_settings(settings)
        return settings

    @staticmethod
    def from_mapping(payload: Mapping[str, Any], source_label: str) -> Settings:
        """Build validated settings from a parsed mapping payload."""

        unknown = sorted(
            str(key) for key in set(payload).difference(ConfigLoader._SUPPORTED_KEYS)
        )
        if unknown:
            key_list = ", ".join(unknown)
            raise ValueError(f"{source_label} includes unsupported key(s): {key_list}.")

        count_spaces = True
        if "count_spaces" in payload:
            count_spaces = ConfigLoader._boolean(
                payload["count_spaces"], "count_spaces", source_label
            )

        labels = normalize_optional_string(payload.get("labels")) or "reuse"
        default_tariff_id = normalize_optional_string(payload.get("default_tariff"))

        settings = Settings(
            tariffs=ConfigLoader._tariffs(payload.get("tariffs"), source_label),
            normalization=ConfigLoader._normalization(
                payload.get("normalization"), source_label
            ),
            count_spaces=count_spaces,
            labels=labels,
            default_tariff_id=default_tariff_id,
        )
        try:
            validate_settings(settings)
        except ValueError as exc:
            raise ValueError(f"{source_label}: {exc}") from exc
        if default_tariff_id is not None and settings.find_tariff(default_tariff_id) is None:
            raise ValueError(
                f"{source_label}: Default tariff `{default_tariff_id}` is not configured."
            )
        return settings

    @staticmethod
    def _normalization(raw: object, source_label: str) -> NormalizationOptions:
        """Read the normalization mapping; missing keys keep their defaults."""

        if raw is None:
            return NormalizationOptions()
        if not isinstance(raw, Mapping):
            raise ValueError(f"{source_label} field `normalization` must be a mapping/object.")

        unknown = sorted(
            str(key) for key in set(raw).difference(ConfigLoader._NORMALIZATION_KEYS)
        )
        if unknown:
            key_list = ", ".join(unknown)
            raise ValueError(
                f"{source_label} field `normalization` includes unsupported key(s): {key_list}."
            )

        flags = {
            key: ConfigLoader._boolean(value, f"normalization.{key}", source_label)
            for key, value in raw.items()
        }
        return NormalizationOptions(**flags)

    @staticmethod
    def _tariffs(raw: object, source_label: str) -> tuple[Tariff, ...]:
        """Read the tariff list in declaration order."""

        if raw is None:
            return ()
        if not isinstance(raw, list):
            raise ValueError(f"{source_label} field `tariffs` must be a list.")
        return tuple(
            ConfigLoader._tariff(item, index, source_label) for index, item in enumerate(raw)
        )

    @staticmethod
    def _tariff(raw: object, index: int, source_label: str) -> Tariff:
        """Read one tariff mapping."""

        field_prefix = f"tariffs[{index}]"
        if not isinstance(raw, Mapping):
            raise ValueError(f"{source_label} field `{field_prefix}` must be a mapping/object.")

        unknown = sorted(
            str(key) for key in set(raw).difference(ConfigLoader._SUPPORTED_TARIFF_KEYS)
        )
        if unknown:
            key_list = ", ".join(unknown)
            raise ValueError(
                f"{source_label} field `{field_prefix}` includes unsupported key(s): {key_list}."
            )
        missing = sorted(ConfigLoader._REQUIRED_TARIFF_KEYS.difference(raw))
        if missing:
            key_list = ", ".join(missing)
            raise ValueError(
                f"{source_label} field `{field_prefix}` is missing required key(s): {key_list}."
            )

        tariff_id = normalize_optional_string(raw["id"])
        if tariff_id is None:
            raise ValueError(f"{source_label} field `{field_prefix}.id` must be non-empty.")
        label = normalize_optional_string(raw.get("label")) or tariff_id

        try:
            chars_per_sheet = parse_positive_int(
                raw["chars_per_sheet"], f"{field_prefix}.chars_per_sheet"
            )
            new_text_price = parse_non_negative_number(
                raw["new_text_price"], f"{field_prefix}.new_text_price"
            )
            reused_text_price = parse_non_negative_number(
                raw["reused_text_price"], f"{field_prefix}.reused_text_price"
            )
        except ValueError as exc:
            raise ValueError(f"{source_label} field {exc}") from exc

        return Tariff(
            id=tariff_id,
            label=label,
            chars_per_sheet=chars_per_sheet,
            new_text_price=new_text_price,
            reused_text_price=reused_text_price,
        )

    @staticmethod
    def _boolean(value: object, key: str, source_label: str) -> bool:
        """Read a boolean field, prefixing errors with the source label."""

        try:
            return parse_required_boolean(value, key)
        except ValueError as exc:
            raise ValueError(f"{source_label} field {exc}") from exc

    @staticmethod
    def _optional_env_string(env: Mapping[str, str], key: str) -> str | None:
        """Read and normalize optional string environment variable values."""

        if key not in env:
            return None
        return normalize_optional_string(env.get(key))
