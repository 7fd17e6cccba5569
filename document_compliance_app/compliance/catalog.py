# document_compliance_app/compliance/catalog.py
"""In-memory jurisdiction catalog keyed by target country.

Readers always see one complete snapshot: :meth:`RequirementsCatalog.load`
validates every incoming record first and then replaces the snapshot with a
single reference assignment, so a reload never mutates what an in-flight
validation is reading.
"""
from __future__ import annotations

import json
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import yaml
from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from document_compliance_app.core.schemas import (
    JurisdictionRequirement,
    normalize_country,
)

from .errors import ConfigurationError

ALLOWED_CATALOG_EXTS = {".json", ".yml", ".yaml"}

RecordLike = Union[JurisdictionRequirement, Mapping[str, Any]]


def _coerce_record(item: Any, idx: int) -> JurisdictionRequirement:
    if isinstance(item, JurisdictionRequirement):
        return item
    if not isinstance(item, Mapping):
        raise ConfigurationError(
            f"catalog record #{idx} must be a mapping, got {type(item).__name__}"
        )
    try:
        return JurisdictionRequirement.model_validate(dict(item))
    except PydanticValidationError as exc:
        country = item.get("target_country") or item.get("country_code") or "?"
        raise ConfigurationError(
            f"invalid catalog record #{idx} ({country}): {exc.errors()[0]['msg']}"
        ) from exc


def read_records(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Read a JSON/YAML list of records (or ``{"jurisdictions": [...]}``)."""
    p = Path(path)
    if p.suffix.lower() not in ALLOWED_CATALOG_EXTS:
        raise ConfigurationError(f"unsupported catalog format: {p.name}")
    try:
        raw = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"cannot read catalog {p}: {exc}") from exc
    try:
        if p.suffix.lower() == ".json":
            data = json.loads(raw)
        else:
            data = yaml.safe_load(raw)
    except (ValueError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"cannot parse catalog {p}: {exc}") from exc
    if isinstance(data, Mapping):
        data = data.get("jurisdictions")
    if not isinstance(data, list):
        raise ConfigurationError(f"catalog {p} must contain a list of records")
    return data


class RequirementsCatalog:
    def __init__(self, records: Optional[Iterable[RecordLike]] = None):
        self._snapshot: Mapping[str, JurisdictionRequirement] = MappingProxyType({})
        self._loaded = False
        if records is not None:
            self.load(records)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "RequirementsCatalog":
        catalog = cls()
        catalog.load_path(path)
        return catalog

    # ---------- Load ----------
    def load(self, records: Iterable[RecordLike], *, replace: bool = False) -> int:
        """Merge (or replace) records keyed by country; last write wins.

        Returns the number of records applied. Malformed records raise
        :class:`ConfigurationError` and leave the current snapshot as is.
        """
        if records is None:
            raise ConfigurationError("catalog records must not be None")
        parsed = [_coerce_record(item, i) for i, item in enumerate(records)]

        data: Dict[str, JurisdictionRequirement] = {} if replace else dict(self._snapshot)
        for rec in parsed:
            if rec.target_country in data and not replace:
                logger.debug("catalog: overriding {}", rec.target_country)
            data[rec.target_country] = rec

        self._snapshot = MappingProxyType(data)
        self._loaded = True
        logger.info(
            "catalog loaded: {} record(s) applied, {} countries", len(parsed), len(data)
        )
        return len(parsed)

    def load_path(self, path: Union[str, Path], *, replace: bool = True) -> int:
        return self.load(read_records(path), replace=replace)

    # ---------- Read ----------
    def get(self, country_code: Any) -> Optional[JurisdictionRequirement]:
        code = normalize_country(country_code)
        if not code:
            return None
        return self._snapshot.get(code)

    def country_codes(self) -> frozenset:
        return frozenset(self._snapshot)

    def snapshot(self) -> Mapping[str, JurisdictionRequirement]:
        return self._snapshot

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def __len__(self) -> int:
        return len(self._snapshot)

    def __contains__(self, country_code: Any) -> bool:
        return self.get(country_code) is not None


__all__ = ["RequirementsCatalog", "read_records", "ALLOWED_CATALOG_EXTS"]
