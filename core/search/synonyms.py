# Path: core/search/synonyms.py
# Purpose: Load and query the user-supplied synonym table used to expand search terms.
# Layer: core/search.
# Details: Keys and aliases are lower-cased at load time; loading never fails, it degrades to an empty table.

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from pydantic import TypeAdapter, ValidationError

from core.errors import ConfigLoadError

logger = logging.getLogger(__name__)

SynonymSource = Union[Path, str, Mapping[str, Iterable[str]], None]

_PAYLOAD_ADAPTER = TypeAdapter(Dict[str, List[str]])


class SynonymTable:
    """Immutable mapping of canonical phrase to alias phrases.

    A phrase is a canonical key in at most one entry but may be listed as an
    alias under several keys, so the reverse index maps an alias to every key
    that lists it.
    """

    def __init__(self, entries: Optional[Mapping[str, Iterable[str]]] = None) -> None:
        aliases: Dict[str, Tuple[str, ...]] = {}
        for raw_key, raw_aliases in (entries or {}).items():
            key = _normalize(raw_key)
            if not key:
                continue
            normalized = tuple(dict.fromkeys(a for a in (_normalize(alias) for alias in raw_aliases) if a))
            if key in aliases:
                logger.info("Synonym key %r defined more than once, keeping the last definition", key)
            aliases[key] = normalized
        self._aliases = aliases

        reverse: Dict[str, List[str]] = {}
        for key, key_aliases in aliases.items():
            for alias in key_aliases:
                reverse.setdefault(alias, []).append(key)
        self._keys_by_alias: Dict[str, Tuple[str, ...]] = {alias: tuple(keys) for alias, keys in reverse.items()}

        self._multi_word_keys = tuple(
            sorted((key for key in aliases if len(key.split()) > 1), key=lambda key: (-len(key), key))
        )

    @classmethod
    def empty(cls) -> "SynonymTable":
        return cls()

    def __len__(self) -> int:
        return len(self._aliases)

    def __contains__(self, phrase: object) -> bool:
        return isinstance(phrase, str) and _normalize(phrase) in self._aliases

    def __repr__(self) -> str:
        return f"SynonymTable({len(self)} keys)"

    def keys(self) -> Tuple[str, ...]:
        return tuple(self._aliases)

    def aliases_for(self, phrase: str) -> Tuple[str, ...]:
        """Return the aliases of a canonical phrase, or an empty tuple."""

        return self._aliases.get(_normalize(phrase), ())

    def canonicals_for(self, alias: str) -> Tuple[str, ...]:
        """Return every canonical phrase that lists ``alias``."""

        return self._keys_by_alias.get(_normalize(alias), ())

    def multi_word_keys(self) -> Tuple[str, ...]:
        """Canonical keys containing whitespace, longest first, ties alphabetical."""

        return self._multi_word_keys

    def to_dict(self) -> Dict[str, List[str]]:
        return {key: list(aliases) for key, aliases in self._aliases.items()}


def load_synonyms(source: SynonymSource) -> SynonymTable:
    """Build a SynonymTable from a JSON file path or an in-memory mapping.

    Any problem (missing file, unreadable file, malformed JSON, wrong shape)
    is logged as a ConfigLoadError and an empty table is returned so that the
    catalog stays usable without synonym expansion.
    """

    if source is None:
        return SynonymTable.empty()

    try:
        if isinstance(source, Mapping):
            pairs = list(source.items())
        else:
            pairs = _read_pairs(Path(source))
        validated = _PAYLOAD_ADAPTER.validate_python(dict(pairs))
    except ConfigLoadError as exc:
        logger.warning("Synonyms unavailable: %s", exc)
        return SynonymTable.empty()
    except ValidationError as exc:
        logger.warning("Synonyms unavailable: %s", ConfigLoadError(f"malformed synonym table: {exc}"))
        return SynonymTable.empty()

    # Re-apply in source order so duplicate keys resolve as last-loaded-wins.
    ordered: Dict[str, List[str]] = {}
    for key, _ in pairs:
        aliases = validated[key]
        normalized = _normalize(key)
        if normalized in ordered:
            logger.info("Synonym key %r overridden by a later definition", normalized)
            del ordered[normalized]
        ordered[normalized] = aliases
    table = SynonymTable(ordered)
    logger.debug("Loaded %d synonym keys", len(table))
    return table


def _read_pairs(path: Path) -> List[Tuple[str, Any]]:
    """Read a JSON object keeping duplicate keys in file order."""

    if not path.exists():
        raise ConfigLoadError(f"synonym file {path} does not exist")
    try:
        text = path.read_text(encoding="utf-8")
        pairs = json.loads(text, object_pairs_hook=_PairList)
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigLoadError(f"synonym file {path} could not be read: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigLoadError(f"synonym file {path} is not valid JSON: {exc}") from exc
    if not isinstance(pairs, _PairList):
        raise ConfigLoadError(f"synonym file {path} must contain a JSON object")
    return [(key, _unwrap(value)) for key, value in pairs]


class _PairList(list):
    """Marker type produced by the JSON object hook so duplicate keys survive parsing."""


def _unwrap(value: Any) -> Any:
    if isinstance(value, _PairList):
        return dict(value)
    if isinstance(value, list):
        return [_unwrap(item) for item in value]
    return value


def _normalize(phrase: str) -> str:
    return " ".join(str(phrase).split()).lower()


__all__ = ["SynonymTable", "load_synonyms"]
