"""Configuration loader for the MK8 build optimizer."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import yaml

from mk8_engine.core.playstyle import Playstyle

DATA_DIR: Path = Path(__file__).resolve().parent.parent / "data"
PLAYSTYLES_PATH: Path = DATA_DIR / "playstyles.yaml"

DEFAULT_SPARQL_ENDPOINT: str = (
    "https://api.triplydb.com/datasets/katmirex/"
    "Mario-Kart-8-Deluxe---Complete-Ontology/sparql"
)
DEFAULT_NAMESPACE: str = "http://mariokart8deluxe.owl#"
DEFAULT_TIMEOUT: float = 30.0

_REQUIRED_FIELDS: tuple[str, ...] = (
    "key",
    "display_name",
    "weights",
)


@dataclass(frozen=True)
class Settings:
    """Data source settings.

    Attributes:
        sparql_endpoint: SPARQL endpoint URL of the MK8 ontology.
        namespace: Ontology namespace used as the ``mk:`` prefix.
        timeout: HTTP timeout in seconds.
    """

    sparql_endpoint: str = DEFAULT_SPARQL_ENDPOINT
    namespace: str = DEFAULT_NAMESPACE
    timeout: float = DEFAULT_TIMEOUT


def load_settings() -> Settings:
    """Build :class:`Settings` from defaults and environment overrides.

    ``MK8_SPARQL_ENDPOINT`` replaces the endpoint URL and
    ``MK8_SPARQL_TIMEOUT`` the HTTP timeout.

    Raises:
        ValueError: If ``MK8_SPARQL_TIMEOUT`` is not a positive number.
    """
    endpoint = os.environ.get("MK8_SPARQL_ENDPOINT") or DEFAULT_SPARQL_ENDPOINT
    raw_timeout = os.environ.get("MK8_SPARQL_TIMEOUT")
    timeout = DEFAULT_TIMEOUT
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ValueError(
                f"MK8_SPARQL_TIMEOUT must be numeric, got {raw_timeout!r}"
            ) from None
        if timeout <= 0.0:
            raise ValueError(f"MK8_SPARQL_TIMEOUT must be > 0, got {timeout}")
    return Settings(sparql_endpoint=endpoint, timeout=timeout)


def load_playstyles(path: Path | None = None) -> dict[str, Playstyle]:
    """Load playstyle presets from a YAML file.

    Each entry is validated and converted into a :class:`Playstyle`
    instance.  File order is preserved.

    Args:
        path: Optional override for the playstyles file path.

    Returns:
        Mapping of playstyle key to :class:`Playstyle`.

    Raises:
        FileNotFoundError: If the playstyles file does not exist.
        ValueError: If any entry is missing fields, repeats a key, or has
            invalid weights.
    """
    playstyles_path = path or PLAYSTYLES_PATH
    if not playstyles_path.exists():
        raise FileNotFoundError(f"Playstyles file not found: {playstyles_path}")

    with open(playstyles_path, encoding="utf-8") as fh:
        data = yaml.safe_load(fh)

    entries: list[dict] = data["playstyles"]
    playstyles: dict[str, Playstyle] = {}

    for idx, entry in enumerate(entries):
        # --- Validate required fields ---
        for field in _REQUIRED_FIELDS:
            if field not in entry:
                raise ValueError(
                    f"Playstyle entry {idx} ({entry.get('key', '<unknown>')}) "
                    f"is missing required field '{field}'"
                )

        key = str(entry["key"])
        if key in playstyles:
            raise ValueError(f"Playstyle entry {idx}: duplicate key '{key}'")

        weights = entry["weights"]
        if not isinstance(weights, dict):
            raise ValueError(
                f"Playstyle entry {idx} ({key}): "
                f"'weights' must be a mapping, got {type(weights).__name__}"
            )

        try:
            playstyles[key] = Playstyle(
                key=key,
                display_name=str(entry["display_name"]),
                description=str(entry.get("description", "")),
                weights={str(stat): w for stat, w in weights.items()},
            )
        except ValueError as exc:
            raise ValueError(f"Playstyle entry {idx}: {exc}") from exc

    return playstyles
