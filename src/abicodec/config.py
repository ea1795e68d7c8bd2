"""Load decoder configurations from YAML, TOML, or JSON files.

Example ``contracts.toml``::

    [contracts."0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"]
    abi = "ERC20"
    symbol = "USDC"
    decimals = 6
    price = 1.0

    [contracts."0x7a250d5630b4cf539739df2c5dacb4c659f2488d"]
    abi = "abis/uniswap_v2_router.json"
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .decoder import ContractInfo, Decoder, contract_infos

log = logging.getLogger("abicodec.config")


def load_config(path: str | Path) -> dict[str, Any]:
    """Load a configuration dict from a file, dispatched by extension.

    Supported extensions: ``.json``, ``.toml``, ``.yaml`` / ``.yml``.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    suffix = path.suffix.lower()
    log.debug("Loading config from %s", path)

    if suffix == '.json':
        with open(path) as f:
            return json.load(f)

    if suffix == '.toml':
        return _load_toml(path)

    if suffix in ('.yaml', '.yml'):
        return _load_yaml(path)

    raise ValueError(
        f"Unsupported config file extension {suffix!r}. "
        "Use .json, .toml, .yaml, or .yml."
    )


def decoder_from_config(path: str | Path) -> Decoder:
    """Build a :class:`Decoder` from a config file.

    ABI file paths in the config resolve relative to the config file.
    """
    path = Path(path)
    return Decoder.from_config(load_config(path), base_dir=path.parent)


def contracts_from_config(path: str | Path) -> dict[str, ContractInfo]:
    """Load the well-known contract metadata (for hint options) from a config file."""
    path = Path(path)
    return contract_infos(load_config(path), base_dir=path.parent)


# ── Internal loaders ─────────────────────────────────────────────

def _load_toml(path: Path) -> dict[str, Any]:
    """Load TOML using ``tomllib`` (3.11+) or ``tomli``."""
    try:
        import tomllib  # type: ignore[import-not-found]
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore[no-redef]
        except ModuleNotFoundError:
            raise ImportError(
                "TOML support requires Python 3.11+ (built-in tomllib) "
                "or the 'tomli' package. Install with: pip install abicodec[toml]"
            )
    with open(path, 'rb') as f:
        return tomllib.load(f)


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML using ``pyyaml``."""
    try:
        import yaml
    except ModuleNotFoundError:
        raise ImportError(
            "YAML support requires the 'pyyaml' package. "
            "Install with: pip install abicodec[yaml]"
        )
    with open(path) as f:
        return yaml.safe_load(f)
