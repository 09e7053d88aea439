import json
import sys
from collections import namedtuple

from ..color import NEUTRAL_COLOR

FIXED = "fixed"
RANDOM = "random"

# "onoff" is the older name for a fixed-color symbol
KIND_ALIASES = {"onoff": FIXED, FIXED: FIXED, RANDOM: RANDOM}

SymbolSpec = namedtuple("SymbolSpec", ["kind", "color"], defaults=[None])


class ConfigError(ValueError):
    """A symbol configuration entry that can't be resolved."""


def default_symbols():
    return {
        "△": SymbolSpec(FIXED, "#FFE26A"),
        "▢": SymbolSpec(RANDOM),
        "○": SymbolSpec(RANDOM),
    }


def symbol_spec_from_dict(entry):
    """Resolve one raw ``{"kind": ..., "color": ...}`` entry.

    Raises:
        ConfigError: for non-object entries or unknown kinds
    """
    if not isinstance(entry, dict):
        raise ConfigError(f"symbol entry must be an object, got {entry!r}")
    kind = KIND_ALIASES.get(entry.get("kind"))
    if kind is None:
        raise ConfigError(f"unknown symbol kind {entry.get('kind')!r}")
    if kind == RANDOM:
        return SymbolSpec(RANDOM)
    color = entry.get("color")
    if not isinstance(color, str) or not color:
        color = NEUTRAL_COLOR
    return SymbolSpec(FIXED, color)


def symbols_from_dict(mapping):
    """Resolve a raw ``symbols`` mapping into SymbolSpecs.

    Keys that aren't a single character can never match while scanning, so
    they're dropped with a warning.

    Raises:
        ConfigError: if any entry can't be resolved
    """
    if not isinstance(mapping, dict):
        raise ConfigError("'symbols' must be an object")

    symbols = {}
    for symbol, entry in mapping.items():
        if len(symbol) != 1:
            print(
                f"Warning: ignoring symbol {symbol!r}, delimiters are single characters",
                file=sys.stderr,
            )
            continue
        symbols[symbol] = symbol_spec_from_dict(entry)
    return symbols


def symbols_to_dict(symbols):
    """Legend form of a resolved symbols mapping"""
    out = {}
    for symbol, spec in symbols.items():
        entry = {"kind": spec.kind}
        if spec.kind == FIXED:
            entry["color"] = spec.color
        out[symbol] = entry
    return out


def load_config(config_path):
    """Load the symbol configuration.

    Args:
        config_path: Path to a JSON document with a ``symbols`` object, or None

    Returns:
        dict: symbol -> SymbolSpec

    A file that can't be opened raises OSError. Malformed or unusable
    configuration falls back to default_symbols() with a warning.
    """
    if config_path is None:
        return default_symbols()

    with open(config_path, "rb") as f:
        raw = f.read()

    try:
        data = json.loads(raw.decode("utf-8"))
        if not isinstance(data, dict):
            raise ConfigError("configuration must be a JSON object")
        return symbols_from_dict(data.get("symbols"))
    except (UnicodeDecodeError, json.JSONDecodeError, ConfigError) as e:
        print(
            f"Warning: invalid config {config_path} ({e}), using default symbols",
            file=sys.stderr,
        )
        return default_symbols()
