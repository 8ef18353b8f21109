"""
Quantum Genetics Configuration Schema - Self-Validating Config Loader

Loads QuantumConfig from JSON or YAML files and plain dicts.

Design Principles:
- Self-validating: Can't create invalid config
- Self-healing: Invalid input -> safe defaults + warnings (unless strict)
- Self-describing: Exports its JSON schema
- Auditable: Deterministic config hash for provenance
- Immutable: QuantumConfig is frozen after load
"""

from __future__ import annotations

import hashlib
import json
import warnings
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import yaml
from jsonschema import Draft202012Validator

from genetics.types_config import QuantumConfig
from genetics.types_state import ClassicalGenome


__all__ = [
    'load',
    'load_founders',
    'from_dict',
    'to_dict',
    'save',
    'default',
    'config_hash',
    'schema',
]


# =============================================================================
# JSON Schema Definition (Draft 2020-12)
# =============================================================================

_JSON_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "QuantumConfig",
    "description": "Quantum genetic processor configuration",
    "type": "object",
    "properties": {
        "coherence_time": {
            "type": "number",
            "description": "Maximum entanglement age in simulation seconds",
            "minimum": 0.0,
            "default": 100.0
        },
        "decoherence_rate": {
            "type": "number",
            "description": "Coherence lost per simulation second",
            "minimum": 0.0,
            "default": 0.01
        },
        "enable_entanglement": {
            "type": "boolean",
            "description": "Whether breeding may entangle offspring with parents",
            "default": True
        },
        "max_superposition_states": {
            "type": "integer",
            "description": "Candidate states per trait (fixed per processor)",
            "minimum": 1,
            "default": 8
        },
        "superposition_stability": {
            "type": "number",
            "description": "Amplitude given to the measured state on collapse, before normalization",
            "exclusiveMinimum": 0.0,
            "maximum": 1.0,
            "default": 0.85
        },
        "collapse_probability": {
            "type": "number",
            "description": "Forced collapse chance per second at low coherence",
            "minimum": 0.0,
            "maximum": 1.0,
            "default": 0.1
        },
        "entanglement_strength": {
            "type": "number",
            "description": "Entanglement formation chance and initial strength",
            "minimum": 0.0,
            "maximum": 1.0,
            "default": 0.3
        },
        "entanglement_decay_rate": {
            "type": "number",
            "description": "Relative strength lost per simulation second",
            "minimum": 0.0,
            "default": 0.005
        },
        "cache_validity_time": {
            "type": "number",
            "description": "Measurement cache lifetime in seconds (0 disables)",
            "minimum": 0.0,
            "default": 10.0
        },
        "random_seed": {
            "type": "integer",
            "description": "Seed of the randomness provider",
            "minimum": 0,
            "default": 42
        },
        "receipt_ledger_size": {
            "type": "integer",
            "description": "Receipts kept in the event bus ledger",
            "minimum": 0,
            "default": 10000
        },
        "scenario_name": {
            "type": "string",
            "description": "Label carried into logs and receipts",
            "minLength": 1,
            "default": "BASELINE"
        }
    },
    "additionalProperties": False
}

# Numeric bounds used by self-healing: field -> (low, high); None = unbounded
_BOUNDS: Dict[str, Tuple[Any, Any]] = {
    "coherence_time": (0.0, None),
    "decoherence_rate": (0.0, None),
    "max_superposition_states": (1, None),
    "superposition_stability": (1e-6, 1.0),
    "collapse_probability": (0.0, 1.0),
    "entanglement_strength": (0.0, 1.0),
    "entanglement_decay_rate": (0.0, None),
    "cache_validity_time": (0.0, None),
    "random_seed": (0, None),
    "receipt_ledger_size": (0, None),
}

_INTEGER_FIELDS = frozenset({"max_superposition_states", "random_seed", "receipt_ledger_size"})

# Module-level compiled validator - compiled once at import
Draft202012Validator.check_schema(_JSON_SCHEMA)
_COMPILED_VALIDATOR = Draft202012Validator(_JSON_SCHEMA)


# =============================================================================
# Module-Level Functions
# =============================================================================

def schema() -> Dict[str, Any]:
    """Return a copy of the JSON schema."""
    return json.loads(json.dumps(_JSON_SCHEMA))


def default() -> QuantumConfig:
    """Return the baseline configuration."""
    return QuantumConfig()


def to_dict(config: QuantumConfig) -> Dict[str, Any]:
    return asdict(config)


def config_hash(config: QuantumConfig) -> str:
    """Deterministic SHA3-256 digest (16 hex chars) of the config content."""
    canonical = json.dumps(to_dict(config), sort_keys=True, separators=(',', ':'))
    return hashlib.sha3_256(canonical.encode()).hexdigest()[:16]


def from_dict(data: Dict[str, Any], strict: bool = False) -> QuantumConfig:
    """
    Build a QuantumConfig from a mapping.

    Args:
        data: Field values; missing fields take defaults
        strict: If True, raise on any schema problem; if False, self-heal with warnings

    Returns:
        Validated, frozen QuantumConfig

    Raises:
        ValueError: strict=True and validation fails, or data is not a mapping
    """
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a mapping, got {type(data).__name__}")

    errors = _validate(data)
    if errors:
        if strict:
            raise ValueError("Invalid quantum config: " + "; ".join(errors))
        warns: List[str] = []
        data = _self_heal(data, warns)
        for msg in warns:
            warnings.warn(msg, UserWarning, stacklevel=2)

    # JSON numbers like 8.0 pass the integer check; the dataclass needs ints
    data = {k: int(v) if k in _INTEGER_FIELDS else v for k, v in data.items()}
    return QuantumConfig(**data)


def load(path: Union[str, Path], strict: bool = False) -> QuantumConfig:
    """
    Load config from JSON/YAML file.

    An empty file yields the default config.

    Raises:
        FileNotFoundError: If path doesn't exist
        ValueError: If strict=True and validation fails
    """
    data = _read(path)
    if data is None:
        data = {}
    return from_dict(data, strict=strict)


def load_founders(path: Union[str, Path]) -> List[ClassicalGenome]:
    """
    Load founder genomes from a JSON/YAML file.

    Accepts either a top-level list or a mapping with a 'founders' list.
    """
    data = _read(path)
    if isinstance(data, dict):
        data = data.get("founders", [])
    if not isinstance(data, list):
        raise ValueError(f"Founders file must hold a list, got {type(data).__name__}")
    return [ClassicalGenome.from_dict(entry) for entry in data]


def save(config: QuantumConfig, path: Union[str, Path]) -> None:
    """Write config as JSON or YAML depending on suffix."""
    path_obj = Path(path)
    data = to_dict(config)
    if path_obj.suffix in ('.yaml', '.yml'):
        path_obj.write_text(yaml.safe_dump(data, sort_keys=True))
    else:
        path_obj.write_text(json.dumps(data, sort_keys=True, indent=2))


# =============================================================================
# Internal Functions
# =============================================================================

def _read(path: Union[str, Path]) -> Any:
    path_obj = Path(path)

    if not path_obj.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    content = path_obj.read_text()

    if path_obj.suffix in ('.yaml', '.yml'):
        return yaml.safe_load(content)
    if not content.strip():
        return None
    return json.loads(content)


def _validate(data: Dict[str, Any]) -> List[str]:
    """Schema errors as readable strings (empty list = valid)."""
    errors = []
    for err in sorted(_COMPILED_VALIDATOR.iter_errors(data), key=lambda e: list(e.path)):
        location = ".".join(str(p) for p in err.path) or "<root>"
        errors.append(f"{location}: {err.message}")
    return errors


def _self_heal(data: Dict[str, Any], warns: List[str]) -> Dict[str, Any]:
    """
    Self-healing behavior:
    - Unknown field -> dropped, warning
    - Wrong type -> default, warning
    - Out-of-range value -> clamped, warning
    """
    defaults = {f.name: f.default for f in fields(QuantumConfig)}
    healed: Dict[str, Any] = {}

    for key, val in data.items():
        if key not in defaults:
            warns.append(f"Ignoring unknown field: {key}")
            continue

        expected = type(defaults[key])
        if expected is bool:
            ok = isinstance(val, bool)
        elif expected in (int, float):
            ok = isinstance(val, (int, float)) and not isinstance(val, bool)
            if ok and key in _INTEGER_FIELDS and not float(val).is_integer():
                ok = False
        else:
            ok = isinstance(val, str) and bool(val)

        if not ok:
            warns.append(f"Invalid value for '{key}' ({val!r}), using default: {defaults[key]}")
            continue

        if key in _BOUNDS:
            low, high = _BOUNDS[key]
            if low is not None and val < low:
                warns.append(f"Clamped {key} from {val} to {low}")
                val = low
            elif high is not None and val > high:
                warns.append(f"Clamped {key} from {val} to {high}")
                val = high
            if key in _INTEGER_FIELDS:
                val = int(val)
            else:
                val = float(val)

        healed[key] = val

    return healed
