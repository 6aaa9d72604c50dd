"""
Header-mapping export (original header -> digest).
"""
from __future__ import annotations
import json
from pathlib import Path
from typing import Dict, Optional

import pandas as pd

from ..errors import ConfigError
from ..io.compression import ENCODING, ENCODING_ERRORS

MAPPING_COLUMNS = ["header_original", "header_hashed"]
MAPPING_FORMATS = ("csv", "json")


def infer_mapping_format(path) -> str:
    return "json" if Path(path).suffix.lower() == ".json" else "csv"


# ───────────────────────────────────────────────────────────────────────────
def write_header_mapping(mapping: Dict[str, str],
                         path,
                         fmt: Optional[str] = None) -> int:
    """
    Serialize `mapping` as two-column CSV or as one JSON object keyed by
    original header. Format is taken from the suffix when `fmt` is None.
    Returns the number of entries written.
    """
    fmt = (fmt or infer_mapping_format(path)).lower()
    if fmt not in MAPPING_FORMATS:
        raise ConfigError(f"mapping format must be one of {MAPPING_FORMATS}, got '{fmt}'")

    if fmt == "json":
        with open(path, "w", encoding=ENCODING, errors=ENCODING_ERRORS) as fh:
            json.dump(mapping, fh, indent=2)
            fh.write("\n")
    else:
        df = pd.DataFrame(list(mapping.items()), columns=MAPPING_COLUMNS)
        df.to_csv(path, index=False, encoding=ENCODING, errors=ENCODING_ERRORS)
    return len(mapping)


def read_header_mapping(path, fmt: Optional[str] = None) -> Dict[str, str]:
    """Load a mapping previously written by `write_header_mapping`."""
    fmt = (fmt or infer_mapping_format(path)).lower()
    if fmt == "json":
        with open(path, encoding=ENCODING, errors=ENCODING_ERRORS) as fh:
            return json.load(fh)
    df = pd.read_csv(path, dtype=str, keep_default_na=False,
                     encoding=ENCODING, encoding_errors=ENCODING_ERRORS)
    return dict(zip(df[MAPPING_COLUMNS[0]], df[MAPPING_COLUMNS[1]]))
