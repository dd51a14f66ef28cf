"""JSON Codec — precision-preserving JSON encoding for the HTTP boundary.

Invariants:
    - Every JSON number decodes to Decimal (integers included), never float
    - Decimal encodes exactly as written: no float round-trip on the way out
    - Pure: str in, str out

Design Decisions:
    - simplejson over stdlib json: the stdlib encoder cannot emit Decimal without
      converting through float (ADR: numbers beyond float range must round-trip)
    - parse_int=Decimal: validate_number only accepts Decimal, so decoded payloads
      feed the validators directly
"""

from decimal import Decimal
from typing import Any

import simplejson


def loads(text: str | bytes) -> Any:
    """Decode JSON with every number as Decimal."""
    return simplejson.loads(text, use_decimal=True, parse_int=Decimal)


def dumps(value: Any) -> str:
    """Encode JSON, writing Decimal values digit-for-digit."""
    return simplejson.dumps(
        value, use_decimal=True, ensure_ascii=False, separators=(",", ":"),
    )
