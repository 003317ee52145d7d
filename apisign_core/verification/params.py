"""
Parameter Extraction
====================
Binds the protocol parameters out of a request's submitted values.
"""

import re
from typing import Any, List, Mapping, Optional

from ..errors import ValidationError
from ..signing.canonical import first_value
from .models import SigningParams

KEY_ID_PARAM = "KeyID"
TIMESTAMP_PARAM = "Timestamp"
NONCE_PARAM = "Nonce"
SIGNATURE_PARAM = "Signature"

DEBUG_ON = "1"

# Plain decimal digits with an optional leading minus
INTEGER_PATTERN = re.compile(r"-?[0-9]+")


def is_debug_request(params: Mapping[str, Any], debug_param: str) -> bool:
    """A request asks for debug signing when its debug flag is exactly "1"."""
    if debug_param not in params:
        return False
    return first_value(params[debug_param]) == DEBUG_ON


def _required(params: Mapping[str, Any], name: str, errors: List[str]) -> Optional[str]:
    value = first_value(params[name]) if name in params else ""
    if not value:
        errors.append(f"'{name}' is required")
        return None
    return value


def _integer(value: Optional[str], name: str, errors: List[str]) -> Optional[int]:
    if value is None:
        return None
    if not INTEGER_PATTERN.fullmatch(value):
        errors.append(f"'{name}' must be an integer")
        return None
    return int(value)


def extract_params(params: Mapping[str, Any], debug: bool) -> SigningParams:
    """
    Bind KeyID, Timestamp, Nonce and Signature from submitted parameters.

    Debug requests only need KeyID.

    Args:
        params: Submitted parameters
        debug: Whether the request asked for debug signing

    Returns:
        SigningParams

    Raises:
        ValidationError: If a required field is missing or malformed
    """
    errors: List[str] = []
    key_id = _required(params, KEY_ID_PARAM, errors)

    if debug:
        if errors:
            raise ValidationError("; ".join(errors))
        return SigningParams(key_id=key_id, debug=True)

    timestamp = _integer(_required(params, TIMESTAMP_PARAM, errors), TIMESTAMP_PARAM, errors)
    nonce = _integer(_required(params, NONCE_PARAM, errors), NONCE_PARAM, errors)
    signature = _required(params, SIGNATURE_PARAM, errors)

    if errors:
        raise ValidationError("; ".join(errors), key_id=key_id)

    return SigningParams(
        key_id=key_id,
        timestamp=timestamp,
        nonce=nonce,
        signature=signature,
    )
