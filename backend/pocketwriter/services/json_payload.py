"""JSON well-formedness check for the free-text payload columns."""

import json
import logging

from pocketwriter.exceptions import ValidationError

logger = logging.getLogger(__name__)


def ensure_valid_json(value: str, field: str) -> None:
    """
    Raise ValidationError (→ 400) unless `value` parses as JSON.

    The payload is stored as text unchanged; parsing only checks its shape.
    """
    try:
        json.loads(value)
    except (TypeError, ValueError) as e:
        logger.warning("Rejected malformed JSON in %s: %s", field, e)
        raise ValidationError(
            message=f"{field} must be valid JSON: {e}",
            field=field,
        )
