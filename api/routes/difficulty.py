from fastapi import APIRouter, Query

from api.schemas import DifficultyResponse
from src.formatting import format_difficulty

router = APIRouter()

# orjson only serializes integers in the signed/unsigned 64-bit range
_JSON_INT_MIN = -(2**63)
_JSON_INT_MAX = 2**64 - 1


def _parse_number(raw: str):
    """int, then float; anything else is passed through as text."""
    for parse in (int, float):
        try:
            return parse(raw)
        except ValueError:
            continue
    return raw


def _echo_value(parsed, raw: str):
    """The parsed value, or the raw text when it cannot be sent back as a JSON int."""
    if isinstance(parsed, int) and not _JSON_INT_MIN <= parsed <= _JSON_INT_MAX:
        return raw
    return parsed


@router.get("/difficulty", response_model=DifficultyResponse)
async def get_formatted_difficulty(value: str = Query(..., description="Raw difficulty value")):
    """
    Format a raw difficulty with K/M/G/T/P suffixes.
    Non-numeric values format as "Invalid".
    """
    parsed = _parse_number(value)
    return DifficultyResponse(value=_echo_value(parsed, value), formatted=format_difficulty(parsed))
