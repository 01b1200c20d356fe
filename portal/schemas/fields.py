# portal/schemas/fields.py
from typing import Annotated, Optional

from pydantic import BeforeValidator


def _number_to_str(value):
    # Clients post numeric codes as JSON numbers, e.g. {"passcode": 1234}
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


CodeStr = Annotated[Optional[str], BeforeValidator(_number_to_str)]
