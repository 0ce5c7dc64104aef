"""
Shared pydantic types for API responses
"""
from typing import Annotated, Optional

from pydantic import PlainSerializer

# Identifiers are plain ints internally; large values are rendered as strings
# so JSON clients never lose precision.
IdStr = Annotated[int, PlainSerializer(lambda v: str(v), return_type=str)]

OptionalIdStr = Annotated[
    Optional[int],
    PlainSerializer(lambda v: None if v is None else str(v), return_type=Optional[str])
]
