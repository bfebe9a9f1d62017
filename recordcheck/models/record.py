"""Record model — the decoded user data subject to validation."""

from enum import Enum
from pydantic import BaseModel


class Format(str, Enum):
    """Supported input document formats."""

    JSON = "json"
    XML = "xml"


class Record(BaseModel):
    """A decoded user record. Missing fields hold their type's zero value."""

    name: str = ""
    age: int = 0
    email: str = ""

    model_config = {"frozen": True, "strict": True}
