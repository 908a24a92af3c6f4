from typing import ClassVar, Dict

from pydantic import BaseModel, ValidationError as PydanticValidationError

# Largest value an INTEGER primary key column holds
MAX_ID = 2 ** 31 - 1


class RequestBody(BaseModel):
    """
    Base for request bodies.

    `messages` maps a field name to the single message reported for that
    field, whatever rule it broke. Fields without an entry fall back to
    pydantic's own message.
    """
    messages: ClassVar[Dict[str, str]] = {}

    @classmethod
    def fieldErrors(cls, exc: PydanticValidationError) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        for error in exc.errors():
            loc = error.get("loc") or ("body",)
            field = str(loc[0])
            errors.setdefault(field, cls.messages.get(field, error.get("msg", "Invalid value")))
        return errors
