# backend/schemas/base.py
from typing import Annotated

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# Base configuration for ORM compatibility.
# JSON keys are camelCase on the wire, snake_case names are accepted on input too.
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


def strip_required(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be empty")
    return value


def strip_optional(value):
    return value.strip() if isinstance(value, str) else value


def check_email(value: str) -> str:
    # Format check only, the address is kept exactly as sent (no case folding)
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(f"value is not a valid email address: {e}")
    return value


Email = Annotated[str, AfterValidator(check_email)]
