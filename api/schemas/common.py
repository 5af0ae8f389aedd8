"""Common shared schemas used across multiple domains."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model exchanging camelCase JSON (``shipId``) with snake_case fields.

    ``to_camel`` capitalises after digits, so ``*_gco2eq`` fields set their
    alias explicitly. NaN and infinity are rejected.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        allow_inf_nan=False,
    )


class ErrorResponse(BaseModel):
    error: str
