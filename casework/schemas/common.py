"""Shared schema base: camelCase on the wire, snake_case in Python."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for request/response bodies.

    Accepts both camelCase and snake_case on input; responses are emitted in
    camelCase (FastAPI serializes response models by alias).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(CamelModel):
    """Canonical error envelope returned by every failing request."""

    error_kind: str
    message: str
    details: dict | None = None
