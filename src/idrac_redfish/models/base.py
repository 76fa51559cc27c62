from __future__ import annotations

from typing import Annotated, Any, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, NonNegativeInt, ValidationError, model_validator

from ..errors import DecodeError


def _none_to_empty(value: Any) -> Any:
    return "" if value is None else value


def _none_to_zero(value: Any) -> Any:
    return 0 if value is None else value


# iDRAC firmware reports unset properties as JSON null
NullableStr = Annotated[str, BeforeValidator(_none_to_empty)]
Counter = Annotated[NonNegativeInt, BeforeValidator(_none_to_zero)]


class RedfishModel(BaseModel):
    """Base for response shapes mirroring raw Redfish documents."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        # a null property decodes as if it were absent
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


ResponseT = TypeVar("ResponseT", bound=RedfishModel)


def parse_response(model: type[ResponseT], data: bytes | str) -> ResponseT:
    try:
        return model.model_validate_json(data)
    except ValidationError as exc:
        raise DecodeError(f"parsing error: {exc}", data) from exc
