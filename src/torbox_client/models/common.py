"""Shared model base and the response envelope"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, model_validator

DataT = TypeVar('DataT')


class TorboxModel(BaseModel):
    """Base for API payloads

    Unknown keys are kept in `model_extra` so the decoder can report them,
    and JSON nulls fall back to the field default.
    """

    model_config = ConfigDict(extra='allow', populate_by_name=True)

    @model_validator(mode='before')
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class Envelope(TorboxModel, Generic[DataT]):
    """Common wrapper of every API response

    `success` stays None when the payload omits it.
    """

    success: bool | None = None
    error: str = ''
    detail: str = ''
    data: DataT | None = None


def collect_unknown_fields(model: BaseModel, prefix: str = '') -> dict[str, Any]:
    """Collect keys that were present in the payload but not in the schema

    Nested models and lists of models are walked; keys are dotted paths.
    """
    unknown: dict[str, Any] = {}
    for key, value in (model.model_extra or {}).items():
        unknown[f'{prefix}{key}'] = value

    for name in type(model).model_fields:
        value = getattr(model, name, None)
        if isinstance(value, BaseModel):
            unknown.update(collect_unknown_fields(value, f'{prefix}{name}.'))
        elif isinstance(value, list | tuple):
            for index, item in enumerate(value):
                if isinstance(item, BaseModel):
                    unknown.update(collect_unknown_fields(item, f'{prefix}{name}[{index}].'))
    return unknown
