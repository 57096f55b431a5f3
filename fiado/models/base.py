"""Shared pydantic configuration for Fiado models."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base model whose JSON form uses the camelCase keys of the stored records."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
