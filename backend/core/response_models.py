"""
Base response models.

The client talks camelCase JSON while Python code stays snake_case;
models deriving from CamelModel accept either spelling on input and
serialize by alias.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model with camelCase aliases"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
