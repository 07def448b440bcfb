"""Base pydantic model shared by all API schemas."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchemaModel(BaseModel):
    """Common schema configuration.

    Attributes are read from ORM rows (``from_attributes``), serialised in
    camelCase by alias, and accepted in either snake_case or camelCase.
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        extra="ignore",
        str_strip_whitespace=True,
    )
