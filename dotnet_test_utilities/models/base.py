"""Base model configuration for parsed documents."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Base model with standard configuration.

    Field names are snake_case; documents use camelCase aliases, and both
    spellings are accepted when constructing a model.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)
