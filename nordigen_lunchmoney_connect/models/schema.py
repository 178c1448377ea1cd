from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Schema(BaseModel):
    """Base class for models that are read from the Nordigen API.

    Nordigen uses camelCase keys. The models use snake_case attributes, and are
    instantiated from the API response using model_validate. Instances are
    immutable: they are fetched, converted and discarded within one sync.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )
