from pydantic import BaseModel, ConfigDict

strict_config = ConfigDict(
    extra='forbid',
    frozen=True,
    populate_by_name=True,
    validate_default=True,
    validate_return=True,
)


class StrictBaseModel(BaseModel, frozen=True):
    model_config = strict_config

    def to_dict(self) -> dict:
        return self.model_dump(mode='json')
