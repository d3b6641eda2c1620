from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from constants import LIST_BAD_REQUEST_ERRORS, SUCCESS


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class SuccessResponse(CamelModel):
    message: str = SUCCESS


class BadRequestResponse(CamelModel):
    message: str = Field(..., description="Failure message and reason")


class BrokerApplicationsListBadRequestResponse(BadRequestResponse):
    message: str = Field(
        ...,
        description="Failure message and reason",
        json_schema_extra={"enum": list(LIST_BAD_REQUEST_ERRORS)},
    )
