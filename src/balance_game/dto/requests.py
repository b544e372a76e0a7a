"""Request DTOs for API endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class GenerateQuestionsRequest(BaseModel):
    """Request DTO for fetching a category's questions of the day.

    Fields are optional here so that a missing field is reported as a
    400 with the list of missing names rather than a schema error.
    """

    model_config = ConfigDict(populate_by_name=True)

    category: str | None = Field(None, description="Category identifier, e.g. 'daily'")
    category_description: str | None = Field(
        None,
        alias="categoryDescription",
        description="Topic text used in the generation prompt",
    )
    date_seed: str | None = Field(
        None,
        alias="dateSeed",
        description="Calendar day identifier in the client's local time, e.g. '2024-5-1'",
    )
