from pydantic import BaseModel, ConfigDict, Field


class PresignResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: str
    public_url: str = Field(..., alias="publicUrl")


class ErrorResponse(BaseModel):
    error: str
