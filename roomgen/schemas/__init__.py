"""Pydantic schemas used across the project."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GenerateRequest(BaseModel):
    # every field is optional here so missing ones surface as InvalidRequest, not 422
    model_config = ConfigDict(populate_by_name=True)

    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    style: Optional[str] = None
    room_type: Optional[str] = Field(default=None, alias="roomType")
    user_id: Optional[str] = Field(default=None, alias="userId")


class GenerateResponse(BaseModel):
    id: str
    status: str
    generated_image_url: Optional[str] = None
    message: Optional[str] = None


class GenerationResponse(BaseModel):
    id: str
    user_id: str
    original_image_url: str
    generated_image_url: Optional[str] = None
    prompt: Optional[str] = None
    style: Optional[str] = None
    room_type: Optional[str] = None
    status: str
    error_message: Optional[str] = None
    prediction_id: Optional[str] = None
    model_profile: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True, protected_namespaces=())


class GenerationListResponse(BaseModel):
    total: int
    generations: list[GenerationResponse]


class ErrorDetail(BaseModel):
    code: str
    message: str


class ProfileCreateRequest(BaseModel):
    email: Optional[str] = Field(default=None, max_length=255)
    credits: int = Field(default=0, ge=0)
    is_pro: bool = False


class ProfileResponse(BaseModel):
    user_id: str
    email: Optional[str] = None
    credits: int
    is_pro: bool
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CreditTransactionResponse(BaseModel):
    id: str
    job_id: Optional[str] = None
    amount: int
    type: str
    description: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CreditBalanceResponse(BaseModel):
    user_id: str
    credits: int
    transactions: list[CreditTransactionResponse] = Field(default_factory=list)


class StyleOption(BaseModel):
    id: str
    prompt: str


class StyleCatalogResponse(BaseModel):
    styles: list[StyleOption]
    room_types: list[StyleOption]
    default_style: str
