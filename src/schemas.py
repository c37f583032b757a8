from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class EventBase(BaseModel):
    name: str
    scheduled_at: datetime
    price: int = Field(ge=0)
    capacity: int = Field(ge=0)


class EventRequestCreate(EventBase):
    id: int = Field(ge=0)


class EventResponse(EventBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    admitted_count: int
    active: bool


class AdmitRequest(BaseModel):
    token_id: int = Field(ge=0)
    paid_amount: int = Field(ge=0)


class AttendanceResponse(BaseModel):
    event_id: int
    participant: str
    attended: bool


class TreasuryResponse(BaseModel):
    balance: int


class PayoutResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    recipient: str
    amount: int


class MintRequest(BaseModel):
    recipient: str
    metadata_ref: str


class MintResponse(BaseModel):
    token_id: int
    recipient: str


class MetadataBaseRequest(BaseModel):
    metadata_base: str


class MetadataResponse(BaseModel):
    token_id: int
    metadata: str


class OwnerResponse(BaseModel):
    token_id: int
    owner: str


class TransferRequest(BaseModel):
    recipient: str


class IssuerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    symbol: str
    max_supply: int
    next_token_id: int
    metadata_base: str
