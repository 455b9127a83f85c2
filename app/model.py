import datetime

from pydantic import BaseModel, ConfigDict, Field


class PaymentRequest(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date: datetime.date
    channel_type: str = Field(alias="channelType")
    user_name: str = Field(alias="userName")
    upi_id: str = Field(alias="upiId")
    amount: float
    status: str
