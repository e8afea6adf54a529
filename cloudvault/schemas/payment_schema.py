from typing import Optional

from pydantic import BaseModel, Field


class CheckoutRequest(BaseModel):
    fileId: Optional[int] = Field(None, examples=[42], description="File the purchase is attached to")


class CheckoutResponse(BaseModel):
    url: str = Field(..., description="Hosted checkout page to redirect the user to")
