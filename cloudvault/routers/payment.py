from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from cloudvault.database import get_db
from cloudvault.dependencies import get_current_user
from cloudvault.models.user_model import User
from cloudvault.schemas.payment_schema import CheckoutRequest, CheckoutResponse
from cloudvault.services.payment import create_checkout_session

router = APIRouter()

@router.post("/create-checkout-session", response_model=CheckoutResponse,
             summary="One-time checkout for premium storage",
             responses={
                 404: {"description": "File not found"},
                 500: {"description": "Payment session failed"},
             })
def checkout(request: Optional[CheckoutRequest] = None, user: User = Depends(get_current_user),
             db: Session = Depends(get_db)):
    file_id = request.fileId if request else None
    return {"url": create_checkout_session(db, user.id, file_id)}
