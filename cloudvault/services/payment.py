import logging
from typing import Optional

import requests
from sqlalchemy.orm import Session

from cloudvault.config import STRIPE_SECRET_KEY, STRIPE_API_URL, FRONTEND_URL, PREMIUM_PRICE, PREMIUM_CURRENCY
from cloudvault.errors import UpstreamError
from cloudvault.services.access import authorize_file

logger = logging.getLogger(__name__)

PRODUCT_NAME = "Premium Storage (One-time)"
PRODUCT_DESCRIPTION = "Unlock premium storage features"


def checkout_payload(user_id: int, file_id: Optional[int] = None) -> dict:
    return {
        "mode": "payment",
        "payment_method_types[0]": "card",
        "line_items[0][price_data][currency]": PREMIUM_CURRENCY,
        "line_items[0][price_data][product_data][name]": PRODUCT_NAME,
        "line_items[0][price_data][product_data][description]": PRODUCT_DESCRIPTION,
        "line_items[0][price_data][unit_amount]": PREMIUM_PRICE,
        "line_items[0][quantity]": 1,
        "success_url": f"{FRONTEND_URL}/payment-success?session_id={{CHECKOUT_SESSION_ID}}",
        "cancel_url": f"{FRONTEND_URL}/payment-cancel",
        "client_reference_id": str(user_id),
        "metadata[fileId]": "" if file_id is None else str(file_id),
    }


def create_checkout_session(db: Session, user_id: int, file_id: Optional[int] = None) -> str:
    if file_id is not None:
        authorize_file(db, user_id, file_id)

    if not STRIPE_SECRET_KEY:
        logger.error("STRIPE_SECRET_KEY is not configured")
        raise UpstreamError("Payment session failed")

    try:
        response = requests.post(
            f"{STRIPE_API_URL}/checkout/sessions",
            data=checkout_payload(user_id, file_id),
            auth=(STRIPE_SECRET_KEY, ""),
            timeout=10,
        )
    except requests.RequestException as e:
        logger.error("Payment provider unreachable: %s", e)
        raise UpstreamError("Payment session failed") from e

    if response.status_code >= 400:
        try:
            msg_error = response.json().get("error", {}).get("message", response.text)
        except ValueError:
            msg_error = response.text
        logger.error("Payment provider error %s: %s", response.status_code, msg_error)
        raise UpstreamError("Payment session failed")

    url = response.json().get("url")
    if not url:
        logger.error("Payment provider returned a session without a URL")
        raise UpstreamError("Payment session failed")

    logger.info("Checkout session created for user %s", user_id)
    return url
