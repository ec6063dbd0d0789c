"""
Twilio Webhook Receiver

FastAPI router for the two carrier callbacks:

- POST /     WhatsApp (rich channel): normalize → gateway handler; the reply
             goes out-of-band through the Messages API
- POST /sms  SMS: in-band TwiML echo of the received text; never touches
             the gateway core
"""

import logging

from fastapi import APIRouter, HTTPException, Request, Response, status
from twilio.twiml.messaging_response import MessagingResponse

from gateway.handler import HandlerStatus, InboundMessageHandler
from infra.bootstrap import bootstrap_gateway

from .normalize import NormalizationError, normalize_form

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Twilio Transport"])


def get_inbound_handler() -> InboundMessageHandler:
    """Get the process-wide handler (singleton)."""
    return bootstrap_gateway().get_handler()


# ============================================================================
# WHATSAPP WEBHOOK (Classified replies)
# ============================================================================

@router.post("/")
async def whatsapp_webhook(request: Request) -> Response:
    """
    Receive a WhatsApp message forwarded by Twilio.

    Flow:
    1. Parse form fields
    2. Normalize to InboundMessage
    3. Hand off to the gateway (classify, answer, deliver)
    4. Map the outcome to a status code

    Returns:
        200 for an empty body (acknowledged, nothing sent)
        204 once the reply has been sent

    Raises:
        HTTPException(400): Malformed webhook (no From)
        HTTPException(500): Storage, delivery or unexpected failure
    """

    # Step 1: Form fields
    try:
        form = await request.form()
    except Exception as e:
        logger.error(f"Failed to read webhook form: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Failed to read request"
        )

    # Empty body: nothing to answer, acknowledged whoever sent it
    if not str(form.get("Body") or "").strip():
        logger.info("Empty message body, acknowledging without reply")
        return Response(status_code=status.HTTP_200_OK)

    # Step 2: Normalize
    try:
        message = normalize_form(form)
    except NormalizationError as e:
        logger.warning(f"Normalization failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Normalization failed: {str(e)}"
        )

    # Step 3: Gateway
    result = await get_inbound_handler().handle(message)

    # Step 4: Outcome
    if result.status == HandlerStatus.IGNORED:
        return Response(status_code=status.HTTP_200_OK)

    if result.status == HandlerStatus.FAILED:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Message processing failed"
        )

    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============================================================================
# SMS WEBHOOK (Echo)
# ============================================================================

@router.post("/sms")
async def sms_webhook(request: Request) -> Response:
    """
    Receive an SMS and echo it back in-band as TwiML.

    Shares no state with the WhatsApp path.
    """
    try:
        form = await request.form()
        user_number = form.get("From")
        user_message = form.get("Body") or ""
        logger.info(f"SMS from {user_number}: {user_message}")

        twiml = MessagingResponse()
        twiml.message(f"Hi! You said: {user_message}")

        return Response(content=str(twiml), media_type="text/xml")
    except Exception as e:
        logger.error(f"SMS webhook error: {e}", exc_info=True)
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
