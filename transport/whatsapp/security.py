"""
WhatsApp Webhook Security

SECURITY BOUNDARY - verification handshake and Meta HMAC signature.
No flow imports. No retries. No logic.
"""

import hashlib
import hmac
from typing import Optional

from fastapi import HTTPException, Request, status


def compute_signature(body: bytes, app_secret: str) -> str:
    """X-Hub-Signature-256 value Meta would send for this body."""
    return "sha256=" + hmac.new(
        key=app_secret.encode("utf-8"),
        msg=body,
        digestmod=hashlib.sha256
    ).hexdigest()


async def verify_signature(
    request: Request,
    body: bytes,
    app_secret: Optional[str],
) -> bool:
    """
    Verify Meta HMAC-SHA256 signature on a WhatsApp webhook delivery.

    Verification is opt-in: without an app secret nothing is checked.

    Returns:
        True if a signature was checked, False if verification is disabled

    Raises:
        HTTPException(401): Missing signature
        HTTPException(403): Invalid signature
    """
    if not app_secret:
        return False

    signature = request.headers.get("X-Hub-Signature-256")
    if not signature:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-Hub-Signature-256 header"
        )

    # Compare (constant-time to prevent timing attacks)
    if not hmac.compare_digest(signature, compute_signature(body, app_secret)):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid signature"
        )
    return True


def verify_webhook_challenge(
    hub_mode: Optional[str],
    hub_challenge: Optional[str],
    hub_verify_token: Optional[str],
    expected_token: str,
) -> str:
    """
    Verify webhook subscription challenge from WhatsApp.

    WhatsApp calls GET /whatsapp/webhook with:
    - hub.mode=subscribe
    - hub.challenge=random_string
    - hub.verify_token=configured_token

    Returns:
        The challenge string to echo back

    Raises:
        HTTPException(403): Wrong mode, wrong token, or no token configured
    """
    if (
        hub_mode != "subscribe"
        or not expected_token
        or hub_verify_token is None
        or not hmac.compare_digest(hub_verify_token.encode(), expected_token.encode())
    ):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Webhook verification failed"
        )

    return hub_challenge or ""
