import logging
from typing import List

from firebase_admin.exceptions import FirebaseError

from .errors import DeliveryError
from .schemas import BatchResult, MessageEnvelope, TokenResult
from .transport import FcmTransport

logger = logging.getLogger(__name__)


def _token_result(token: str, response) -> TokenResult:
    if response.success:
        return TokenResult(token=token, success=True, messageId=response.message_id)

    error = response.exception
    return TokenResult(
        token=token,
        success=False,
        error=str(error) if error else "unknown error",
        errorCode=getattr(error, 'code', None),
    )


class Dispatcher:
    """Sends envelopes through the messaging transport. Never retries."""

    def __init__(self, transport: FcmTransport):
        self.transport = transport

    async def send_one(self, envelope: MessageEnvelope) -> str:
        """
        Send a single-recipient envelope.

        Returns:
            The message ID assigned by FCM

        Raises:
            DeliveryError: FCM rejected the message
        """
        try:
            message_id = await self.transport.send(envelope)
        except (FirebaseError, ValueError) as e:
            logger.error(f"Error sending {envelope.kind.value} notification: {str(e)}")
            raise DeliveryError(f"Failed to send notification: {str(e)}") from e

        logger.info(f"{envelope.kind.value.capitalize()} notification sent: {message_id}")
        return message_id

    async def send_batch(self, envelope: MessageEnvelope, tokens: List[str]) -> BatchResult:
        """
        Send one envelope to many tokens in a single multicast call.

        Args:
            envelope: The batch envelope
            tokens: Recipient tokens; the result keeps this order

        Returns:
            BatchResult whose responses[i] is the outcome for tokens[i]

        Raises:
            DeliveryError: the multicast call itself failed
        """
        tokens = list(tokens)
        try:
            batch_response = await self.transport.send_multicast(envelope, tokens)
        except (FirebaseError, ValueError) as e:
            logger.error(f"Error sending batch notifications: {str(e)}")
            raise DeliveryError(f"Failed to send batch notifications: {str(e)}") from e

        responses = list(batch_response.responses)
        if len(responses) != len(tokens):
            logger.error(f"Batch returned {len(responses)} responses for {len(tokens)} tokens")
            raise DeliveryError("Batch response does not match the token list")

        results = [_token_result(token, response) for token, response in zip(tokens, responses)]
        success_count = sum(1 for result in results if result.success)
        failure_count = len(results) - success_count

        logger.info(f"Batch sent. Success: {success_count}, Failed: {failure_count}")
        return BatchResult(
            successCount=success_count,
            failureCount=failure_count,
            responses=results,
        )
