"""
Function Invoker

Triggers Lambda functions asynchronously (``InvocationType='Event'``).
The function name is the configured prefix plus the caller's suffix.
"""

import logging
from typing import Any, Dict

from ..config import FacadeConfig
from ..utils import to_json

logger = logging.getLogger(__name__)

ASYNC_INVOCATION = "Event"


class FunctionInvoker:
    """Pass-through facade over Lambda Invoke."""

    def __init__(self, config: FacadeConfig, lambda_client):
        """Initialize invoker.

        Args:
            config: Facade configuration (function_prefix)
            lambda_client: boto3 Lambda client
        """
        self.config = config
        self.lambda_client = lambda_client

    def resolve_function_name(self, suffix: str) -> str:
        """``'sendReminder'`` -> ``'StellasVenue-prod-sendReminder'`` with the default prefix."""
        return f"{self.config.require('function_prefix')}{suffix}"

    def invoke_async(self, function_name_suffix: str, payload: Any) -> Dict[str, Any]:
        """
        Queue an asynchronous invocation.

        Only confirms Lambda accepted the request (StatusCode 202); the
        function's result is never awaited.

        Returns:
            Raw Invoke response
        """
        function_name = self.resolve_function_name(function_name_suffix)
        try:
            response = self.lambda_client.invoke(
                FunctionName=function_name,
                InvocationType=ASYNC_INVOCATION,
                Payload=to_json(payload).encode('utf-8'),
            )
        except Exception as e:
            logger.error(f"Async invoke of {function_name} failed: {e}")
            raise
        logger.info(f"Queued {function_name} (status {response.get('StatusCode')})")
        return response
