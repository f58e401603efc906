"""
Event Publisher

Publishes facts to the configured EventBridge bus. Fire-and-forget: the
caller gets the PutEvents acknowledgment, never anything about downstream
consumers.
"""

import logging
from typing import Any, Dict

from ..config import FacadeConfig
from ..utils import to_json

logger = logging.getLogger(__name__)


class EventPublisher:
    """Pass-through facade over EventBridge PutEvents."""

    def __init__(self, config: FacadeConfig, events_client):
        """Initialize publisher.

        Args:
            config: Facade configuration (event_bus_name, event_source)
            events_client: boto3 EventBridge client
        """
        self.config = config
        self.events = events_client

    def build_entry(self, event_name: Any, payload: Any) -> Dict[str, str]:
        """The single PutEvents entry for one fact."""
        return {
            'Source': self.config.event_source,
            'DetailType': str(event_name),
            'Detail': to_json(payload),
            'EventBusName': self.config.event_bus_name,
        }

    def publish(self, event_name: Any, payload: Any) -> Dict[str, Any]:
        """
        Emit one event.

        Entries rejected by EventBridge (``FailedEntryCount`` > 0) are
        logged as warnings; the response is returned either way.

        Returns:
            Raw PutEvents response
        """
        entry = self.build_entry(event_name, payload)
        try:
            response = self.events.put_events(Entries=[entry])
        except Exception as e:
            logger.error(f"PutEvents '{entry['DetailType']}' to {self.config.event_bus_name} failed: {e}")
            raise

        if response.get('FailedEntryCount'):
            logger.warning(
                f"Event '{entry['DetailType']}' rejected by {self.config.event_bus_name}: {response.get('Entries')}"
            )
        else:
            logger.info(f"Published event '{entry['DetailType']}' to {self.config.event_bus_name}")
        return response
