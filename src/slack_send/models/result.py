"""
Module: result.py
Description: Normalized outcome of a delivery.

Both delivery strategies return a DeliveryResult so the dispatcher can
project either a Web API response or a webhook response onto the same
set of job outputs.
"""

import json
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class DeliveryResult(BaseModel):
    """
    Outcome of a single delivery attempt.

    Attributes:
        ok: Whether the remote side accepted the content
        response: Raw response data or serialized error (JSON-compatible)
        channel_id: Channel of a posted message, when the response has one
        thread_ts: Timestamp of the parent message of a thread
        ts: Timestamp of a posted message
    """

    model_config = ConfigDict(frozen=True)

    ok: bool = Field(..., description="Whether the delivery succeeded")
    response: Any = Field(default=None, description="Response body or error details")
    channel_id: Optional[str] = Field(default=None, description="Channel ID from the response")
    thread_ts: Optional[str] = Field(default=None, description="Thread timestamp from the response")
    ts: Optional[str] = Field(default=None, description="Message timestamp from the response")

    def outputs(self) -> List[Tuple[str, Any]]:
        """
        Project the result onto job outputs.

        Returns:
            Ordered (name, value) pairs; optional fields only when present
        """
        pairs: List[Tuple[str, Any]] = [
            ("ok", self.ok),
            ("response", json.dumps(self.response)),
        ]
        for name in ("channel_id", "thread_ts", "ts"):
            value = getattr(self, name)
            if value:
                pairs.append((name, value))
        return pairs
