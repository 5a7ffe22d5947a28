"""
Ledger mirror - best-effort copies of the human's moves to a remote ledger.

The local match is authoritative. A sink is told about each committed
human play or draw after the fact; whatever happens to that notification
(slow network, HTTP error, malformed reply) is logged and never reaches
the engine.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from concurrent.futures import ThreadPoolExecutor
import logging

import requests

from ..config import WHOT_LEDGER_URL

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerEvent:
    """
    One committed move.

    action is "play" or "draw". card_index is the card's position in the
    player's hand before it was played. chosen_shape is set for Whot plays.
    """
    action: str
    card_index: int | None = None
    chosen_shape: str | None = None
    player_id: str | None = None


class LedgerSink(ABC):
    """Receives committed moves. notify() must return promptly."""

    @abstractmethod
    def notify(self, event: LedgerEvent) -> None:
        pass


class NullLedgerSink(LedgerSink):
    """Drops every event. Used when no ledger is configured."""

    def notify(self, event: LedgerEvent) -> None:
        return None


class RecordingLedgerSink(LedgerSink):
    """Keeps events in memory, for tests and debugging."""

    def __init__(self):
        self.events: list[LedgerEvent] = []

    def notify(self, event: LedgerEvent) -> None:
        self.events.append(event)


class GraphQLLedgerSink(LedgerSink):
    """
    Posts each event as a GraphQL mutation.

    Mutations:
        mutation { playCard(cardIndex: 2, chosenSuit: "circle") }
        mutation { drawCard }

    Requests go out one at a time on a single worker thread, in the
    order notify() was called. With background=False they are sent inline.
    """

    def __init__(
        self,
        endpoint: str,
        timeout: float = 5.0,
        background: bool = True,
        http: requests.Session | None = None,
    ):
        self.endpoint = endpoint
        self.timeout = timeout
        self.background = background
        self.http = http or requests.Session()
        self._worker = (
            ThreadPoolExecutor(max_workers=1, thread_name_prefix="ledger")
            if background else None
        )

    @staticmethod
    def build_mutation(event: LedgerEvent) -> str:
        if event.action == "draw":
            return "mutation { drawCard }"
        suit_param = f', chosenSuit: "{event.chosen_shape}"' if event.chosen_shape else ""
        return f"mutation {{ playCard(cardIndex: {event.card_index}{suit_param}) }}"

    def notify(self, event: LedgerEvent) -> None:
        mutation = self.build_mutation(event)
        if self._worker is None:
            self._send(mutation)
            return
        self._worker.submit(self._send, mutation)

    def close(self) -> None:
        """Wait for queued mutations to be sent and stop the worker."""
        if self._worker is not None:
            self._worker.shutdown(wait=True)

    def _send(self, mutation: str) -> bool:
        """POST the mutation. Returns True when the ledger accepted it."""
        try:
            response = self.http.post(
                self.endpoint,
                json={"query": mutation},
                timeout=self.timeout,
            )
            response.raise_for_status()
            body = response.json()
        except requests.RequestException as e:
            logger.warning("Ledger request failed: %s", e)
            return False
        except ValueError:
            logger.warning("Ledger returned a non-JSON response")
            return False

        if body.get("errors"):
            logger.warning("Ledger rejected mutation: %s", body["errors"])
            return False
        return True


def create_ledger_sink(endpoint: str | None = None) -> LedgerSink:
    """GraphQL sink when an endpoint is given or configured, else a null sink."""
    url = endpoint or WHOT_LEDGER_URL
    if url:
        return GraphQLLedgerSink(url)
    return NullLedgerSink()
