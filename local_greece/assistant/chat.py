"""
Local Greece - AI travel assistant

Answers travel questions with Gemini, grounded on Google Maps. When the
user's location is known it is passed as a retrieval hint so suggestions
are nearby. Places cited by the model come back as PlaceCards.

Failures never reach the caller: they are logged and the user gets a short
apology instead.

Usage:
    assistant = TravelAssistant.from_config(config)
    reply = assistant.ask("Where can I eat fresh fish?", location=user_coords)
    print(reply.text)
    for place in reply.places:
        print(place.title, place.uri)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Literal

from google import genai

from local_greece.geo.bounds import Coords
from local_greece.shared.config import AssistantConfig, Settings
from local_greece.shared.generation import GenerationGuard

logger = logging.getLogger(__name__)

Role = Literal["user", "model"]


@dataclass(frozen=True)
class PlaceCard:
    """A place the answer was grounded on."""

    title: str
    uri: str


@dataclass(frozen=True)
class AssistantReply:
    """One turn of the conversation."""

    role: Role
    text: str
    places: tuple[PlaceCard, ...] = ()
    failed: bool = False


@dataclass
class Conversation:
    """Message history shown in the chat panel."""

    messages: list[AssistantReply] = field(default_factory=list)

    def add(self, message: AssistantReply) -> AssistantReply:
        self.messages.append(message)
        return message


def _extract_places(response: Any) -> tuple[PlaceCard, ...]:
    """Pull Maps grounding chunks out of a generate_content response."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return ()
    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or []

    places = []
    for chunk in chunks:
        source = getattr(chunk, "maps", None) or getattr(chunk, "web", None)
        uri = getattr(source, "uri", None)
        if not uri:
            continue
        places.append(PlaceCard(title=getattr(source, "title", None) or uri, uri=uri))
    return tuple(places)


class TravelAssistant:
    """Chat assistant for travel questions about Greece."""

    def __init__(
        self,
        api_key: str | None,
        settings: AssistantConfig | None = None,
        client: Any = None,
    ):
        """
        Initialize the assistant.

        Args:
            api_key: Gemini API key; without one every question gets the apology reply
            settings: Model, system instruction and canned texts
            client: Pre-built genai client (mainly for tests)
        """
        self.api_key = api_key
        self.settings = settings or AssistantConfig()
        self._client = client
        self._guard = GenerationGuard()
        self.conversation = Conversation()
        self.conversation.add(AssistantReply(role="model", text=self.settings.greeting))

    @classmethod
    def from_config(cls, config: Settings) -> TravelAssistant:
        return cls(api_key=config.gemini_api_key, settings=config.assistant)

    @property
    def client(self) -> Any:
        if self._client is None:
            if not self.api_key:
                raise RuntimeError("GEMINI_API_KEY not found in environment variables.")
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def build_request_config(self, location: Coords | None = None) -> dict[str, Any]:
        """Request config: Maps grounding tool, persona, optional location hint."""
        config: dict[str, Any] = {
            "tools": [{"google_maps": {}}],
            "system_instruction": self.settings.system_instruction,
        }
        if location is not None:
            config["tool_config"] = {
                "retrieval_config": {
                    "lat_lng": {
                        "latitude": location.latitude,
                        "longitude": location.longitude,
                    }
                }
            }
        return config

    def reset(self) -> None:
        """Start over with just the greeting; replies still in flight are dropped."""
        self._guard.invalidate()
        self.conversation = Conversation()
        self.conversation.add(AssistantReply(role="model", text=self.settings.greeting))

    def _begin(self, question: str) -> int | None:
        if not question or not question.strip():
            return None
        self.conversation.add(AssistantReply(role="user", text=question))
        return self._guard.generation

    def _failed(self, token: int, error: Exception) -> AssistantReply:
        logger.error(
            f"Assistant request failed: {error}",
            extra={"model": self.settings.model, "error": str(error)},
            exc_info=True,
        )
        return self._record(
            token, AssistantReply(role="model", text=self.settings.error_text, failed=True)
        )

    def _answered(self, token: int, response: Any, location: Coords | None) -> AssistantReply:
        places = _extract_places(response)
        text = getattr(response, "text", None) or self.settings.fallback_text

        logger.info(
            "Assistant answered",
            extra={"model": self.settings.model, "places": len(places), "located": bool(location)},
        )
        return self._record(token, AssistantReply(role="model", text=text, places=places))

    def _record(self, token: int, reply: AssistantReply) -> AssistantReply:
        if self._guard.is_current(token):
            self.conversation.add(reply)
        else:
            logger.debug("Discarding stale assistant reply", extra={"generation": token})
        return reply

    def ask(self, question: str, location: Coords | None = None) -> AssistantReply | None:
        """
        Ask a question and record both turns in the conversation.

        Args:
            question: The user's message; blank messages are ignored
            location: User position for nearby suggestions

        Returns:
            The model's reply, or None if the question was blank
        """
        token = self._begin(question)
        if token is None:
            return None

        try:
            response = self.client.models.generate_content(
                model=self.settings.model,
                contents=question,
                config=self.build_request_config(location),
            )
        except Exception as e:
            return self._failed(token, e)

        return self._answered(token, response, location)

    async def ask_async(
        self, question: str, location: Coords | None = None
    ) -> AssistantReply | None:
        """Like `ask`, on the SDK's async client. Replies superseded by `reset` are not recorded."""
        token = self._begin(question)
        if token is None:
            return None

        try:
            response = await self.client.aio.models.generate_content(
                model=self.settings.model,
                contents=question,
                config=self.build_request_config(location),
            )
        except Exception as e:
            return self._failed(token, e)

        return self._answered(token, response, location)
