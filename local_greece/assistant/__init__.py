from local_greece.assistant.chat import AssistantReply, Conversation, PlaceCard, TravelAssistant

__all__ = ["AssistantReply", "Conversation", "PlaceCard", "TravelAssistant"]
