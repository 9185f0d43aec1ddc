"""whatsapp-reader — parse and reconcile exported WhatsApp chat transcripts."""

from .merger import merge_conversations
from .models import Conversation, Message
from .parser import parse_transcript

__version__ = "0.1.0"

__all__ = [
    "Conversation",
    "Message",
    "merge_conversations",
    "parse_transcript",
]
