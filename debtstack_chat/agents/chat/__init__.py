"""Credit chat assistant.

Streams answers about corporate debt, calling the DebtStack API and live SEC
research as tools.
"""

from .agent import ChatAgentBuilder, ChatComponents
from .orchestrator import ChatOrchestrator, ConversationTooLongError

__all__ = ["ChatAgentBuilder", "ChatComponents", "ChatOrchestrator", "ConversationTooLongError"]
