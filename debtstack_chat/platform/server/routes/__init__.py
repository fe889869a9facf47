from fastapi import APIRouter

from debtstack_chat.agents.chat.routes import chat_router, search_router
from debtstack_chat.market.routes import market_router
from debtstack_chat.platform.server.routes.base import base_router

root = APIRouter()
root.include_router(base_router)
root.include_router(chat_router)
root.include_router(search_router)
root.include_router(market_router)
