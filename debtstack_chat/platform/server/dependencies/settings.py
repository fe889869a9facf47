from fastapi import Request

from debtstack_chat.platform.settings import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
