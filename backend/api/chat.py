"""Chat, completion, and conversation history API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import StreamingResponse

from api.dependencies import get_chat_service
from schemas import (
    ChatGPTRequest,
    ChatGPTResponse,
    ChatRequest,
    ChatResponse,
    ConversationResponse,
)
from services.chat_service import ChatService, ConversationNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])

_SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


@router.post("/chat", response_model=ChatResponse)
async def chat(body: ChatRequest, service: ChatService = Depends(get_chat_service)):
    """Send a message to the Perception assistant.

    Continues ``conversationId`` when given, otherwise starts a new
    conversation. ``suggestions`` lists extension features the reply mentions.
    """
    try:
        reply = await service.chat(body.user_id, body.message, body.conversation_id)
    except ConversationNotFoundError:
        raise HTTPException(status_code=404, detail="Conversation not found")
    except Exception:
        logger.error("Error in chat endpoint", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to process chat message")

    return ChatResponse(
        conversation_id=reply.conversation_id,
        message=reply.message,
        suggestions=reply.suggestions,
    )


@router.post("/chatgpt", response_model=ChatGPTResponse)
async def chatgpt(
    body: ChatGPTRequest,
    request: Request,
    service: ChatService = Depends(get_chat_service),
):
    """General-purpose completion with optional history and system prompt.

    With ``stream: true`` the reply is sent as server-sent events:
        data: {"content": "...", "done": false}
        data: {"content": "", "done": true, "fullResponse": "..."}
    """
    messages = service.build_messages(
        body.message,
        [(m.role, m.content) for m in body.conversation_history],
        body.system_prompt,
    )

    if body.stream:
        return StreamingResponse(
            service.stream(
                messages,
                temperature=body.temperature,
                max_tokens=body.max_tokens,
                is_disconnected=request.is_disconnected,
            ),
            media_type="text/event-stream",
            headers=_SSE_HEADERS,
        )

    try:
        result = await service.complete(
            messages, temperature=body.temperature, max_tokens=body.max_tokens
        )
    except Exception:
        logger.error("Error in chatgpt endpoint", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to process ChatGPT request")

    return ChatGPTResponse(message=result.content, usage=result.usage, model=result.model)


@router.get("/conversations/{user_id}", response_model=list[ConversationResponse])
def list_conversations(user_id: str, service: ChatService = Depends(get_chat_service)):
    """List a user's conversations."""
    return [
        ConversationResponse.model_validate(conv)
        for conv in service.list_conversations(user_id)
    ]


@router.get("/conversation/{conversation_id}", response_model=ConversationResponse)
def get_conversation(
    conversation_id: str, service: ChatService = Depends(get_chat_service)
):
    """Get a single conversation by id."""
    conversation = service.get_conversation(conversation_id)
    if conversation is None:
        raise HTTPException(status_code=404, detail="Conversation not found")
    return ConversationResponse.model_validate(conversation)
