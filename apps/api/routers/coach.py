"""
AI Coach API Router

Chat with the coach, conversation starters, and AI-generated templates.
"""

from fastapi import APIRouter, Depends

from core.auth import RequestContext, get_request_context
from schemas import (
    CoachChatRequest,
    CoachChatResponse,
    GenerateTemplateResponse,
    SuggestionsResponse,
    TemplateGenerationRequest,
)
from services import coach_chat, template_generator
from services.coach_suggestions import conversation_starters
from services.completion_client import CompletionClient, get_completion_client

router = APIRouter(prefix="/api/coach", tags=["AI Coach"])


@router.post("/chat", response_model=CoachChatResponse)
def chat_with_coach(
    request: CoachChatRequest,
    ctx: RequestContext = Depends(get_request_context),
    client: CompletionClient = Depends(get_completion_client),
):
    """
    Send a message to the AI coach and get a response.

    The coach sees a summary of your recent workouts, templates and
    personal records. Only the last 10 history messages are forwarded.
    """
    result = coach_chat.chat(
        ctx.db,
        client,
        user_id=ctx.user_id,
        message=request.message,
        history=request.history,
    )
    return CoachChatResponse(
        reply=result["reply"],
        suggested_follow_ups=result["suggested_follow_ups"],
    )


@router.get("/suggestions", response_model=SuggestionsResponse)
def get_suggested_questions(ctx: RequestContext = Depends(get_request_context)):
    """Conversation starters, depending on whether any workouts are logged."""
    return SuggestionsResponse(suggestions=conversation_starters(ctx.db, ctx.user_id))


@router.post("/generate-template", response_model=GenerateTemplateResponse)
def generate_template(
    request: TemplateGenerationRequest,
    ctx: RequestContext = Depends(get_request_context),
    client: CompletionClient = Depends(get_completion_client),
):
    """
    Generate a workout template with AI and save it to your templates.

    Retrying creates another template; the call is not idempotent.
    """
    result = template_generator.generate_template(ctx.db, client, ctx.user_id, request)
    return GenerateTemplateResponse(
        template_id=result["template_id"],
        template_name=result["template_name"],
    )
