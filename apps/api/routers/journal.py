"""Journal API Endpoints."""
from fastapi import APIRouter, Depends
from typing import List

from core.auth import RequestContext, get_request_context
from schemas import JournalEntryCreate, JournalEntryResponse
from services import journal

router = APIRouter(prefix="/api/journal", tags=["journal"])


@router.get("", response_model=List[JournalEntryResponse])
def list_journal_entries(ctx: RequestContext = Depends(get_request_context)):
    return journal.list_entries(ctx.db, ctx.user_id)


@router.post("", response_model=JournalEntryResponse, status_code=201)
def create_journal_entry(
    entry: JournalEntryCreate,
    ctx: RequestContext = Depends(get_request_context),
):
    """Add a journal entry with mood and energy ratings (1-10)."""
    return journal.create_entry(ctx.db, ctx.user_id, entry)
