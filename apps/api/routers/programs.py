"""
Program Suggestion API Endpoints

The caller supplies the catalog (in its default rating/recency order) and,
optionally, the user's profile.
"""
from fastapi import APIRouter
from typing import List

from core.config import settings
from core.exceptions import ValidationError
from schemas import (
    ProgramRatingRequest,
    ProgramRatingResponse,
    ProgramSuggestionResponse,
    ProgramSuggestionsRequest,
)
from services.fitness_engine.program_matcher import suggest_programs, update_program_rating

router = APIRouter(prefix="/v1/programs", tags=["programs"])


@router.post("/suggestions", response_model=List[ProgramSuggestionResponse])
def get_program_suggestions(request: ProgramSuggestionsRequest):
    """Ranked, explained program suggestions for a profile."""
    profile = request.profile.to_record() if request.profile is not None else None
    suggestions = suggest_programs(
        profile,
        [p.to_record() for p in request.programs],
        limit=request.limit or settings.SUGGESTION_LIMIT,
    )
    return [ProgramSuggestionResponse.model_validate(s) for s in suggestions]


@router.post("/rating", response_model=ProgramRatingResponse)
def rate_program(request: ProgramRatingRequest):
    """Fold one rating into a program's running average."""
    try:
        average, count = update_program_rating(request.average, request.count, request.rating)
    except ValueError as e:
        raise ValidationError(str(e), field="rating")
    return ProgramRatingResponse(average=average, count=count)
