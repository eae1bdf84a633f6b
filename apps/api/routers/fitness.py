"""
Fitness Evaluation API Endpoints

Scores a submitted profile and returns the derived level and workout limits.
"""
from fastapi import APIRouter

from schemas import FitnessEvaluationResponse, ProfileInput
from services.fitness_engine.evaluator import evaluate_fitness

router = APIRouter(prefix="/v1/fitness", tags=["fitness"])


@router.post("/evaluate", response_model=FitnessEvaluationResponse)
def evaluate(profile: ProfileInput):
    """
    Evaluate a profile.
    
    Missing fields never fail the request; they simply contribute nothing
    to the score.
    """
    evaluation = evaluate_fitness(profile.to_record())
    return FitnessEvaluationResponse.model_validate(evaluation)
