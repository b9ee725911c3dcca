"""
FastAPI router for profile and goal endpoints.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from common.utils import success_response
from common.utils.exceptions import NotFoundException, ServiceUnavailableException, ValidationException
from fittrack.dependencies import get_data_store
from fittrack.schemas.profile import GoalRequest, OnboardingRequest, ProfileRequest
from fittrack.tracking.data_store import DataStore
from fittrack.tracking.models import Goal, Profile
from fittrack.tracking.validation import ProfileValidator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["profile"])


def _validated_profile(body: ProfileRequest) -> Profile:
    errors = ProfileValidator.validate_profile(body.model_dump())
    if errors:
        raise ValidationException(errors=ProfileValidator.as_error_list(errors))
    return Profile(**body.model_dump())


def _validated_goal(body: GoalRequest) -> Goal:
    errors = ProfileValidator.validate_goal(body.model_dump())
    if errors:
        raise ValidationException(errors=ProfileValidator.as_error_list(errors))
    return Goal(**body.model_dump())


@router.get("")
async def get_profile(store: Annotated[DataStore, Depends(get_data_store)]):
    """Get the user's profile."""
    await store.load_user_data()
    if store.profile is None:
        raise NotFoundException("Profile not found", code="PROFILE_NOT_FOUND")
    return success_response(store.profile.model_dump())


@router.put("")
async def save_profile(
    body: ProfileRequest,
    store: Annotated[DataStore, Depends(get_data_store)],
):
    """Create or update the user's profile."""
    saved = await store.save_profile(_validated_profile(body))
    if saved is None:
        raise ServiceUnavailableException()
    return success_response(saved.model_dump(), message="Profile saved")


@router.get("/goal")
async def get_goal(store: Annotated[DataStore, Depends(get_data_store)]):
    """Get the user's active goal."""
    await store.load_user_data()
    if store.goal is None:
        raise NotFoundException("Goal not found", code="GOAL_NOT_FOUND")
    return success_response(store.goal.model_dump())


@router.put("/goal")
async def save_goal(
    body: GoalRequest,
    store: Annotated[DataStore, Depends(get_data_store)],
):
    """Replace the user's active goal."""
    saved = await store.save_goal(_validated_goal(body))
    if saved is None:
        raise ServiceUnavailableException()
    return success_response(saved.model_dump(), message="Goal saved")


@router.post("/onboarding")
async def complete_onboarding(
    body: OnboardingRequest,
    store: Annotated[DataStore, Depends(get_data_store)],
):
    """
    Save profile and goal together.

    Both are validated first; nothing is stored if either has errors.
    """
    errors = {
        **ProfileValidator.validate_profile(body.profile.model_dump()),
        **ProfileValidator.validate_goal(body.goal.model_dump()),
    }
    if errors:
        raise ValidationException(errors=ProfileValidator.as_error_list(errors))

    profile = await store.save_profile(Profile(**body.profile.model_dump()))
    goal = await store.save_goal(Goal(**body.goal.model_dump()))
    if profile is None or goal is None:
        raise ServiceUnavailableException("Failed to save your information. Please try again.")

    logger.info(f"Onboarding completed for user {store.user_id}")
    return success_response({"profile": profile.model_dump(), "goal": goal.model_dump()})
