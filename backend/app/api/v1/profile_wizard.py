"""
Profile Wizard API v1 Endpoints

A chat-style session that collects the nine profile answers and posts the
job when the last one is in.
"""

from fastapi import APIRouter, Depends, status

from app.api.deps import get_wizard_service
from app.services.wizard_service import WizardService
from app.schemas.wizard import AnswerRequest, WizardSessionResponse

router = APIRouter(prefix="/profile-wizard", tags=["profile-wizard"])


@router.post("", response_model=WizardSessionResponse, status_code=status.HTTP_201_CREATED)
async def start_session(service: WizardService = Depends(get_wizard_service)):
    session_id, state = await service.start()
    return WizardSessionResponse.build(session_id, state, service.machine)


@router.get("/{session_id}", response_model=WizardSessionResponse)
async def get_session(session_id: str, service: WizardService = Depends(get_wizard_service)):
    """Current transcript; poll after an answer to see the next prompt."""
    state = await service.get(session_id)
    return WizardSessionResponse.build(session_id, state, service.machine)


@router.post("/{session_id}/answer", response_model=WizardSessionResponse)
async def answer_question(
    session_id: str,
    answer: AnswerRequest,
    service: WizardService = Depends(get_wizard_service)
):
    state = await service.answer(session_id, answer.value)
    return WizardSessionResponse.build(session_id, state, service.machine)


@router.post("/{session_id}/skip", response_model=WizardSessionResponse)
async def skip_question(session_id: str, service: WizardService = Depends(get_wizard_service)):
    state = await service.skip(session_id)
    return WizardSessionResponse.build(session_id, state, service.machine)


@router.post("/{session_id}/retry", response_model=WizardSessionResponse)
async def retry_submission(session_id: str, service: WizardService = Depends(get_wizard_service)):
    """Submit the collected profile again after a failed attempt."""
    state = await service.retry(session_id)
    return WizardSessionResponse.build(session_id, state, service.machine)
