"""
Owner Dashboard Routes

Every request enters the dashboard (loads the owner's meals), applies at most
one mutation through the MealWorkflow, and returns the dashboard document.
An unconfirmed delete is refused before anything is fetched.
"""
from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from typing import Any, Dict

from storefront.auth.dependencies import get_api_client, get_current_owner
from storefront.core.constants import TIME_SLOTS, TimeOfDay
from storefront.schemas.pages import OwnerDashboardPage, TimeSlot
from storefront.schemas.user import SessionUser
from storefront.services.api_client import ApiClient
from storefront.services.meal_workflow import DELETE_CONFIRMATION, MealWorkflow

router = APIRouter()


def _dashboard(workflow: MealWorkflow, user: SessionUser) -> OwnerDashboardPage:
    return OwnerDashboardPage(
        user=user,
        tab=workflow.active_tab,
        time_slots=[TimeSlot(key=key, **slot) for key, slot in TIME_SLOTS.items()],
        status=workflow.controller.status,
        error=workflow.error or workflow.controller.error,
        success_message=workflow.success_message,
        form_open=workflow.form_open,
        editing_id=workflow.editing.id if workflow.editing else None,
        form=workflow.form,
        form_errors=workflow.form_errors,
        items=workflow.tab_items,
    )


def _respond(workflow: MealWorkflow, user: SessionUser, ok: bool):
    page = _dashboard(workflow, user)
    if ok:
        return page
    status_code = 422 if workflow.form_errors else 400
    return JSONResponse(status_code=status_code, content=jsonable_encoder(page))


async def _enter(client: ApiClient, tab: TimeOfDay) -> MealWorkflow:
    workflow = MealWorkflow(client)
    workflow.select_tab(tab)
    await workflow.controller.load()
    return workflow


@router.get("", response_model=OwnerDashboardPage)
async def owner_dashboard(
    tab: TimeOfDay = TimeOfDay.morning,
    client: ApiClient = Depends(get_api_client),
    user: SessionUser = Depends(get_current_owner),
):
    """Owner's meals for one time-of-day tab"""
    workflow = await _enter(client, tab)
    workflow.controller.close()
    return _dashboard(workflow, user)


@router.post("", response_model=OwnerDashboardPage)
async def create_meal(
    form: Dict[str, Any] = Body(...),
    tab: TimeOfDay = TimeOfDay.morning,
    client: ApiClient = Depends(get_api_client),
    user: SessionUser = Depends(get_current_owner),
):
    """Add a meal to the active tab"""
    workflow = await _enter(client, tab)
    workflow.open_form()
    ok = await workflow.create(form)
    workflow.controller.close()
    return _respond(workflow, user, ok)


@router.put("/{meal_id}", response_model=OwnerDashboardPage)
async def update_meal(
    meal_id: str,
    form: Dict[str, Any] = Body(...),
    tab: TimeOfDay = TimeOfDay.morning,
    client: ApiClient = Depends(get_api_client),
    user: SessionUser = Depends(get_current_owner),
):
    """Save edits to one of the owner's meals"""
    workflow = await _enter(client, tab)
    item = workflow.find(meal_id)
    if item:
        workflow.start_edit(item)
    ok = await workflow.update(meal_id, form)
    workflow.controller.close()
    return _respond(workflow, user, ok)


@router.delete("/{meal_id}", response_model=OwnerDashboardPage)
async def delete_meal(
    meal_id: str,
    confirm: bool = False,
    tab: TimeOfDay = TimeOfDay.morning,
    client: ApiClient = Depends(get_api_client),
    user: SessionUser = Depends(get_current_owner),
):
    """Delete a meal; the caller must confirm with `confirm=true`"""
    if not confirm:
        raise HTTPException(status_code=409, detail=DELETE_CONFIRMATION)

    workflow = await _enter(client, tab)
    ok = await workflow.delete(meal_id, confirm=lambda message: True)
    workflow.controller.close()
    return _respond(workflow, user, ok)


@router.post("/{meal_id}/availability", response_model=OwnerDashboardPage)
async def toggle_availability(
    meal_id: str,
    tab: TimeOfDay = TimeOfDay.morning,
    client: ApiClient = Depends(get_api_client),
    user: SessionUser = Depends(get_current_owner),
):
    """Flip a meal between available and sold out"""
    workflow = await _enter(client, tab)
    item = workflow.find(meal_id)
    if not item:
        workflow.controller.close()
        raise HTTPException(status_code=404, detail="Meal not found")
    ok = await workflow.toggle_availability(item)
    workflow.controller.close()
    return _respond(workflow, user, ok)
