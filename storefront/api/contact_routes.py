from fastapi import APIRouter, Depends, HTTPException

from storefront.auth.dependencies import get_api_client
from storefront.schemas.user import ContactForm
from storefront.services.api_client import ApiClient, ApiError

router = APIRouter()


@router.post("")
async def submit_contact_form(form: ContactForm, client: ApiClient = Depends(get_api_client)):
    """Forward the contact form to the backend"""
    try:
        data = await client.submit_contact_form(form.model_dump(exclude_none=True))
    except ApiError as e:
        raise HTTPException(status_code=e.status_code or 400, detail=e.message)
    return {"message": data.get("message") or "Thanks! We'll get back to you soon."}
