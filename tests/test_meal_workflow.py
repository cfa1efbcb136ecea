import asyncio
import json

import pytest

from storefront.core.constants import TimeOfDay
from storefront.services.list_controller import ListStatus
from storefront.services.meal_workflow import (
    DELETE_CONFIRMATION,
    MealValidationError,
    MealWorkflow,
    normalize_tags,
    validate_meal_form,
)

VALID_FORM = {
    "name": "Sabudana Khichdi",
    "description": "Tapioca pearls with peanuts",
    "price": "55",
    "category": "Maharashtrian",
    "preparationTime": "20",
    "image": "https://img.test/khichdi.jpg",
    "tags": "Vegetarian",
}


def sent_json(request):
    return json.loads(request.content)


@pytest.fixture
async def workflow(owner_api, backend):
    workflow = MealWorkflow(owner_api, notice_seconds=0.05)
    await workflow.controller.load()
    backend.requests.clear()
    return workflow


def test_tags_normalized_to_a_list():
    assert normalize_tags(None) == []
    assert normalize_tags("") == []
    assert normalize_tags("Vegan") == ["Vegan"]
    assert normalize_tags(["Vegan", "Spicy"]) == ["Vegan", "Spicy"]


def test_tags_must_be_names():
    with pytest.raises(MealValidationError) as excinfo:
        validate_meal_form(dict(VALID_FORM, tags=["Vegan", 3]), TimeOfDay.morning)

    assert excinfo.value.errors == {"tags": "Tags must be a list of tag names"}


def test_validation_reports_every_missing_field():
    with pytest.raises(MealValidationError) as excinfo:
        validate_meal_form({}, TimeOfDay.morning)

    assert excinfo.value.errors == {
        "name": "Item name is required",
        "price": "Price is required",
        "category": "Category is required",
        "preparationTime": "Preparation time is required",
        "description": "Description is required",
        "image": "Image URL is required",
    }


def test_validation_checks_ranges():
    form = dict(VALID_FORM, price="-1", preparationTime="0", category="Pizza")

    with pytest.raises(MealValidationError) as excinfo:
        validate_meal_form(form, TimeOfDay.morning)

    assert set(excinfo.value.errors) == {"price", "preparationTime", "category"}


def test_zero_price_is_allowed():
    payload = validate_meal_form(dict(VALID_FORM, price=0), TimeOfDay.evening)
    assert payload.price == 0
    assert payload.time_of_day == TimeOfDay.evening


async def test_missing_price_is_rejected_without_network_call(workflow, backend):
    form = dict(VALID_FORM)
    del form["price"]
    workflow.open_form()

    ok = await workflow.create(form)

    assert ok is False
    assert workflow.form_errors == {"price": "Price is required"}
    assert workflow.form_open
    assert backend.requests == []


@pytest.mark.parametrize(
    "field, value",
    [
        ("tags", [1, 2]),
        ("tags", 5),
        ("price", "nan"),
        ("price", "inf"),
        ("preparationTime", "inf"),
    ],
)
async def test_malformed_form_lands_in_form_errors(workflow, backend, field, value):
    workflow.open_form()

    ok = await workflow.create(dict(VALID_FORM, **{field: value}))

    assert ok is False
    assert set(workflow.form_errors) == {field}
    assert workflow.error is None
    assert backend.requests == []


async def test_create_posts_payload_for_active_tab_and_refetches(workflow, backend):
    workflow.select_tab(TimeOfDay.afternoon)
    workflow.open_form()

    ok = await workflow.create(VALID_FORM)

    assert ok is True
    post, refetch = backend.requests
    assert (post.method, backend.path_of(post)) == ("POST", "/meals")
    assert sent_json(post) == {
        "name": "Sabudana Khichdi",
        "description": "Tapioca pearls with peanuts",
        "price": 55.0,
        "image": "https://img.test/khichdi.jpg",
        "category": "Maharashtrian",
        "timeOfDay": "afternoon",
        "tags": ["Vegetarian"],
        "preparationTime": 20,
        "isAvailable": True,
    }
    assert (refetch.method, backend.path_of(refetch)) == ("GET", "/meals")
    assert workflow.success_message == "Meal added successfully!"
    assert not workflow.form_open
    assert [m.name for m in workflow.tab_items] == ["Sabudana Khichdi"]


async def test_success_notice_clears_itself(workflow):
    await workflow.create(VALID_FORM)
    assert workflow.success_message == "Meal added successfully!"

    await asyncio.sleep(0.15)

    assert workflow.success_message is None


async def test_failed_create_keeps_form_and_skips_refetch(workflow, backend):
    backend.fail("POST", "/meals", 400, {"errors": [{"msg": "Name already used"}, {"msg": "Image unreachable"}]})
    workflow.open_form()

    ok = await workflow.create(VALID_FORM)

    assert ok is False
    assert workflow.error == "Name already used, Image unreachable"
    assert workflow.form_open
    assert workflow.form["name"] == "Sabudana Khichdi"
    assert workflow.success_message is None
    assert len(backend.calls("GET")) == 0


async def test_submit_updates_item_under_edit(workflow, backend):
    item = workflow.find("m1")
    defaults = workflow.start_edit(item)
    assert defaults["name"] == "Masala Dosa"

    form = dict(VALID_FORM, name="Mysore Masala Dosa", category="South Indian")
    ok = await workflow.submit(form)

    assert ok is True
    put = backend.calls("PUT")[0]
    assert backend.path_of(put) == "/meals/m1"
    assert sent_json(put)["name"] == "Mysore Masala Dosa"
    assert workflow.success_message == "Meal updated successfully!"
    assert workflow.editing is None
    assert workflow.find("m1").name == "Mysore Masala Dosa"


async def test_confirmed_delete_removes_item_after_refetch(workflow, backend):
    prompts = []

    def confirm(message):
        prompts.append(message)
        return True

    ok = await workflow.delete("m2", confirm)

    assert ok is True
    assert prompts == [DELETE_CONFIRMATION]
    delete, refetch = backend.requests
    assert (delete.method, backend.path_of(delete)) == ("DELETE", "/meals/m2")
    assert refetch.method == "GET"
    assert workflow.find("m2") is None
    assert workflow.success_message == "Meal deleted successfully!"


async def test_declined_delete_issues_no_call(workflow, backend):
    ok = await workflow.delete("m2", lambda message: False)

    assert ok is False
    assert backend.requests == []
    assert workflow.find("m2") is not None


async def test_failed_delete_surfaces_message(workflow, backend):
    backend.fail("DELETE", "/meals/m2", 403, {"message": "Not your meal"})

    ok = await workflow.delete("m2", lambda message: True)

    assert ok is False
    assert workflow.error == "Not your meal"
    assert backend.calls("GET") == []


async def test_toggle_sends_full_item_with_availability_flipped(workflow, backend):
    item = workflow.find("m3")

    ok = await workflow.toggle_availability(item)

    assert ok is True
    put, refetch = backend.requests
    body = sent_json(put)
    assert backend.path_of(put) == "/meals/m3"
    assert body["isAvailable"] is False
    assert body["_id"] == "m3"
    assert body["name"] == "Vada Pav"
    assert body["timeOfDay"] == "evening"
    assert refetch.method == "GET"
    assert workflow.find("m3").is_available is False
    assert workflow.success_message is None
    # the in-memory item object itself is never edited
    assert item.is_available is True


async def test_toggle_failure_uses_server_message(workflow, backend):
    backend.fail("PUT", "/meals/m1", 500, {})

    ok = await workflow.toggle_availability(workflow.find("m1"))

    assert ok is False
    assert workflow.error == "Failed to update meal"


async def test_tab_items_follow_active_tab(workflow):
    assert [m.id for m in workflow.tab_items] == ["m1", "m2"]
    workflow.select_tab("evening")
    assert [m.id for m in workflow.tab_items] == ["m3"]


async def test_cancel_closes_form_and_clears_error(workflow, backend):
    backend.fail("POST", "/meals", 500)
    workflow.open_form()
    await workflow.create(VALID_FORM)
    assert workflow.error

    workflow.cancel()

    assert not workflow.form_open
    assert workflow.error is None
    assert workflow.controller.status == ListStatus.ready
