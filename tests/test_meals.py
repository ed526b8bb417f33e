"""
Tests for the meal log (/api/meals) including photo attachments.

This test suite covers:
- Multipart create with and without an image
- Calories / datetime parsing and their validation errors
- Update keeps omitted fields and the current image
- Image replacement removes the previous file
- Delete removes the meal and its file
- A failed insert does not leave the uploaded file behind
"""

import re

import pytest
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from test_fixtures import client, db_session, create_user, image_upload, staged
from adapters import attachment_store
from app.exceptions import NotFoundError, ServiceValidationError
from domain.models import Meal
from domain.schemas.meal_schemas import MealCreate, MealUpdate
from repositories import MealRepository
from services.meal_service import MealService


EXAMPLE_MEAL_FLOW = """
Meal Log Flow
=============

1. LOG A MEAL (multipart/form-data)
   POST /api/meals
   userId=<user id>  title=Lunch  calories=450  datetime=2024-01-01T12:00:00Z

   Response: 201 Created
   {"id": 1, "user_id": "...", "title": "Lunch", "calories": 450, "image": null, ...}

2. ADD A PHOTO LATER
   PUT /api/meals/1
   image=<file lunch.png>

   Response: 200 OK, calories still 450,
   "image": "/uploads/meals/Lunch-1704110400000.png"
"""

MEAL_IMAGE = re.compile(r"^/uploads/meals/Lunch-\d+\.png$")


def _meal_dir_files():
    return sorted(p.name for p in (attachment_store.root() / "meals").iterdir())


# =============================================================================
# ROUTE TESTS
# =============================================================================


def test_create_meal_then_add_image(db_session: Session):
    """
    Verifies the two-step flow from EXAMPLE_MEAL_FLOW:
    - create without image returns 201, calories as integer, image null
    - update with only an image keeps calories and sets the reference
    """
    user = create_user(db_session)

    r = client.post(
        "/api/meals",
        data={
            "userId": user.id,
            "title": "Lunch",
            "calories": "450",
            "datetime": "2024-01-01T12:00:00Z",
        },
    )
    assert r.status_code == 201
    meal = r.json()
    assert meal["calories"] == 450
    assert meal["image"] is None
    assert meal["user_id"] == user.id
    assert meal["datetime"].startswith("2024-01-01T12:00:00")

    r2 = client.put(f"/api/meals/{meal['id']}", files=image_upload())
    assert r2.status_code == 200
    updated = r2.json()
    assert updated["calories"] == 450
    assert updated["title"] == "Lunch"
    assert MEAL_IMAGE.match(updated["image"])
    assert attachment_store.exists(updated["image"])


def test_replacing_image_deletes_previous_file(db_session: Session):
    user = create_user(db_session)
    r = client.post(
        "/api/meals",
        data={"userId": user.id, "title": "Lunch"},
        files=image_upload("first.png"),
    )
    assert r.status_code == 201
    old_image = r.json()["image"]
    assert attachment_store.exists(old_image)

    r2 = client.put(
        f"/api/meals/{r.json()['id']}", files=image_upload("second.png", b"other")
    )
    assert r2.status_code == 200
    new_image = r2.json()["image"]

    assert new_image != old_image
    assert not attachment_store.exists(old_image)
    assert attachment_store.resolve(new_image).read_bytes() == b"other"
    assert len(_meal_dir_files()) == 1


def test_update_without_image_keeps_reference(db_session: Session):
    user = create_user(db_session)
    r = client.post(
        "/api/meals",
        data={"userId": user.id, "title": "Lunch", "calories": "450"},
        files=image_upload(),
    )
    image = r.json()["image"]

    r2 = client.put(
        f"/api/meals/{r.json()['id']}", data={"title": "Late lunch", "calories": "500"}
    )
    assert r2.status_code == 200
    assert r2.json()["title"] == "Late lunch"
    assert r2.json()["calories"] == 500
    assert r2.json()["image"] == image
    assert attachment_store.exists(image)


def test_delete_meal_removes_file(db_session: Session):
    user = create_user(db_session)
    r = client.post(
        "/api/meals", data={"userId": user.id, "title": "Lunch"}, files=image_upload()
    )
    meal_id = r.json()["id"]
    image = r.json()["image"]

    r2 = client.delete(f"/api/meals/{meal_id}")
    assert r2.status_code == 200
    assert r2.json() == {
        "status": "ok",
        "message": "Meal deleted successfully",
        "deleted": str(meal_id),
    }
    assert not attachment_store.exists(image)
    assert client.get(f"/api/meals/{meal_id}").status_code == 404


def test_delete_meal_with_missing_file_still_succeeds(db_session: Session):
    user = create_user(db_session)
    r = client.post(
        "/api/meals", data={"userId": user.id, "title": "Lunch"}, files=image_upload()
    )
    attachment_store.delete(r.json()["image"])

    assert client.delete(f"/api/meals/{r.json()['id']}").status_code == 200


@pytest.mark.parametrize("calories", ["abc", "12.5", "-5", "1_000", "+5", "\u0663"])
def test_invalid_calories_is_400(db_session: Session, calories):
    user = create_user(db_session)
    r = client.post(
        "/api/meals",
        data={"userId": user.id, "title": "Lunch", "calories": calories},
        files=image_upload(),
    )
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "SERVICE_VALIDATION_ERROR"
    # rejected before anything was written
    assert _meal_dir_files() == []
    assert db_session.query(Meal).count() == 0


def test_create_meal_requires_user(db_session: Session):
    assert client.post("/api/meals", data={"title": "Lunch"}).status_code == 400
    r = client.post("/api/meals", data={"userId": "missing", "title": "Lunch"})
    assert r.status_code == 404


def test_list_meals_filters_by_user(db_session: Session):
    ana = create_user(db_session, "Ana Lima")
    ben = create_user(db_session, "Ben Ode")
    for user, title in ((ana, "Breakfast"), (ana, "Dinner"), (ben, "Snack")):
        client.post("/api/meals", data={"userId": user.id, "title": title})

    assert len(client.get("/api/meals").json()) == 3
    mine = client.get("/api/meals", params={"userId": ana.id}).json()
    assert [m["title"] for m in mine] == ["Breakfast", "Dinner"]


def test_failed_insert_discards_uploaded_file(db_session: Session, monkeypatch):
    """A database failure after the file was stored leaves no orphan behind"""
    user = create_user(db_session)

    def broken_add(self, entity):
        raise SQLAlchemyError("disk I/O error")

    monkeypatch.setattr(MealRepository, "add", broken_add)
    r = client.post(
        "/api/meals", data={"userId": user.id, "title": "Lunch"}, files=image_upload()
    )
    assert r.status_code == 500
    assert r.json()["error"]["code"] == "STORAGE_ERROR"
    assert _meal_dir_files() == []


# =============================================================================
# SERVICE TESTS
# =============================================================================


def test_meal_service_defaults_datetime_to_now(db_session: Session):
    user = create_user(db_session)
    meal = MealService.create_meal(
        db_session, MealCreate(user_id=user.id, title="Snack", calories="")
    )
    assert meal.calories is None
    assert meal.datetime is not None
    assert meal.image is None


def test_meal_service_update_uses_stored_title_for_filename(db_session: Session):
    user = create_user(db_session)
    meal = MealService.create_meal(db_session, MealCreate(user_id=user.id, title="Lunch"))

    updated = MealService.update_meal(db_session, meal.id, MealUpdate(), staged())
    assert MEAL_IMAGE.match(updated.image)


def test_meal_service_parse_helpers():
    assert MealService.parse_calories(" 320 ") == 320
    assert MealService.parse_calories(None) is None
    assert MealService.parse_calories(0) == 0
    with pytest.raises(ServiceValidationError):
        MealService.parse_calories(True)
    with pytest.raises(ServiceValidationError):
        MealService.parse_datetime("yesterday")
    parsed = MealService.parse_datetime("2024-01-01T12:00:00Z")
    assert parsed.utcoffset().total_seconds() == 0
    fractional = MealService.parse_datetime("2024-01-01T12:00:00.5+02:00")
    assert fractional.microsecond == 500000
    assert fractional.utcoffset().total_seconds() == 7200


def test_meal_service_unknown_meal(db_session: Session):
    with pytest.raises(NotFoundError):
        MealService.update_meal(db_session, 999, MealUpdate(title="x"))
    with pytest.raises(NotFoundError):
        MealService.delete_meal(db_session, 999)
