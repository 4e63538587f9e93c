from datetime import datetime, timedelta

from app.models.event import Event
from app.models.photo_report import PhotoReport
from app.models.service import Service
from app.models.specialist import Specialist
from app.services.page_cache import page_cache


def event_payload(**overrides) -> dict:
    payload = {
        "title": "Группа поддержки для родителей",
        "description": "Встреча с психологом в тёплой атмосфере.",
        "date": "2026-11-20T18:30:00",
        "place": "Центр «Рядом», ул. Мира, 5",
        "imageUrl": "/uploads/event.png",
        "isPublished": True,
    }
    payload.update(overrides)
    return payload


def specialist_payload(**overrides) -> dict:
    payload = {
        "name": "Anna P",
        "role": "Психолог-консультант",
        "badge": "Опыт кризисной помощи",
        "slug": "",
        "badgeTone": "rose",
        "excerpt": "Работа с тревогой.",
        "bio": "Подробно о специалисте.",
        "imageUrl": "https://cdn.example.org/anna.jpg",
        "isPublished": True,
        "sortOrder": 1,
    }
    payload.update(overrides)
    return payload


# ==================== Мероприятия ====================

def test_create_event_requires_admin(client, db):
    resp = client.post("/api/events", json=event_payload())
    assert resp.status_code == 401
    assert resp.json() == {"ok": False, "error": "UNAUTHORIZED"}
    assert db.query(Event).count() == 0


def test_create_event(admin_client, db):
    resp = admin_client.post("/api/events", json=event_payload(title="  Лекция о стрессе  "))
    assert resp.status_code == 201
    data = resp.json()
    assert data["title"] == "Лекция о стрессе"
    assert data["date"] == "2026-11-20T18:30:00"
    assert data["imageUrl"] == "/uploads/event.png"

    event = db.query(Event).one()
    assert event.place == "Центр «Рядом», ул. Мира, 5"


def test_create_event_blank_place_and_bad_image_become_null(admin_client):
    resp = admin_client.post("/api/events", json=event_payload(place="   ", imageUrl="ftp://example.org/a.png"))
    assert resp.status_code == 201
    assert resp.json()["place"] is None
    assert resp.json()["imageUrl"] is None


def test_create_event_validation_error(admin_client, db):
    resp = admin_client.post("/api/events", json=event_payload(title="   "))
    assert resp.status_code == 400
    assert resp.json() == {"ok": False, "error": "VALIDATION_ERROR"}

    resp = admin_client.post("/api/events", json=event_payload(date="не дата"))
    assert resp.status_code == 400
    assert db.query(Event).count() == 0


def test_events_ordered_by_date_and_unpublished_hidden(admin_client, client):
    admin_client.post("/api/events", json=event_payload(title="Позже", date="2026-12-01T10:00:00"))
    admin_client.post("/api/events", json=event_payload(title="Раньше", date="2026-11-01T10:00:00"))
    admin_client.post("/api/events", json=event_payload(title="Черновик", isPublished=False))

    assert [e["title"] for e in client.get("/api/events").json()] == ["Раньше", "Позже"]
    assert len(admin_client.get("/api/events").json()) == 3


def test_update_event_with_patch_and_put(admin_client):
    event_id = admin_client.post("/api/events", json=event_payload()).json()["id"]

    resp = admin_client.patch(f"/api/events/{event_id}", json=event_payload(title="Новое название"))
    assert resp.status_code == 200
    assert resp.json()["title"] == "Новое название"

    resp = admin_client.put(f"/api/events/{event_id}", json=event_payload(place="Онлайн"))
    assert resp.status_code == 200
    assert resp.json()["place"] == "Онлайн"


def test_unknown_event_is_not_found(admin_client, client):
    assert client.get("/api/events/999").status_code == 404
    resp = admin_client.patch("/api/events/999", json=event_payload())
    assert resp.status_code == 404
    assert resp.json() == {"ok": False, "error": "NOT_FOUND"}
    assert admin_client.delete("/api/events/999").status_code == 404


def test_unpublished_event_hidden_from_guests(admin_client, client):
    event_id = admin_client.post("/api/events", json=event_payload(isPublished=False)).json()["id"]
    assert client.get(f"/api/events/{event_id}").status_code == 404
    assert admin_client.get(f"/api/events/{event_id}").status_code == 200


def test_delete_event(admin_client, db):
    event_id = admin_client.post("/api/events", json=event_payload()).json()["id"]

    resp = admin_client.delete(f"/api/events/{event_id}")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}
    assert admin_client.get(f"/api/events/{event_id}").status_code == 404


def test_event_change_drops_event_pages(admin_client):
    for path in ("/", "/events"):
        page_cache.get_or_build(path, lambda: {})

    event_id = admin_client.post("/api/events", json=event_payload()).json()["id"]
    assert not page_cache.has("/")
    assert not page_cache.has("/events")

    page_cache.get_or_build(f"/events/{event_id}", lambda: {})
    admin_client.delete(f"/api/events/{event_id}")
    assert not page_cache.has(f"/events/{event_id}")


# ==================== Услуги ====================

def service_payload(**overrides) -> dict:
    payload = {
        "slug": "support-groups",
        "title": "Группы поддержки",
        "intro": "Встречи раз в неделю.",
        "blocks": [{"title": "Формат", "text": "До 10 человек."}],
        "isPublished": True,
        "sortOrder": 1,
    }
    payload.update(overrides)
    return payload


def test_create_service_normalizes_slug(admin_client):
    resp = admin_client.post("/api/services", json=service_payload(slug="  Support   Groups!! "))
    assert resp.status_code == 201
    assert resp.json()["slug"] == "support-groups"


def test_create_service_rejects_empty_slug(admin_client, db):
    resp = admin_client.post("/api/services", json=service_payload(slug="Группы"))
    assert resp.status_code == 400
    assert resp.json() == {"ok": False, "error": "INVALID_SLUG"}
    assert db.query(Service).count() == 0


def test_service_slug_must_be_unique(admin_client):
    admin_client.post("/api/services", json=service_payload())
    resp = admin_client.post("/api/services", json=service_payload(title="Другая"))
    assert resp.status_code == 409
    assert resp.json() == {"ok": False, "error": "SLUG_TAKEN"}

    other_id = admin_client.post("/api/services", json=service_payload(slug="other")).json()["id"]
    resp = admin_client.put(f"/api/services/{other_id}", json=service_payload())
    assert resp.status_code == 409


def test_service_keeps_own_slug_on_update(admin_client):
    service_id = admin_client.post("/api/services", json=service_payload()).json()["id"]
    resp = admin_client.patch(f"/api/services/{service_id}", json=service_payload(title="Обновлено"))
    assert resp.status_code == 200
    assert resp.json()["title"] == "Обновлено"


def test_service_blocks_trimmed_and_empty_dropped(admin_client):
    blocks = [
        {"title": "  Первый  ", "text": "  текст  "},
        {"title": "   ", "text": ""},
        {"title": "", "text": "Только текст"},
        {"title": "Последний", "text": ""},
    ]
    resp = admin_client.post("/api/services", json=service_payload(blocks=blocks))
    assert resp.status_code == 201
    assert resp.json()["blocks"] == [
        {"title": "Первый", "text": "текст"},
        {"title": "", "text": "Только текст"},
        {"title": "Последний", "text": ""},
    ]

    service_id = resp.json()["id"]
    assert admin_client.get(f"/api/services/{service_id}").json()["blocks"] == resp.json()["blocks"]


def test_services_ordered_and_filtered(admin_client, client):
    admin_client.post("/api/services", json=service_payload(slug="b", sortOrder=2))
    admin_client.post("/api/services", json=service_payload(slug="a", sortOrder=1))
    admin_client.post("/api/services", json=service_payload(slug="draft", isPublished=False))

    assert [s["slug"] for s in client.get("/api/services").json()] == ["a", "b"]
    assert len(admin_client.get("/api/services").json()) == 3


def test_seed_services_is_idempotent(admin_client, client, db):
    resp = admin_client.post("/api/services/seed")
    assert resp.status_code == 200
    assert resp.json()["ok"] is True

    db.query(Service).filter(Service.slug == "support-groups").update({"is_published": False})
    db.commit()

    admin_client.post("/api/services/seed")
    db.expire_all()
    assert db.query(Service).count() == 3
    assert all(s.is_published for s in db.query(Service).all())
    assert [s["slug"] for s in client.get("/api/services").json()] == [
        "individual-consultations",
        "support-groups",
        "help-for-families",
    ]


def test_seed_requires_admin(client, db):
    assert client.post("/api/services/seed").status_code == 401
    assert db.query(Service).count() == 0


def test_service_update_drops_old_and_new_pages(admin_client):
    service_id = admin_client.post("/api/services", json=service_payload()).json()["id"]
    for path in ("/services", "/services/support-groups", "/services/groups"):
        page_cache.get_or_build(path, lambda: {})

    admin_client.put(f"/api/services/{service_id}", json=service_payload(slug="groups"))
    for path in ("/services", "/services/support-groups", "/services/groups"):
        assert not page_cache.has(path)


# ==================== Специалисты ====================

def test_specialist_slug_from_name(admin_client, db):
    resp = admin_client.post("/api/specialists", json=specialist_payload())
    assert resp.status_code == 201
    data = resp.json()
    assert data["slug"] == "anna-p"
    assert data["badgeTone"] == "rose"
    assert db.query(Specialist).one().name == "Anna P"


def test_specialist_cyrillic_name_without_slug_rejected(admin_client, db):
    resp = admin_client.post("/api/specialists", json=specialist_payload(name="Анна П."))
    assert resp.status_code == 400
    assert resp.json() == {"ok": False, "error": "INVALID_SLUG"}

    resp = admin_client.post("/api/specialists", json=specialist_payload(name="Анна П.", slug="anna"))
    assert resp.status_code == 201


def test_specialist_badge_tone(admin_client):
    resp = admin_client.post("/api/specialists", json=specialist_payload(badgeTone="green"))
    assert resp.status_code == 400

    resp = admin_client.post("/api/specialists", json=specialist_payload(badgeTone=""))
    assert resp.status_code == 201
    assert resp.json()["badgeTone"] == "indigo"


def test_specialist_invalid_image_becomes_null(admin_client):
    resp = admin_client.post("/api/specialists", json=specialist_payload(imageUrl="javascript:alert(1)"))
    assert resp.json()["imageUrl"] is None


def test_specialist_required_fields(admin_client):
    resp = admin_client.post("/api/specialists", json=specialist_payload(role=""))
    assert resp.status_code == 400
    assert resp.json()["error"] == "VALIDATION_ERROR"


def test_specialist_slug_taken(admin_client):
    admin_client.post("/api/specialists", json=specialist_payload())
    resp = admin_client.post("/api/specialists", json=specialist_payload(slug="Anna-P"))
    assert resp.status_code == 409


def test_specialist_update_and_delete(admin_client, client):
    specialist_id = admin_client.post("/api/specialists", json=specialist_payload()).json()["id"]
    page_cache.get_or_build("/specialists/anna-p", lambda: {})

    resp = admin_client.patch(
        f"/api/specialists/{specialist_id}",
        json=specialist_payload(slug="anna-petrova", isPublished=False),
    )
    assert resp.status_code == 200
    assert resp.json()["slug"] == "anna-petrova"
    assert not page_cache.has("/specialists/anna-p")
    assert client.get("/api/specialists").json() == []

    assert admin_client.delete(f"/api/specialists/{specialist_id}").json() == {"ok": True}
    assert admin_client.get(f"/api/specialists/{specialist_id}").status_code == 404


# ==================== Фотоотчёты ====================

def test_photo_report_requires_valid_image(admin_client, db):
    resp = admin_client.post("/api/photo-reports", json={"title": "Встреча", "imageUrl": "ftp://x/y.png"})
    assert resp.status_code == 400
    assert db.query(PhotoReport).count() == 0


def test_photo_report_crud(admin_client, client):
    page_cache.get_or_build("/gallery", lambda: {})

    resp = admin_client.post("/api/photo-reports", json={"title": "Встреча", "imageUrl": "/uploads/a.png"})
    assert resp.status_code == 201
    photo_id = resp.json()["id"]
    assert resp.json()["isPublished"] is True
    assert not page_cache.has("/gallery")

    resp = admin_client.put(
        f"/api/photo-reports/{photo_id}",
        json={"title": "Летняя встреча", "imageUrl": "/images/b.jpg", "sortOrder": 2},
    )
    assert resp.json()["title"] == "Летняя встреча"
    assert [p["id"] for p in client.get("/api/photo-reports").json()] == [photo_id]

    assert admin_client.delete(f"/api/photo-reports/{photo_id}").json() == {"ok": True}
    assert client.get("/api/photo-reports").json() == []


def test_photo_reports_hidden_when_unpublished(admin_client, client):
    admin_client.post(
        "/api/photo-reports",
        json={"title": "Черновик", "imageUrl": "/uploads/c.png", "isPublished": False},
    )
    assert client.get("/api/photo-reports").json() == []
    assert len(admin_client.get("/api/photo-reports").json()) == 1


def test_photo_report_mutations_require_admin(client, db):
    db.add(PhotoReport(title="Фото", image_url="/uploads/x.png", created_at=datetime.now() - timedelta(days=1)))
    db.commit()
    photo_id = db.query(PhotoReport).one().id

    assert client.delete(f"/api/photo-reports/{photo_id}").status_code == 401
    assert client.patch(f"/api/photo-reports/{photo_id}", json={"title": "x", "imageUrl": "/uploads/x.png"}).status_code == 401
    assert db.query(PhotoReport).count() == 1
