import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import NoResultFound

from app.main import app
from app.models.review import Review, ReviewStatus
from app.services.page_cache import page_cache
from app.services.reviews import approve_review, reject_review

from tests.conftest import ADMIN_EMAIL, ADMIN_PASSWORD


@pytest.fixture
def pending_review(db):
    review = Review(text="Помогли пережить очень тяжёлый период.", author_name="Ирина", rating=5)
    db.add(review)
    db.commit()
    db.refresh(review)
    return review


def _status(db, review_id):
    db.expire_all()
    return db.query(Review).filter(Review.id == review_id).one().status


def test_moderation_requires_admin(client, db, pending_review):
    for action in ("approve", "reject", "delete"):
        resp = client.post(f"/api/admin/reviews/{action}", data={"id": str(pending_review.id)})
        assert resp.status_code == 401
        assert resp.json() == {"ok": False, "error": "UNAUTHORIZED"}

    assert _status(db, pending_review.id) == ReviewStatus.PENDING.value


def test_approve_redirects_to_admin_list(admin_client, db, pending_review):
    resp = admin_client.post(
        "/api/admin/reviews/approve",
        data={"id": str(pending_review.id)},
        follow_redirects=False,
    )
    assert resp.status_code == 303
    assert resp.headers["location"] == "/admin/review/list"

    db.expire_all()
    review = db.query(Review).filter(Review.id == pending_review.id).one()
    assert review.status == ReviewStatus.APPROVED.value
    assert review.approved_at is not None


def test_reject_hides_approved_review(admin_client, client, db, pending_review):
    admin_client.post("/api/admin/reviews/approve", data={"id": str(pending_review.id)}, follow_redirects=False)
    assert len(client.get("/api/reviews").json()) == 1

    resp = admin_client.post(
        "/api/admin/reviews/reject",
        data={"id": str(pending_review.id)},
        follow_redirects=False,
    )
    assert resp.status_code == 303
    assert _status(db, pending_review.id) == ReviewStatus.REJECTED.value
    assert client.get("/api/reviews").json() == []


def test_rejected_review_can_be_approved(admin_client, db, pending_review):
    admin_client.post("/api/admin/reviews/reject", data={"id": str(pending_review.id)}, follow_redirects=False)
    admin_client.post("/api/admin/reviews/approve", data={"id": str(pending_review.id)}, follow_redirects=False)
    assert _status(db, pending_review.id) == ReviewStatus.APPROVED.value


def test_delete_removes_review(admin_client, db, pending_review):
    resp = admin_client.post(
        "/api/admin/reviews/delete",
        data={"id": str(pending_review.id)},
        follow_redirects=False,
    )
    assert resp.status_code == 303

    db.expire_all()
    assert db.query(Review).count() == 0


def test_blank_id_is_noop(admin_client, db, pending_review):
    for action in ("approve", "reject", "delete"):
        resp = admin_client.post(f"/api/admin/reviews/{action}", data={"id": ""}, follow_redirects=False)
        assert resp.status_code == 303

    assert _status(db, pending_review.id) == ReviewStatus.PENDING.value


def test_unknown_id_is_server_error(db):
    c = TestClient(app, raise_server_exceptions=False)
    c.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})

    resp = c.post("/api/admin/reviews/approve", data={"id": "9999"}, follow_redirects=False)
    assert resp.status_code == 500


def test_moderation_functions_raise_for_missing_review(db):
    with pytest.raises(NoResultFound):
        approve_review(db, 12345)
    with pytest.raises(NoResultFound):
        reject_review(db, 12345)


def test_moderation_drops_review_pages_from_cache(admin_client, db, pending_review):
    for path in ("/", "/reviews", "/admin/reviews"):
        page_cache.get_or_build(path, lambda: {"cached": True})

    admin_client.post("/api/admin/reviews/approve", data={"id": str(pending_review.id)}, follow_redirects=False)

    for path in ("/", "/reviews", "/admin/reviews"):
        assert not page_cache.has(path)


def test_admin_list_filters_by_status(admin_client, db, pending_review):
    db.add(Review(text="Отличная группа поддержки, рекомендую.", status=ReviewStatus.APPROVED.value))
    db.commit()

    all_reviews = admin_client.get("/api/admin/reviews").json()
    assert len(all_reviews) == 2

    pending = admin_client.get("/api/admin/reviews?status=PENDING").json()
    assert [r["id"] for r in pending] == [pending_review.id]
    assert pending[0]["authorName"] == "Ирина"
    assert "ipHash" not in pending[0]


def test_admin_list_requires_admin(client):
    resp = client.get("/api/admin/reviews")
    assert resp.status_code == 401


def test_repeated_approve_keeps_review_published(db, pending_review):
    first = approve_review(db, pending_review.id).approved_at
    review = approve_review(db, pending_review.id)
    assert review.status == ReviewStatus.APPROVED.value
    assert review.approved_at >= first

    reject_review(db, pending_review.id)
    assert approve_review(db, pending_review.id).status == ReviewStatus.APPROVED.value


# ==================== Модерация в sqladmin ====================

REVIEW_PAGES = ("/", "/reviews", "/admin/reviews")


@pytest.fixture
def panel():
    c = TestClient(app)
    resp = c.post("/admin/login", data={"username": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
                  follow_redirects=False)
    assert resp.status_code == 302, resp.text
    return c


def _two_pending(db):
    reviews = [
        Review(text="Спасибо за поддержку в трудное время.", author_name="Ольга"),
        Review(text="Группа помогла мне снова поверить в себя.", author_name="Пётр"),
    ]
    db.add_all(reviews)
    db.commit()
    return [r.id for r in reviews]


def _fill_cache():
    for path in REVIEW_PAGES:
        page_cache.get_or_build(path, lambda: {"cached": True})


def test_panel_requires_login(client, db, pending_review):
    resp = client.get(f"/admin/review/action/approve?pks={pending_review.id}", follow_redirects=False)
    assert resp.status_code in (302, 303, 307)
    assert "/admin/login" in resp.headers["location"]
    assert _status(db, pending_review.id) == ReviewStatus.PENDING.value


def test_panel_approve_action(panel, db):
    ids = _two_pending(db)
    _fill_cache()

    resp = panel.get(f"/admin/review/action/approve?pks={ids[0]},{ids[1]}", follow_redirects=False)
    assert resp.status_code == 307
    assert resp.headers["location"].endswith("/admin/review/list")

    for review_id in ids:
        assert _status(db, review_id) == ReviewStatus.APPROVED.value
    for path in REVIEW_PAGES:
        assert not page_cache.has(path)


def test_panel_reject_action(panel, db):
    ids = _two_pending(db)
    approve_review(db, ids[0])
    _fill_cache()

    resp = panel.get(f"/admin/review/action/reject?pks={ids[0]},{ids[1]}", follow_redirects=False)
    assert resp.status_code == 307

    for review_id in ids:
        assert _status(db, review_id) == ReviewStatus.REJECTED.value
    for path in REVIEW_PAGES:
        assert not page_cache.has(path)


def test_panel_delete(panel, db, pending_review):
    _fill_cache()

    resp = panel.delete(f"/admin/review/delete?pks={pending_review.id}")
    assert resp.status_code == 200

    db.expire_all()
    assert db.query(Review).count() == 0
    for path in REVIEW_PAGES:
        assert not page_cache.has(path)
