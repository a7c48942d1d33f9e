"""Tests for the catalog endpoints (categories, subcategories, products)."""
from catalog_admin.models.audit_log import AuditLog
from catalog_admin.models.category import Category, Subcategory
from catalog_admin.models.product import Product


class TestPublicReads:
    """Catalog reads need no authentication."""

    def test_list_categories_hides_inactive(self, client, sample_category, db_session):
        db_session.add(Category(name="Retired", slug="retired", is_active=False))
        db_session.commit()

        response = client.get("/categories/")
        assert response.status_code == 200
        assert [c["slug"] for c in response.json()["data"]] == ["solar-panels"]

        response = client.get("/categories/?include_inactive=true")
        assert response.json()["total"] == 2

    def test_get_by_slug(self, client, sample_product):
        response = client.get("/products/slug/panel-400w")
        assert response.status_code == 200
        assert response.json()["data"]["features"] == ["400W", "25 year warranty"]

        assert client.get("/products/slug/missing").status_code == 404

    def test_filter_subcategories_by_category(self, client, sample_subcategory, db_session):
        other = Category(name="Batteries", slug="batteries")
        db_session.add(other)
        db_session.commit()
        db_session.add(Subcategory(category_id=other.id, name="Lithium", slug="lithium"))
        db_session.commit()

        response = client.get(f"/subcategories/?category_id={sample_subcategory.category_id}")
        assert [s["slug"] for s in response.json()["data"]] == ["monocrystalline"]

    def test_featured_products(self, client, sample_product, sample_subcategory, db_session):
        db_session.add(Product(
            subcategory_id=sample_subcategory.id, name="Panel 500W", slug="panel-500w",
            is_featured=True
        ))
        db_session.commit()

        response = client.get("/products/?featured=true")
        assert [p["slug"] for p in response.json()["data"]] == ["panel-500w"]

    def test_get_missing_category(self, client, db_session):
        response = client.get("/categories/missing")
        assert response.status_code == 404
        assert response.json()["detail"] == "Category not found"


class TestAdminWrites:

    def test_create_category_is_audited(self, client, admin_headers, admin_user, db_session):
        response = client.post(
            "/categories/", json={"name": "Inverters", "slug": "inverters"}, headers=admin_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Category created successfully"

        db_session.expire_all()
        entry = db_session.query(AuditLog).one()
        assert entry.action == "create"
        assert entry.resource_type == "category"
        assert entry.resource_id == body["data"]["id"]
        assert entry.user_id == admin_user.id

    def test_duplicate_slug_rejected(self, client, admin_headers, sample_category):
        response = client.post(
            "/categories/", json={"name": "Other", "slug": "solar-panels"}, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Category with this slug already exists"

    def test_product_requires_existing_subcategory(self, client, admin_headers, db_session):
        response = client.post(
            "/products/",
            json={"subcategory_id": "missing", "name": "Panel", "slug": "panel"},
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Subcategory not found"

    def test_update_product(self, client, admin_headers, sample_product):
        response = client.patch(
            f"/products/{sample_product.id}", json={"price": "11.50"}, headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["data"]["price"] == "11.50"
        assert response.json()["data"]["name"] == "Panel 400W"

    def test_patch_null_clears_optional_field(self, client, admin_headers, sample_product):
        client.patch(
            f"/products/{sample_product.id}", json={"short_description": "Bifacial"}, headers=admin_headers)

        response = client.patch(
            f"/products/{sample_product.id}", json={"short_description": None}, headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["data"]["short_description"] is None
        assert response.json()["data"]["price"] == "10.00"

    def test_patch_null_required_field_rejected(self, client, admin_headers, sample_category):
        response = client.patch(
            f"/categories/{sample_category.id}", json={"slug": None}, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "slug cannot be null"

    def test_toggle_flags(self, client, admin_headers, sample_product, db_session):
        response = client.patch(
            f"/products/{sample_product.id}/toggle", json={"is_active": False}, headers=admin_headers)
        assert response.json()["message"] == "Product deactivated successfully"

        response = client.patch(
            f"/products/{sample_product.id}/featured", json={"is_featured": True}, headers=admin_headers)
        assert response.json()["message"] == "Product featured successfully"

        db_session.expire_all()
        product = db_session.query(Product).filter(Product.id == sample_product.id).one()
        assert product.is_active is False
        assert product.is_featured is True

    def test_delete_category_cascades(self, client, admin_headers, sample_product, db_session):
        category_id = sample_product.subcategory.category_id
        response = client.delete(f"/categories/{category_id}", headers=admin_headers)
        assert response.status_code == 200

        db_session.expire_all()
        assert db_session.query(Category).count() == 0
        assert db_session.query(Subcategory).count() == 0
        assert db_session.query(Product).count() == 0

    def test_editor_writes_forbidden(self, client, editor_headers, sample_category):
        response = client.patch(
            f"/categories/{sample_category.id}", json={"name": "Renamed"}, headers=editor_headers)
        assert response.status_code == 403
        assert client.delete(f"/categories/{sample_category.id}", headers=editor_headers).status_code == 403


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
