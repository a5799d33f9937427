# backend/modules/analytics/tests/test_analytics_api.py

from datetime import datetime
from decimal import Decimal
from unittest.mock import patch

from modules.analytics.models.analytics_models import MetricsCache
from modules.retail.models.retail_models import Product, InventoryEntry, Sale


class TestDashboardEndpoint:
    def test_dashboard_shape(self, client, this_month_records):
        response = client.get("/analytics/dashboard", params={"period": "current_month"})

        assert response.status_code == 200
        data = response.json()
        assert data["totalSales"] == 300.0
        assert data["costOfSales"] == 180.0
        assert data["grossProfit"] == 120.0
        assert data["grossMargin"] == 40.0
        assert data["totalProducts"] == 1
        assert data["lowStockCount"] == 1
        assert data["totalQuantitySold"] == 30
        assert data["stockLevels"] == [
            {
                "productId": this_month_records.id,
                "productName": "Scarce Scarf",
                "sku": "LOW-1",
                "currentStock": 3,
                "isLowStock": True,
                "isCritical": True,
            }
        ]
        assert len(data["salesTrend"]) == 1
        assert data["salesTrend"][0]["amount"] == 300.0

    def test_unknown_period_falls_back(self, client, this_month_records):
        response = client.get("/analytics/dashboard", params={"period": "all_time"})

        assert response.status_code == 200
        assert response.json()["totalSales"] == 300.0

    def test_response_carries_kpis_only(self, client, db_session, this_month_records):
        response = client.get("/analytics/dashboard", params={"period": "current_month"})

        assert set(response.json()) == {
            "totalSales",
            "grossMargin",
            "totalProducts",
            "lowStockCount",
            "costOfSales",
            "grossProfit",
            "totalQuantitySold",
            "stockLevels",
            "salesTrend",
        }

        cached = db_session.query(MetricsCache).filter_by(period_key="current_month").one()
        assert cached.kpis["metrics"]["period_key"] == "current_month"
        assert "generated_at" in cached.kpis["metrics"]

    def test_empty_store(self, client):
        response = client.get("/analytics/dashboard")

        assert response.status_code == 200
        data = response.json()
        assert data["totalSales"] == 0
        assert data["grossMargin"] == 0
        assert data["stockLevels"] == []

    def test_datastore_failure_is_500(self, client):
        with patch(
            "modules.analytics.routers.analytics_router.MetricsAggregatorService.get_dashboard_metrics",
            side_effect=RuntimeError("database unavailable"),
        ):
            response = client.get("/analytics/dashboard")

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to retrieve dashboard metrics"

    def test_cache_invalidation(self, client, this_month_records):
        client.get("/analytics/dashboard", params={"period": "current_month"})
        client.get("/analytics/dashboard", params={"period": "last_3_months"})

        response = client.delete(
            "/analytics/dashboard/cache", params={"period": "current_month"}
        )
        assert response.json() == {"invalidated": 1}

        response = client.delete("/analytics/dashboard/cache")
        assert response.json() == {"invalidated": 1}


class TestInsightEndpoints:
    def test_ai_insights_stock_alert(self, client, this_month_records):
        response = client.get("/ai/insights")

        assert response.status_code == 200
        insights = response.json()["insights"]
        assert insights[0] == {
            "type": "critical",
            "title": "Stock Alert",
            "message": (
                "Scarce Scarf (SKU: LOW-1) needs reorder. "
                "Current: 3 units, expected stockout in 3 days."
            ),
            "action": "Reorder 30 units to maintain 30-day stock.",
        }

    def test_ai_insights_on_empty_store(self, client):
        response = client.get("/ai/insights")

        assert response.status_code == 200
        insights = response.json()["insights"]
        assert len(insights) == 1
        assert insights[0]["type"] == "info"

    def test_limit_is_validated(self, client):
        assert client.get("/ai/insights", params={"limit": 0}).status_code == 422
        assert client.get("/ai/insights", params={"limit": 6}).status_code == 422

    def test_summary_view_uses_summary_limit(self, client, db_session):
        now = datetime.now()
        month_start = datetime(now.year, now.month, 1)
        for i in range(6):
            product = Product(sku=f"LOW-{i}", name=f"Low Item {i}")
            db_session.add(product)
            db_session.flush()
            db_session.add_all([
                InventoryEntry(
                    product_id=product.id,
                    purchase_price=Decimal("2.00"),
                    quantity_received=5,
                    date_purchased=month_start,
                    grn_number=f"GRN-L{i}",
                ),
                Sale(
                    product_id=product.id,
                    sales_price=Decimal("4.00"),
                    quantity_sold=1,
                    date_sold=month_start,
                ),
            ])
        db_session.commit()

        full = client.get("/ai/insights").json()["insights"]
        summary = client.get("/ai/insights", params={"summary": True}).json()["insights"]
        explicit = client.get(
            "/ai/insights", params={"summary": True, "limit": 2}
        ).json()["insights"]

        assert len(full) == 5
        assert len(summary) == 4
        assert len(explicit) == 2

    def test_analysis_insights(self, client, this_month_records):
        response = client.get("/analytics/insights", params={"period": "current_month"})

        assert response.status_code == 200
        titles = [i["title"] for i in response.json()["insights"]]
        assert titles[0] == "Critical Stock Alert"
        assert "Excellent Margins" in titles


class TestUtilityEndpoints:
    def test_retail_maths(self, client):
        response = client.post(
            "/analytics/retail-maths",
            json={"quantity": 10, "purchasePrice": 70, "sellingPrice": 100},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["totalCost"] == 700
        assert data["totalProfit"] == 300
        assert round(data["minPrice"], 2) == 80.5

    def test_retail_maths_rejects_negative_cost(self, client):
        response = client.post(
            "/analytics/retail-maths", json={"quantity": 1, "purchasePrice": -5}
        )

        assert response.status_code == 422

    def test_health(self, client):
        response = client.get("/analytics/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "analytics"
