"""
Tests para los endpoints de Compras

- Autenticación por bearer token
- Listado con estadísticas, paginación y metadatos
- Obtener por id (solo registros vivos)
- Errores de acceso a datos sin filtrar detalles
"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.common.mixins import EstadoRegistro
from app.modules.compras.models import CategoriaCompra, Compra, TipoCompra
from app.modules.reports.services import RecordReportService


@pytest.fixture
def compras_rows():
    return [
        TipoCompra(id=1, descripcion="Operativos"),
        CategoriaCompra(id=1, descripcion="Insumos", id_tipo=1),
        CategoriaCompra(id=2, descripcion="Servicios"),
        Compra(id=1, codigo_compra="C-001", fecha=date(2025, 2, 10), total=Decimal("100"), id_categoria=1,
               created_at=datetime(2025, 2, 10, 9, tzinfo=timezone.utc)),
        Compra(id=2, codigo_compra="C-002", fecha=date(2025, 2, 15), total=Decimal("200"), id_categoria=2,
               created_at=datetime(2025, 2, 15, 9, tzinfo=timezone.utc)),
        Compra(id=3, codigo_compra="C-003", fecha=date(2025, 1, 20), total=Decimal("50"), id_categoria=1,
               created_at=datetime(2025, 1, 20, 9, tzinfo=timezone.utc)),
        Compra(id=4, codigo_compra="C-004", fecha=date(2025, 2, 20), total=Decimal("999"), id_categoria=1,
               id_estado=EstadoRegistro.INACTIVO.value,
               deleted_at=datetime(2025, 2, 21, tzinfo=timezone.utc)),
    ]


# ===== AUTENTICACIÓN =====

class TestAuthentication:

    @pytest.mark.asyncio
    async def test_missing_token(self, client):
        response = await client.get("/api/compras")

        assert response.status_code == 401
        assert response.json()["detail"] == "Token no proporcionado"

    @pytest.mark.asyncio
    async def test_invalid_token(self, client):
        response = await client.get("/api/compras", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Token inválido"

    @pytest.mark.asyncio
    async def test_expired_token(self, client, token_factory):
        token = token_factory(expires_in=timedelta(hours=-1))
        response = await client.get("/api/compras", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Token inválido"


# ===== LISTADO =====

class TestListCompras:

    @pytest.mark.asyncio
    async def test_listing_with_statistics(self, client, auth_headers, add_rows, compras_rows):
        await add_rows(*compras_rows)

        response = await client.get("/api/compras?month=2025-02", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert set(body) == {"data", "statistics", "pagination", "meta"}
        assert body["meta"] == {"month": "2025-02", "prevMonth": "2025-01"}
        assert body["pagination"] == {"page": 1, "limit": 10, "total": 2, "pages": 1}

        assert [row["codigo_compra"] for row in body["data"]] == ["C-002", "C-001"]
        assert body["data"][0]["id"] == "2"
        assert body["data"][0]["categoria"] == {"id": "2", "descripcion": "Servicios", "id_tipo": None}

        statistics = body["statistics"]
        assert statistics["totalRegistros"] == 2
        assert Decimal(statistics["totalMonth"]) == Decimal("300")
        assert Decimal(statistics["totalMonthPrev"]) == Decimal("50")
        assert statistics["porcentajeCambioMensual"] == 500.0
        assert [(c["id"], c["porcentaje"]) for c in statistics["categorias"]] == [("2", 66.67), ("1", 33.33)]
        assert [t["id"] for t in statistics["tipos"]] == [None, "1"]
        assert set(statistics["categorias"][0]) == {"id", "descripcion", "total", "porcentaje"}
        assert len(statistics["totalsMonths"]) == 12

    @pytest.mark.asyncio
    async def test_invalid_parameters_fall_back(self, client, auth_headers, add_rows, compras_rows):
        await add_rows(*compras_rows)

        response = await client.get(
            "/api/compras?month=2025-2&page=-3&limit=abc", headers=auth_headers
        )

        assert response.status_code == 200
        body = response.json()
        assert body["pagination"]["page"] == 1
        assert body["pagination"]["limit"] == 10
        now = datetime.now(timezone.utc)
        assert body["meta"]["month"] == f"{now.year:04d}-{now.month:02d}"

    @pytest.mark.asyncio
    async def test_limit_is_clamped(self, client, auth_headers):
        response = await client.get("/api/compras?limit=5000", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["pagination"]["limit"] == 200

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page", ["99999999999999999999", "100000000000000000"])
    async def test_huge_page_is_clamped(self, client, auth_headers, add_rows, compras_rows, page):
        await add_rows(*compras_rows)

        response = await client.get(f"/api/compras?month=2025-02&page={page}&limit=200", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["data"] == []
        assert body["pagination"]["total"] == 2
        assert body["pagination"]["page"] <= int(page)

    @pytest.mark.asyncio
    async def test_search(self, client, auth_headers, add_rows, compras_rows):
        await add_rows(*compras_rows)

        response = await client.get("/api/compras?month=2025-02&search=insumos", headers=auth_headers)

        body = response.json()
        assert [row["codigo_compra"] for row in body["data"]] == ["C-001"]
        assert Decimal(body["statistics"]["totalMonth"]) == Decimal("100")


# ===== OBTENER POR ID =====

class TestGetCompraById:

    @pytest.mark.asyncio
    async def test_found(self, client, auth_headers, add_rows, compras_rows):
        await add_rows(*compras_rows)

        response = await client.get("/api/compras/1", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Compra encontrada"
        assert body["data"]["id"] == "1"
        assert Decimal(body["data"]["total"]) == Decimal("100")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("record_id", ["4", "999", "abc", "99999999999999999999"])
    async def test_not_found(self, client, auth_headers, add_rows, compras_rows, record_id):
        await add_rows(*compras_rows)

        response = await client.get(f"/api/compras/{record_id}", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "Compra no encontrada"


# ===== ERRORES =====

class TestErrors:

    @pytest.mark.asyncio
    async def test_data_access_failure_is_generic(self, client, auth_headers, database):
        async with database.engine.begin() as conn:
            await conn.run_sync(Compra.__table__.drop)

        response = await client.get("/api/compras", headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"error": "Error interno del servidor"}

    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "OK"
        assert response.headers["X-Content-Type-Options"] == "nosniff"

    @pytest.mark.asyncio
    async def test_driver_failure_is_generic(self, client, auth_headers, monkeypatch):
        async def refused(*args, **kwargs):
            raise ConnectionRefusedError("connection refused")

        monkeypatch.setattr(RecordReportService, "count_records", refused)

        response = await client.get("/api/compras", headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"error": "Error interno del servidor"}

    @pytest.mark.asyncio
    async def test_security_headers_on_error_responses(self, client):
        response = await client.get("/api/compras")

        assert response.status_code == 401
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"
