"""
HTTP tests through FastAPI's TestClient, backed by a SQLite pool.
"""

from tests.conftest import checked_out, make_workbook, sheet_row, table_counts

XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def upload(client, content, filename="practicas.xlsx"):
    return client.post("/api/upload", files={"file": (filename, content, XLSX)})


class TestHealth:

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_health_pings_database(self, client):
        response = client.get("/health")

        assert response.json() == {"status": "healthy", "database": "connected"}


class TestCrud:

    def test_missing_company_is_404(self, client, app_database):
        response = client.get("/api/companies/99")

        assert response.status_code == 404
        assert response.json() == {"error": "Company not found."}
        assert checked_out(app_database) == 0

    def test_program_lifecycle(self, client):
        created = client.post("/api/programs", json={"name": "Derecho"})
        assert created.status_code == 201
        assert created.json() == {"program_id": 1, "name": "Derecho"}

        assert client.get("/api/programs").json() == [{"program_id": 1, "name": "Derecho"}]

        updated = client.put("/api/programs/1", json={"name": "Derecho y Ciencias Políticas"})
        assert updated.json() == {"message": "Program updated successfully."}
        assert client.get("/api/programs/1").json()["name"] == "Derecho y Ciencias Políticas"

        deleted = client.delete("/api/programs/1")
        assert deleted.json() == {"message": "Program deleted successfully."}
        assert client.get("/api/programs/1").status_code == 404

    def test_invalid_body_is_rejected_before_database(self, client, db_path):
        response = client.post("/api/students", json={"age": 20})

        assert response.status_code == 422
        assert response.json() == {"error": "Invalid request. Check the values for: full_name"}
        assert table_counts(db_path)["student"] == 0

    def test_non_integer_key_uses_error_body(self, client):
        response = client.get("/api/programs/abc")

        assert response.status_code == 422
        assert list(response.json()) == ["error"]
        assert "key" in response.json()["error"]

    def test_database_error_is_500_and_connection_released(self, client, app_database, db_path):
        response = client.post(
            "/api/internships",
            json={"program_id": 1, "student_id": 1, "company_id": 1, "total_days": -1},
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Error creating internship."}
        assert table_counts(db_path)["internship"] == 0
        assert checked_out(app_database) == 0


class TestUpload:

    def test_no_file(self, client):
        response = client.post("/api/upload")

        assert response.status_code == 400
        assert response.json() == {"error": "No file was uploaded."}

    def test_wrong_extension(self, client):
        response = upload(client, b"a,b\n1,2\n", filename="practicas.csv")

        assert response.status_code == 400

    def test_missing_sheet(self, client, app_database, db_path):
        response = upload(client, make_workbook([sheet_row()], sheet_name="Hoja1"))

        assert response.status_code == 400
        assert response.json() == {"error": 'The sheet named "Datos" does not exist.'}
        assert set(table_counts(db_path).values()) == {0}
        assert checked_out(app_database) == 0

    def test_invalid_row(self, client, db_path):
        response = upload(client, make_workbook([sheet_row(), sheet_row(PROGRAMA=None)]))

        assert response.status_code == 400
        assert response.json()["error"].startswith("Row 3 ")
        assert set(table_counts(db_path).values()) == {0}

    def test_out_of_range_date_is_400(self, client, db_path):
        response = upload(client, make_workbook([sheet_row(**{"FECHA INICIO": 3001234567})]))

        assert response.status_code == 400
        assert response.json() == {
            "error": "Row 2 is missing or has invalid values for: FECHA INICIO"
        }
        assert set(table_counts(db_path).values()) == {0}

    def test_success(self, client, app_database, db_path):
        rows = [
            sheet_row(),
            sheet_row(**{"APELLIDOS Y NOMBRES": "Ruiz Juan", "CORREO JEFE INMEDIATO": "juan.ruiz@uni.edu.co"}),
        ]

        response = upload(client, make_workbook(rows))

        assert response.status_code == 200
        assert response.json() == {"message": "File processed and imported into the database successfully."}
        counts = table_counts(db_path)
        assert counts["company"] == 1
        assert counts["internship"] == 2
        assert checked_out(app_database) == 0

    def test_failing_row_rolls_back_whole_file(self, client, app_database, db_path):
        rows = [
            sheet_row(**{"CORREO JEFE INMEDIATO": f"student{n}@uni.edu.co"}) for n in range(5)
        ]
        rows[2]["TOTAL DIAS EN PRACTICA"] = -1

        response = upload(client, make_workbook(rows))

        assert response.status_code == 500
        assert response.json() == {"error": "Error inserting into the database."}
        assert set(table_counts(db_path).values()) == {0}
        assert checked_out(app_database) == 0
