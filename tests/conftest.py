import csv

import matplotlib

matplotlib.use("Agg")

import pytest  # noqa: E402

HEADERS = [
    "ID",
    "Fecha Registro",
    "Cliente",
    "Fechas",
    "Dist. Eco Recojo [Km]",
    "Dist. Eco Entrega [Km]",
    "Dist. [Km]",
    "Medio Transporte",
    "Precio [Bs]",
    "Dia de la semana",
]

ROWS = [
    ["R1", "01/12/2025", "Ana", "02/12/2025", "0,3", "4,5", "4,8", "Bicicleta", "15", "Martes"],
    ["R2", "01/12/2025", "Luis", "02/12/2025", "2,0", "3,0", "5,0", "Moto", "20", "Martes"],
    ["R3", "02/12/2025", "Ana", "03/12/2025", "ERROR", "6,0", "6,5", "Bicicleta", "25", "Miércoles"],
    ["R4", "03/12/2025", "Carla", "05/12/2025", "1,0", "", "ERROR", "Bicicleta", "", "Viernes"],
    ["R5", "28/11/2025", "Luis", "29/11/2025", "0,8", "2,2", "3,0", "Moto", "30", "Sábado"],
]


@pytest.fixture
def ledger_rows():
    """Ledger rows as exported from the sheet: four December rides, one in November."""
    return [dict(zip(HEADERS, row)) for row in ROWS]


@pytest.fixture
def ledger_csv(tmp_path):
    """The same ledger rows written as a CSV export."""
    path = tmp_path / "rides.csv"
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(HEADERS)
        writer.writerows(ROWS)
    return path
