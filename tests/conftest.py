import sys
from pathlib import Path

import pytest
from openpyxl import Workbook, load_workbook

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from admin_cascade.documents import GridDocument  # noqa: E402


SCENARIO_HEADERS = ['Admin0Name_en', 'Admin0Pcode', 'Admin1Name_en', 'Admin1Pcode']
SCENARIO_ROWS = [
    ['Country A', 'AA', 'District 1', 'AA01'],
    ['Country A', 'AA', 'District 1', 'AA01'],
    ['Country A', 'AA', 'District 2', 'AA02'],
]

HDX_HEADERS = [
    'ADM2_EN', 'ADM2_FR', 'ADM2_PCODE', 'ADM2_REF', 'ADM2ALT1EN',
    'ADM1_EN', 'ADM1_FR', 'ADM1_PCODE',
    'ADM0_EN', 'ADM0_FR', 'ADM0_PCODE', 'validOn',
]
HDX_ROWS = [
    ['Ward A', 'Quartier A', 'XX0101', 'ref a', 'alt a', 'North', 'Nord', 'XX01', 'Xland', 'Xpays', 'XX', '2020-01-01'],
    ['Ward B', 'Quartier B', 'XX0102', 'ref b', 'alt b', 'North', 'Nord', 'XX01', 'Xland', 'Xpays', 'XX', '2020-01-01'],
    ['Ward C', 'Quartier C', 'XX0201', 'ref c', 'alt c', 'South', 'Sud', 'XX02', 'Xland', 'Xpays', 'XX', '2020-01-01'],
    ['Ward C bis', 'Quartier C bis', 'XX0201', 'ref c', 'alt c', 'South', 'Sud', 'XX02', 'Xland', 'Xpays', 'XX', '2020-01-01'],
]


def write_workbook(path, sheets):
    """Write a dict of sheet name -> rows to an xlsx file."""
    workbook = Workbook()
    workbook.remove(workbook.active)
    for name, rows in sheets.items():
        worksheet = workbook.create_sheet(title=name)
        for row in rows:
            worksheet.append(row)
    workbook.save(path)
    return path


def read_workbook_rows(path, sheet=None):
    """Read every row of a sheet as a tuple of values."""
    workbook = load_workbook(path)
    worksheet = workbook[sheet] if sheet else workbook.active
    rows = [tuple(row) for row in worksheet.iter_rows(values_only=True)]
    workbook.close()
    return rows


@pytest.fixture
def scenario_sheets():
    return {
        'Admin0': [['Admin0Name_en', 'Admin0Pcode'], ['Country A', 'AA']],
        'Admin1': [SCENARIO_HEADERS] + SCENARIO_ROWS,
    }


@pytest.fixture
def scenario_document(scenario_sheets):
    return GridDocument(scenario_sheets)


@pytest.fixture
def scenario_workbook(tmp_path, scenario_sheets):
    return write_workbook(tmp_path / 'boundaries.xlsx', scenario_sheets)


@pytest.fixture
def hdx_sheets():
    return {
        'xx_adm0': [['ADM0_EN', 'ADM0_FR', 'ADM0_PCODE'], ['Xland', 'Xpays', 'XX']],
        'xx_adm1': [['ADM1_EN', 'ADM1_FR', 'ADM1_PCODE', 'ADM0_EN', 'ADM0_PCODE']],
        'xx_adm2': [HDX_HEADERS] + HDX_ROWS,
        'README': [['notes']],
    }


@pytest.fixture
def hdx_document(hdx_sheets):
    return GridDocument(hdx_sheets)
