import pandas as pd
import pytest
from openpyxl import load_workbook

from admin_cascade.documents import CsvDocument, ExcelDocument, GridDocument, open_document
from admin_cascade.exceptions import DocumentAccessError

from conftest import read_workbook_rows, write_workbook


class TestGridDocument:
    def test_cells_are_one_based_and_out_of_range_reads_are_none(self):
        document = GridDocument({'s': [['a', 'b'], ['c']]})
        assert document.get_cell('s', 1, 2) == 'b'
        assert document.get_cell('s', 2, 2) is None
        assert document.get_cell('s', 5, 1) is None
        assert document.max_row('s') == 2
        assert document.max_column('s') == 2

    def test_set_cell_grows_the_grid(self):
        document = GridDocument({'s': []})
        document.set_cell('s', 3, 2, 'x')
        assert document.max_row('s') == 3
        assert document.rows('s') == [[None, None], [None, None], [None, 'x']]

    def test_header_row(self):
        document = GridDocument({'s': [['h1', None, 'h3'], ['v', 'v', 'v', 'v']]})
        assert document.header_row('s') == ['h1', None, 'h3', None]


class TestExcelDocument:
    def test_reads_every_sheet(self, tmp_path):
        path = write_workbook(tmp_path / 'in.xlsx', {'Admin0': [['h'], ['AA']], 'Admin1': [['h', 'k'], ['AA01', 5]]})
        with open_document(str(path), 'r') as document:
            assert isinstance(document, ExcelDocument)
            assert document.list_sheets() == ['Admin0', 'Admin1']
            assert document.get_cell('Admin1', 2, 1) == 'AA01'
            assert document.get_cell('Admin1', 2, 2) == 5
            assert document.max_row('Admin1') == 2
        assert document.closed

    def test_writes_and_saves_named_sheet(self, tmp_path):
        path = tmp_path / 'out.xlsx'
        with open_document(str(path), 'w', sheet_name='choices') as document:
            document.set_cell('choices', 1, 1, 'list_name')
            document.set_cell('choices', 3, 2, 'AA')
            document.save()
        assert read_workbook_rows(path, 'choices') == [('list_name', None), (None, None), (None, 'AA')]

    def test_formula_like_text_is_saved_as_text(self, tmp_path):
        path = tmp_path / 'out.xlsx'
        with open_document(str(path), 'w', sheet_name='choices') as document:
            document.set_cell('choices', 1, 1, '=HYPERLINK("x")')
            document.set_cell('choices', 1, 2, 7)
            document.save()

        workbook = load_workbook(path)
        cell = workbook['choices'].cell(row=1, column=1)
        assert cell.value == '=HYPERLINK("x")'
        assert cell.data_type == 's'
        assert workbook['choices'].cell(row=1, column=2).value == 7
        workbook.close()

    def test_control_characters_are_removed_on_save(self, tmp_path):
        path = tmp_path / 'out.xlsx'
        with open_document(str(path), 'w', sheet_name='choices') as document:
            document.set_cell('choices', 1, 1, 'bad\x01name')
            document.save()
        assert read_workbook_rows(path, 'choices') == [('badname',)]

    def test_unreadable_workbook(self, tmp_path):
        path = tmp_path / 'broken.xlsx'
        path.write_text('not a workbook')
        with pytest.raises(DocumentAccessError):
            with open_document(str(path), 'r'):
                pass

    def test_document_is_released_when_the_block_raises(self, tmp_path):
        path = write_workbook(tmp_path / 'in.xlsx', {'Admin0': [['h']]})
        with pytest.raises(RuntimeError):
            with open_document(str(path), 'r') as document:
                raise RuntimeError('boom')
        assert document.closed


class TestCsvDocument:
    def test_single_sheet_named_after_file(self, tmp_path):
        path = tmp_path / 'eth_adm2.csv'
        path.write_text('ADM0_PCODE,ADM1_PCODE\nET,ET01\n', encoding='utf-8')
        with open_document(str(path), 'r') as document:
            assert isinstance(document, CsvDocument)
            assert document.list_sheets() == ['eth_adm2']
            assert document.get_cell('eth_adm2', 2, 2) == 'ET01'

    def test_codes_keep_leading_zeros(self, tmp_path):
        path = tmp_path / 'adm1.csv'
        path.write_text('c0,c1\n01,0102\n', encoding='utf-8')
        with open_document(str(path), 'r') as document:
            assert document.get_cell('adm1', 2, 2) == '0102'

    def test_save_writes_first_row_as_header(self, tmp_path):
        path = tmp_path / 'out.csv'
        with open_document(str(path), 'w', sheet_name='choices') as document:
            document.set_cell('choices', 1, 1, 'list_name')
            document.set_cell('choices', 1, 2, 'name')
            document.set_cell('choices', 2, 1, 'ADM0')
            document.set_cell('choices', 2, 2, 'AA')
            document.save()
        df = pd.read_csv(path, dtype=str)
        assert list(df.columns) == ['list_name', 'name']
        assert df.iloc[0].tolist() == ['ADM0', 'AA']

    def test_empty_csv(self, tmp_path):
        path = tmp_path / 'empty.csv'
        path.write_text('')
        with pytest.raises(DocumentAccessError):
            CsvDocument.open_read(str(path))


def test_unsupported_suffix(tmp_path):
    with pytest.raises(DocumentAccessError):
        with open_document(str(tmp_path / 'data.ods'), 'r'):
            pass
