from io import BytesIO
from unittest.mock import call
from zipfile import ZipFile

from pytest import fixture, raises

from excel_xml_rows.errors import ExportClosedError, InvalidRowError
from excel_xml_rows.xlsx_export import XlsxExport


@fixture
def export():
    result = XlsxExport()

    yield result

    result.show()


class TestXlsxExport:
    def test_write(self, export, mocker):
        spy = mocker.spy(export.ws, 'write_string')

        export.set_row(["a", "b"])
        export.set_row(["c"])

        spy.assert_any_call(0, 0, 'a')
        spy.assert_any_call(0, 1, 'b')
        spy.assert_any_call(1, 0, 'c')
        assert spy.call_count == 3
        assert export.rows_num == 2

    def test_scalars_are_written_as_strings(self, export, mocker):
        spy = mocker.spy(export.ws, 'write_string')

        export.set_row([1, None, 2.5])

        spy.assert_any_call(0, 0, '1')
        spy.assert_any_call(0, 1, '')
        spy.assert_any_call(0, 2, '2.5')

    def test_show(self, export):
        export.set_row(["a"])

        result = export.show()

        assert result.startswith(b'PK')
        with ZipFile(BytesIO(result)) as zf:
            assert 'xl/worksheets/sheet1.xml' in zf.namelist()
            assert b'name="Table1"' in zf.read('xl/workbook.xml')

    def test_show_closes_once(self, export, mocker):
        spy = mocker.spy(export.wb, 'close')

        assert export.show() is export.show()
        assert spy.call_count == 1

    def test_worksheet_name(self):
        export = XlsxExport(worksheet_name="Report")

        with ZipFile(BytesIO(export.show())) as zf:
            assert b'name="Report"' in zf.read('xl/workbook.xml')

    def test_set_row_after_show(self, export):
        export.show()

        with raises(ExportClosedError, match="already been shown"):
            export.set_row(["late"])

    def test_invalid_row(self, export):
        with raises(InvalidRowError, match="got dict"):
            export.set_row({"a": 1})

    def test_string_too_long(self, export):
        with raises(InvalidRowError, match="longer than 32k characters") as exc:
            export.set_row(["ok", "x" * 40000])
        assert exc.value.cell_ref == "B1"

    def test_row_after_failed_row(self, export, mocker):
        spy = mocker.spy(export.ws, 'write_string')

        export.set_row(["ok"])
        with raises(InvalidRowError, match="longer than 32k characters"):
            export.set_row(["bad", "x" * 40000])
        export.set_row(["next"])

        assert spy.call_args_list == [call(0, 0, 'ok'), call(1, 0, 'next')]
        assert export.rows_num == 2

    def test_too_many_cells(self, export, mocker):
        spy = mocker.spy(export.ws, 'write_string')

        with raises(InvalidRowError, match="more than 16384 cells") as exc:
            export.set_row(["a"] * 16385)
        assert exc.value.col_num == 16385
        assert spy.call_count == 0
        assert export.rows_num == 0

    def test_character_not_allowed_in_xml(self, export, mocker):
        spy = mocker.spy(export.ws, 'write_string')

        with raises(InvalidRowError, match="not allowed in XML"):
            export.set_row(["ok", "\x0b"])
        assert spy.call_count == 0
