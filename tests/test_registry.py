from pytest import raises

from excel_xml_rows import init_export, init_import
from excel_xml_rows.base import ExcelExport, ExcelImport
from excel_xml_rows.errors import ExcelXmlError, UnknownFormatError
from excel_xml_rows.xlsx_export import XlsxExport
from excel_xml_rows.xml_export import XmlExport
from excel_xml_rows.xml_import import XmlImport


class TestRegistry:
    def test_import(self):
        importer = init_import('xml')

        assert isinstance(importer, XmlImport)
        assert isinstance(importer, ExcelImport)

    def test_import_kwargs(self):
        assert init_import('xml', worksheet='Second').worksheet == 'Second'

    def test_export(self):
        assert isinstance(init_export('xml'), XmlExport)
        assert isinstance(init_export('xml'), ExcelExport)

    def test_xlsx_export(self):
        export = init_export('xlsx', worksheet_name='Report')

        assert isinstance(export, XlsxExport)
        assert export.worksheet_name == 'Report'
        export.show()

    def test_token_normalization(self):
        assert isinstance(init_import(' XML '), XmlImport)
        assert isinstance(init_export('Xml'), XmlExport)

    def test_unknown_import(self):
        with raises(UnknownFormatError, match="There is no importer for type 'csv', known types are: xml"):
            init_import('csv')

    def test_xlsx_import_is_unknown(self):
        with raises(LookupError):
            init_import('xlsx')

    def test_unknown_export(self):
        with raises(ExcelXmlError, match="known types are: xlsx, xml") as exc:
            init_export('ods')
        assert exc.value.value == 'ods'

    def test_pipeline(self):
        export = init_export('xml')
        export.set_row(['name', 'price'])
        export.set_row(['Widget', 9.5])

        importer = init_import('xml').load_string(export.show())

        assert [*importer] == [['name', 'price'], ['Widget', '9.5']]
