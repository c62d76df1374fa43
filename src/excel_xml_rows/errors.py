from pprint import pformat

from xlsxwriter.utility import xl_rowcol_to_cell


class ExcelXmlError(Exception):
    """Base excel-xml-rows error"""

    def __init__(self, message, row_num=None, col_num=None, element=None, value=None):
        super().__init__(message)
        self.message = message
        self.row_num = row_num
        self.col_num = col_num
        self.element = element
        self.value = value

    @property
    def cell_ref(self):
        """A1-style reference of the offending cell, if both coordinates are known."""
        if self.row_num is None or self.col_num is None:
            return None
        return xl_rowcol_to_cell(self.row_num - 1, self.col_num - 1)

    def __str__(self):
        segments = []
        if self.row_num is not None:
            segments.append(f"Row num: {self.row_num}")
        if self.col_num is not None:
            segments.append(f"Column num: {self.col_num}")
        if self.cell_ref is not None:
            segments.append(f"Cell: {self.cell_ref}")
        if self.element is not None:
            segments.append(f"Element: {self.element}")
        if self.value is not None:
            segments.append(f"Offending value: {pformat(self.value)}")
        additional_info = "\n".join(segments)

        full_message = [self.message]
        if additional_info:
            full_message.append(f"Additional info:\n{additional_info}")

        return "\n".join(full_message)


class MalformedDocumentError(ExcelXmlError):
    """The input could not be parsed as well-formed XML."""

    def __init__(self, message, line=None, column=None):
        super().__init__(message)
        self.line = line
        self.column = column


class StructureError(ExcelXmlError):
    """The Workbook/Worksheet/Table/Row hierarchy is missing or inconsistent."""


class RowOutOfRangeError(ExcelXmlError, IndexError):
    """A row number outside of `[1, rows_num]` was requested."""

    def __init__(self, message, row_num, rows_num):
        super().__init__(message, row_num=row_num)
        self.rows_num = rows_num


class InvalidRowError(ExcelXmlError, TypeError):
    """An exporter was given something that is not a flat sequence of scalar cells."""


class UnknownFormatError(ExcelXmlError, LookupError):
    """No importer or exporter is registered under the requested type token."""


class ExportClosedError(ExcelXmlError):
    """A row was appended to an exporter whose output has already been produced."""
