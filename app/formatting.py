# app/formatting.py
# batchUpdate request bodies for the cosmetic side of a ledger sheet.

CURRENCY_FORMAT = {"type": "CURRENCY", "pattern": '"₹"#,##0.00'}

WHITE = {"red": 1, "green": 1, "blue": 1}
LIGHT_GREY = {"red": 0.95, "green": 0.95, "blue": 0.95}
BORDER_GREY = {"red": 0.8, "green": 0.8, "blue": 0.8}
HEADER_BLUE = {"red": 0.2, "green": 0.4, "blue": 0.6}
SUMMARY_ORANGE = {"red": 0.8, "green": 0.4, "blue": 0.2}
TOTAL_YELLOW = {"red": 1, "green": 0.9, "blue": 0}


def _grid_range(sheet_id, start_row, end_row, start_col, end_col):
    return {
        "sheetId": sheet_id,
        "startRowIndex": start_row,
        "endRowIndex": end_row,
        "startColumnIndex": start_col,
        "endColumnIndex": end_col,
    }


def _repeat_cell(grid_range, cell_format, fields):
    return {
        "repeatCell": {
            "range": grid_range,
            "cell": {"userEnteredFormat": cell_format},
            "fields": fields,
        }
    }


def header_requests(sheet_id: int, columns: int) -> list:
    """Bold white-on-blue header row, frozen in place."""
    return [
        _repeat_cell(
            _grid_range(sheet_id, 0, 1, 0, columns),
            {
                "backgroundColor": HEADER_BLUE,
                "textFormat": {"bold": True, "fontSize": 12, "foregroundColor": WHITE},
                "horizontalAlignment": "CENTER",
            },
            "userEnteredFormat",
        ),
        {
            "updateSheetProperties": {
                "properties": {"sheetId": sheet_id, "gridProperties": {"frozenRowCount": 1}},
                "fields": "gridProperties.frozenRowCount",
            }
        },
    ]


def summary_requests(sheet_id: int, title_row: int, total_row: int, first_col: int) -> list:
    # rows are 1-based sheet rows, columns 0-based indexes
    return [
        _repeat_cell(
            _grid_range(sheet_id, title_row - 1, title_row, first_col, first_col + 2),
            {
                "backgroundColor": SUMMARY_ORANGE,
                "textFormat": {"bold": True, "fontSize": 14, "foregroundColor": WHITE},
                "horizontalAlignment": "CENTER",
            },
            "userEnteredFormat",
        ),
        _repeat_cell(
            _grid_range(sheet_id, total_row - 1, total_row, first_col, first_col + 2),
            {
                "backgroundColor": TOTAL_YELLOW,
                "textFormat": {"bold": True, "fontSize": 12},
                "horizontalAlignment": "RIGHT",
                "numberFormat": CURRENCY_FORMAT,
            },
            "userEnteredFormat",
        ),
    ]


def row_requests(sheet_id: int, row: int, columns: int, amount_col: int) -> list:
    """Alternating shading for a data row plus currency format on its amount cell."""
    shade = LIGHT_GREY if row % 2 == 0 else WHITE
    return [
        _repeat_cell(
            _grid_range(sheet_id, row - 1, row, 0, columns),
            {
                "backgroundColor": shade,
                "borders": {"bottom": {"style": "SOLID", "color": BORDER_GREY}},
            },
            "userEnteredFormat(backgroundColor,borders)",
        ),
        _repeat_cell(
            _grid_range(sheet_id, row - 1, row, amount_col, amount_col + 1),
            {"numberFormat": CURRENCY_FORMAT},
            "userEnteredFormat.numberFormat",
        ),
    ]
