from app.formatting import CURRENCY_FORMAT, LIGHT_GREY, WHITE, header_requests, row_requests, summary_requests


def _format(request):
    return request["repeatCell"]["cell"]["userEnteredFormat"]


def test_rows_alternate_shading():
    even = row_requests(3, 2, 8, 4)
    odd = row_requests(3, 3, 8, 4)
    assert _format(even[0])["backgroundColor"] == LIGHT_GREY
    assert _format(odd[0])["backgroundColor"] == WHITE
    assert even[0]["repeatCell"]["range"] == {
        "sheetId": 3, "startRowIndex": 1, "endRowIndex": 2, "startColumnIndex": 0, "endColumnIndex": 8,
    }


def test_amount_cell_gets_currency_format():
    amount = row_requests(3, 5, 8, 4)[1]["repeatCell"]
    assert amount["range"]["startColumnIndex"] == 4
    assert amount["range"]["endColumnIndex"] == 5
    assert amount["cell"]["userEnteredFormat"] == {"numberFormat": CURRENCY_FORMAT}
    assert amount["fields"] == "userEnteredFormat.numberFormat"


def test_header_freezes_first_row():
    style, freeze = header_requests(9, 8)
    assert style["repeatCell"]["range"]["endColumnIndex"] == 8
    assert freeze["updateSheetProperties"]["properties"]["gridProperties"] == {"frozenRowCount": 1}


def test_summary_styles_title_and_grand_total():
    title, total = summary_requests(9, 100, 1000, 9)
    assert title["repeatCell"]["range"]["startRowIndex"] == 99
    assert total["repeatCell"]["range"]["startRowIndex"] == 999
    assert total["repeatCell"]["range"]["endColumnIndex"] == 11
    assert _format(total)["numberFormat"] == CURRENCY_FORMAT
