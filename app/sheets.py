# app/sheets.py
from google.oauth2.service_account import Credentials
from googleapiclient.discovery import build

from .config import SCOPES, load_service_account_info
from .logging_config import logger

RAW = "RAW"
USER_ENTERED = "USER_ENTERED"


def get_sheets_service():
    creds = Credentials.from_service_account_info(load_service_account_info(), scopes=SCOPES)
    service = build("sheets", "v4", credentials=creds, cache_discovery=False)
    logger.info("Google Sheets service initialised")
    return service


def a1(sheet_title: str, cells: str) -> str:
    """Qualify a cell range with a quoted sheet title, e.g. 'Mar-2025'!A1:H1."""
    escaped = sheet_title.replace("'", "''")
    return f"'{escaped}'!{cells}"


class SheetsBackend:
    """Thin wrapper over one spreadsheet document.

    Every method is a single blocking round trip; HttpError from the client
    library is not caught here.
    """

    def __init__(self, service, spreadsheet_id: str):
        self.service = service
        self.spreadsheet_id = spreadsheet_id

    def get_sheet_properties(self) -> list:
        spreadsheet = self.service.spreadsheets().get(
            spreadsheetId=self.spreadsheet_id,
            fields="sheets.properties",
        ).execute()
        return [sheet["properties"] for sheet in spreadsheet.get("sheets", [])]

    def batch_update(self, requests: list) -> dict:
        return self.service.spreadsheets().batchUpdate(
            spreadsheetId=self.spreadsheet_id,
            body={"requests": requests},
        ).execute()

    def get_values(self, range_name: str, value_render_option: str = "FORMATTED_VALUE") -> list:
        response = self.service.spreadsheets().values().get(
            spreadsheetId=self.spreadsheet_id,
            range=range_name,
            valueRenderOption=value_render_option,
        ).execute()
        return response.get("values", [])

    def update_values(self, range_name: str, values: list, value_input_option: str = RAW) -> dict:
        return self.service.spreadsheets().values().update(
            spreadsheetId=self.spreadsheet_id,
            range=range_name,
            valueInputOption=value_input_option,
            body={"values": values},
        ).execute()

    def batch_update_values(self, data: list, value_input_option: str = RAW) -> dict:
        """Write several ranges at once; ``data`` is a list of (range, values) pairs."""
        return self.service.spreadsheets().values().batchUpdate(
            spreadsheetId=self.spreadsheet_id,
            body={
                "valueInputOption": value_input_option,
                "data": [{"range": range_name, "values": values} for range_name, values in data],
            },
        ).execute()
