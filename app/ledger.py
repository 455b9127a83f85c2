# app/ledger.py
import dataclasses
import threading
from collections import defaultdict
from dataclasses import dataclass
from typing import Optional

from googleapiclient.errors import HttpError

from .formatting import header_requests, row_requests, summary_requests
from .logging_config import logger
from .model import PaymentRequest
from .sheets import RAW, USER_ENTERED, a1

TOTAL_COLUMNS = 26  # A to Z
MIN_ROWS = 1000
ROW_GROWTH = 1000

HEADERS = ["Date", "Channel Type", "User Name", "UPI ID", "Amount", "Status", "Daily Total", "Remarks"]
DATA_COLUMNS = len(HEADERS)
AMOUNT_COL = 4       # E
DAILY_TOTAL_COL = 6  # G

# Summary block lives in J:K
SUMMARY_COL = 9
SUMMARY_START_ROW = 100
SUMMARY_HEADER_ROW = SUMMARY_START_ROW + 1
SUMMARY_SPACER_ROW = SUMMARY_START_ROW + 2
SUMMARY_FIRST_ENTRY_ROW = SUMMARY_HEADER_ROW + 2
SUMMARY_LAST_ENTRY_ROW = 999
GRAND_TOTAL_ROW = 1000

UNFORMATTED = "UNFORMATTED_VALUE"

MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def ledger_name(day) -> str:
    return f"{MONTH_ABBR[day.month - 1]}-{day.year:04d}"


def format_date(day) -> str:
    return f"{day.day:02d}-{day.month:02d}-{day.year:04d}"


def month_title(day) -> str:
    return f"{MONTH_NAMES[day.month - 1]} {day.year:04d}"


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_amount(value) -> Optional[float]:
    """Read an amount cell, tolerating a rupee sign and thousands separators."""
    if _is_blank(value):
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    text = str(value).replace("₹", "").replace(",", "").strip()
    try:
        return float(text)
    except ValueError:
        logger.debug(f"Skipping unparseable amount {value!r}")
        return None


@dataclass(frozen=True)
class LedgerSheet:
    title: str
    sheet_id: int
    row_count: int
    column_count: int


class LedgerWriter:
    """Writes payments into monthly ledger sheets of one spreadsheet.

    Saves are serialised per ledger inside this process: the next-row lookup
    and the summary rewrite are both read-then-write sequences.
    """

    def __init__(self, backend, apply_formatting: bool = True):
        self.backend = backend
        self.apply_formatting = apply_formatting
        self._locks = defaultdict(threading.Lock)
        self._locks_guard = threading.Lock()

    def _lock_for(self, title: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks[title]

    def save_payment(self, payment: PaymentRequest) -> LedgerSheet:
        with self._lock_for(ledger_name(payment.date)):
            ledger = self.resolve_ledger(payment.date)
            ledger, _ = self.append_payment(ledger, payment)
            total = self.update_daily_total(ledger, payment.date)
            if total is not None:
                self.upsert_summary(ledger, format_date(payment.date), total)
        return ledger

    # Ledger resolution

    def resolve_ledger(self, day) -> LedgerSheet:
        title = ledger_name(day)
        props = self._find_sheet(title)
        if props is None:
            return self._create_ledger(title, day)

        grid = props.get("gridProperties", {})
        ledger = LedgerSheet(
            title=title,
            sheet_id=props["sheetId"],
            row_count=grid.get("rowCount", 0),
            column_count=grid.get("columnCount", 0),
        )
        if ledger.column_count < TOTAL_COLUMNS or ledger.row_count < MIN_ROWS:
            ledger = self._widen(ledger)
        self._initialize_summary_if_needed(ledger, day)
        return ledger

    def _find_sheet(self, title: str) -> Optional[dict]:
        for props in self.backend.get_sheet_properties():
            if props.get("title") == title:
                return props
        return None

    def _create_ledger(self, title: str, day) -> LedgerSheet:
        response = self.backend.batch_update([{
            "addSheet": {
                "properties": {
                    "title": title,
                    "gridProperties": {"rowCount": MIN_ROWS, "columnCount": TOTAL_COLUMNS},
                }
            }
        }])
        sheet_id = response["replies"][0]["addSheet"]["properties"]["sheetId"]
        ledger = LedgerSheet(title=title, sheet_id=sheet_id, row_count=MIN_ROWS, column_count=TOTAL_COLUMNS)
        logger.info(f"Created ledger sheet '{title}'")

        self.backend.update_values(a1(title, "A1:H1"), [HEADERS], RAW)
        if self.apply_formatting:
            self.backend.batch_update(header_requests(sheet_id, DATA_COLUMNS))

        self._initialize_summary(ledger, day)
        return ledger

    def _widen(self, ledger: LedgerSheet) -> LedgerSheet:
        widened = dataclasses.replace(
            ledger,
            row_count=max(ledger.row_count, MIN_ROWS),
            column_count=max(ledger.column_count, TOTAL_COLUMNS),
        )
        self.backend.batch_update([{
            "updateSheetProperties": {
                "properties": {
                    "sheetId": ledger.sheet_id,
                    "gridProperties": {"rowCount": widened.row_count, "columnCount": widened.column_count},
                },
                "fields": "gridProperties.rowCount,gridProperties.columnCount",
            }
        }])
        logger.info(
            f"Resized ledger '{ledger.title}' grid to {widened.row_count} rows x {widened.column_count} columns"
        )
        return widened

    def _initialize_summary_if_needed(self, ledger: LedgerSheet, day) -> None:
        try:
            header = self.backend.get_values(a1(ledger.title, f"J{SUMMARY_HEADER_ROW}"))
        except HttpError as e:
            logger.warning(f"Summary probe on '{ledger.title}' failed, treating it as missing: {e}")
            header = []

        if header and header[0] and not _is_blank(header[0][0]):
            return
        self._initialize_summary(ledger, day)

    def _initialize_summary(self, ledger: LedgerSheet, day) -> None:
        first, last = SUMMARY_FIRST_ENTRY_ROW, SUMMARY_LAST_ENTRY_ROW
        self.backend.batch_update_values([
            (
                a1(ledger.title, f"J{SUMMARY_START_ROW}:K{SUMMARY_SPACER_ROW}"),
                [
                    [f"Monthly Summary for {month_title(day)}", ""],
                    ["Date", "Total Amount"],
                    ["", ""],
                ],
            ),
            (
                a1(ledger.title, f"J{GRAND_TOTAL_ROW}:K{GRAND_TOTAL_ROW}"),
                [["Grand Total:", f"=SUM(K{first}:K{last})"]],
            ),
        ], USER_ENTERED)

        if self.apply_formatting:
            self.backend.batch_update(
                summary_requests(ledger.sheet_id, SUMMARY_START_ROW, GRAND_TOTAL_ROW, SUMMARY_COL)
            )
        logger.info(f"Initialised summary block on '{ledger.title}'")

    # Row append

    def append_payment(self, ledger: LedgerSheet, payment: PaymentRequest):
        """Write the payment on the row after the last filled cell of column A.

        Returns the (possibly grown) ledger and the 1-based row written.
        """
        column = self.backend.get_values(a1(ledger.title, "A:A"))
        row = max(len(column) + 1, 2)
        if row > ledger.row_count:
            ledger = self._grow_rows(ledger)

        values = [
            format_date(payment.date),
            payment.channel_type,
            payment.user_name,
            payment.upi_id,
            payment.amount,
            payment.status,
            "",  # Daily Total
            "",  # Remarks
        ]
        self.backend.update_values(a1(ledger.title, f"A{row}:H{row}"), [values], RAW)

        if self.apply_formatting:
            self.backend.batch_update(row_requests(ledger.sheet_id, row, DATA_COLUMNS, AMOUNT_COL))

        logger.info(f"Stored payment of {payment.amount} from {payment.user_name} in '{ledger.title}' row {row}")
        return ledger, row

    def _grow_rows(self, ledger: LedgerSheet) -> LedgerSheet:
        self.backend.batch_update([{
            "appendDimension": {"sheetId": ledger.sheet_id, "dimension": "ROWS", "length": ROW_GROWTH}
        }])
        logger.info(f"Appended {ROW_GROWTH} rows to ledger '{ledger.title}'")
        return dataclasses.replace(ledger, row_count=ledger.row_count + ROW_GROWTH)

    # Daily total

    def update_daily_total(self, ledger: LedgerSheet, day) -> Optional[float]:
        """Recompute the total for ``day`` and place it on its last row.

        Returns the total, or None when there is nothing positive to report.
        """
        target = format_date(day)
        rows = self.backend.get_values(a1(ledger.title, "A:H"), UNFORMATTED)

        total = 0.0
        last_row = None
        rows_with_total = []
        for row_number, row in enumerate(rows[1:], start=2):
            if not row or row[0] != target:
                continue
            if len(row) > AMOUNT_COL:
                amount = parse_amount(row[AMOUNT_COL])
                if amount is not None:
                    total += amount
            if len(row) > DAILY_TOTAL_COL and not _is_blank(row[DAILY_TOTAL_COL]):
                rows_with_total.append(row_number)
            last_row = row_number

        if last_row is None or total <= 0:
            logger.info(f"No positive total for {target} in '{ledger.title}', skipping")
            return None

        data = [(a1(ledger.title, f"G{last_row}"), [[total]])]
        data += [(a1(ledger.title, f"G{n}"), [[""]]) for n in rows_with_total if n != last_row]
        self.backend.batch_update_values(data, RAW)
        logger.info(f"Daily total for {target} in '{ledger.title}' is {total} (row {last_row})")
        return total

    # Summary

    def upsert_summary(self, ledger: LedgerSheet, date_text: str, total: float) -> list:
        """Replace or append the (date, total) entry and rewrite the list."""
        first = SUMMARY_FIRST_ENTRY_ROW
        rows = self.backend.get_values(
            a1(ledger.title, f"J{first}:K{SUMMARY_LAST_ENTRY_ROW}"), UNFORMATTED
        )

        entries = []
        found = False
        for row in rows:
            if not row or _is_blank(row[0]):
                break
            if str(row[0]) == date_text:
                entries.append([date_text, total])
                found = True
            else:
                entries.append((list(row) + ["", ""])[:2])

        if not found:
            entries.append([date_text, total])

        end = first + len(entries) - 1
        self.backend.update_values(a1(ledger.title, f"J{first}:K{end}"), entries, RAW)
        return entries
